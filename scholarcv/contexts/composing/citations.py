"""
Citation formatting for publication entries.

Supported styles: APA, IEEE, MLA, Chicago, Harvard, Vancouver. Unknown styles
fall back to a plain "Authors (Year). Title. Venue, Volume, Pages." form.
"""

from typing import Optional

CITATION_STYLES = ("APA", "IEEE", "MLA", "Chicago", "Harvard", "Vancouver")


def _s(value: Optional[str]) -> str:
    return value or ""


def format_citation(pub, style: str = "APA") -> str:
    """
    Format a publication as a single citation string.

    Args:
        pub: Publication entity (authors, title, year, journal/conference,
             volume, number, pages, doi)
        style: Citation style name (case-sensitive, as stored on the CV)

    Returns:
        Citation text, stripped of surrounding whitespace

    Example:
        >>> format_citation(pub, "IEEE")
        'A. Author, "Title," Journal, vol. 3, no. 2, pp. 1-9, 2024.'
    """
    authors = _s(pub.authors)
    title = _s(pub.title)
    year = _s(pub.year)
    venue = _s(pub.journal) or _s(pub.conference)
    volume = _s(pub.volume)
    number = _s(pub.number)
    pages = _s(pub.pages)
    doi = _s(pub.doi)

    if style == "APA":
        source = ""
        if venue:
            source = venue + (f", {volume}" if volume else "") + (f"({number})" if number else "")
            source += f", {pages}" if pages else ""
        citation = f"{authors}{f' ({year})' if year else ''}. {title}. {source}"
        citation += f". https://doi.org/{doi}" if doi else ""
        return citation.strip()

    if style == "IEEE":
        source = ""
        if venue:
            source = venue + (f", vol. {volume}" if volume else "") + (f", no. {number}" if number else "")
            source += f", pp. {pages}" if pages else ""
        return f'{authors}, "{title}," {source}{f", {year}" if year else ""}.'.strip()

    if style == "MLA":
        source = venue + (f" {volume}" if volume else "") + (f".{number}" if number else "") if venue else ""
        return f'{authors}. "{title}." {source}{f" ({year})" if year else ""}{f": {pages}" if pages else ""}.'.strip()

    if style == "Chicago":
        source = venue + (f" {volume}" if volume else "") + (f", no. {number}" if number else "") if venue else ""
        return f'{authors}. "{title}." {source}{f" ({year})" if year else ""}{f": {pages}" if pages else ""}.'.strip()

    if style == "Harvard":
        source = venue + (f", {volume}" if volume else "") + (f"({number})" if number else "") if venue else ""
        return f"{authors}{f' ({year})' if year else ''} '{title}', {source}{f', pp. {pages}' if pages else ''}.".strip()

    if style == "Vancouver":
        tail = year + (f";{volume}" if volume else "") + (f"({number})" if number else "")
        tail += f":{pages}" if pages else ""
        return f"{authors}. {title}. {f'{venue}. ' if venue else ''}{tail}.".strip()

    return f"{authors}{f' ({year})' if year else ''}. {title}. {venue}{f', {volume}' if volume else ''}{f', {pages}' if pages else ''}.".strip()


def format_publication_number(index: int, publication_type: Optional[str] = None, grouped: bool = False) -> str:
    """
    Publication label: "[3]", or "[J3]" / "[C3]" when grouped by type.

    Args:
        index: Zero-based position within the (group's) list
        publication_type: "journal", "conference" or None
        grouped: Prefix with J/C for journal/conference papers
    """
    if grouped:
        prefix = {"journal": "J", "conference": "C"}.get(publication_type or "", "")
        return f"[{prefix}{index + 1}]"
    return f"[{index + 1}]"
