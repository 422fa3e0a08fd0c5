"""
Text formatting helpers shared by the composer and the renderer.

- Date values per the theme's date format (short, long, numeric)
- Heading transforms (none, uppercase, lowercase, capitalize, first-capital)
- Contact entries built from personal fields, contact info and social links
"""

import re
from dataclasses import dataclass, replace
from datetime import datetime
from typing import List, Optional, Tuple

from scholarcv.utils.text_processing import ensure_protocol, humanize_label, is_likely_url

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

ISO_YEAR_MONTH = re.compile(r"^(\d{4})(?:-(\d{1,2}))?(?:-(\d{1,2}))?$")

PRESENT = "Present"

# Unicode glyphs standing in for icons, keyed by contact type
CONTACT_ICONS = {
    "email": "✉",
    "mail": "✉",
    "phone": "☎",
    "mobile": "☎",
    "whatsapp": "✆",
    "telegram": "➤",
    "location": "⌖",
    "address": "⌖",
    "website": "⌂",
    "portfolio": "⌂",
    "linkedin": "in",
    "github": "⌥",
    "twitter": "✕",
    "x": "✕",
    "researchgate": "❡",
    "googlescholar": "❡",
    "google_scholar": "❡",
    "scholar": "❡",
    "orcid": "✓",
    "personal": "☺",
}
DEFAULT_CONTACT_ICON = "⛓"

PRIMARY_CONTACT_SLOTS = 4


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a stored date string.

    Accepts "YYYY", "YYYY-MM", "YYYY-MM-DD" and full ISO-8601 timestamps.

    Returns:
        datetime, or None when the value is empty or unparseable
    """
    if not value:
        return None
    text = str(value).strip()
    match = ISO_YEAR_MONTH.match(text)
    if match:
        year, month, day = match.groups()
        try:
            return datetime(int(year), int(month or 1), int(day or 1))
        except ValueError:
            return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_date(value: Optional[str], date_format: str = "short") -> str:
    """
    Format a stored date for display.

    Args:
        value: Stored date string
        date_format: "short" (Jan 2024), "long" (January 2024) or "numeric" (01/2024)

    Returns:
        Formatted date; unparseable strings pass through unchanged, empty values give ""

    Examples:
        >>> format_date("2024-01-15", "numeric")
        '01/2024'
        >>> format_date("Spring 2020")
        'Spring 2020'
    """
    if not value:
        return ""
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    if date_format == "numeric":
        return f"{parsed.month:02d}/{parsed.year}"
    month = MONTH_NAMES[parsed.month - 1]
    if date_format == "long":
        return f"{month} {parsed.year}"
    return f"{month[:3]} {parsed.year}"


def format_date_range(
    start: Optional[str], end: Optional[str], is_current: bool = False, date_format: str = "short"
) -> str:
    """Join start and end (or "Present") with " - ", skipping empty parts."""
    parts = [format_date(start, date_format), PRESENT if is_current else format_date(end, date_format)]
    return " - ".join(part for part in parts if part)


def transform_heading(text: str, mode: str = "uppercase") -> str:
    """
    Apply a heading transform.

    "capitalize" title-cases every word; "first-capital" upper-cases only the
    first character and lower-cases the rest. Unknown modes leave text as is.
    """
    if mode == "uppercase":
        return text.upper()
    if mode == "lowercase":
        return text.lower()
    if mode == "capitalize":
        return re.sub(r"\b\w", lambda m: m.group(0).upper(), text.lower())
    if mode == "first-capital":
        return text[:1].upper() + text[1:].lower()
    return text


@dataclass(frozen=True)
class ContactEntry:
    key: str
    label: str
    value: str
    icon: str
    href: Optional[str] = None
    is_external: bool = False
    is_primary: bool = False


def contact_icon(kind: Optional[str]) -> str:
    if not kind:
        return DEFAULT_CONTACT_ICON
    return CONTACT_ICONS.get(kind.lower(), DEFAULT_CONTACT_ICON)


def _contact_label(label: Optional[str], kind: Optional[str]) -> str:
    if label:
        return label.strip()
    if kind:
        return humanize_label(kind)
    return "Contact"


def build_contact_entries(cv) -> Tuple[List[ContactEntry], List[ContactEntry]]:
    """
    Build the header's contact entries.

    Personal fields come first, then contact info rows, then social links.
    Entries with blank values are dropped; duplicates (same label and value,
    case-insensitive) keep their first occurrence; primary entries move to the
    front with a stable sort.

    Args:
        cv: CVDocument

    Returns:
        (cards, chips): the first four entries and the rest
    """
    entries: List[ContactEntry] = []

    if cv.email:
        emails = [e.strip() for e in re.split(r"[,;]", cv.email) if e.strip()]
        if emails:
            entries.append(
                ContactEntry(
                    key="email",
                    label="Email",
                    value="\n".join(emails),
                    icon=CONTACT_ICONS["email"],
                    href=f"mailto:{emails[0]}" if len(emails) == 1 else None,
                    is_primary=True,
                )
            )
    if cv.phone:
        entries.append(
            ContactEntry("phone", "Phone", cv.phone, CONTACT_ICONS["phone"], href=f"tel:{cv.phone}", is_primary=True)
        )
    if cv.location:
        entries.append(ContactEntry("location", "Location", cv.location, CONTACT_ICONS["location"]))

    for key, label, value in (
        ("website", "Website", cv.website),
        ("linkedin", "LinkedIn", cv.linkedin),
        ("github", "GitHub", cv.github),
        ("google_scholar", "Google Scholar", cv.google_scholar),
        ("twitter", "Twitter", cv.twitter),
    ):
        if value:
            entries.append(
                ContactEntry(key, label, value, CONTACT_ICONS[key], href=ensure_protocol(value), is_external=True)
            )

    for info in cv.contact_info:
        kind = (info.type or "").lower() or None
        value = info.value or ""
        label = _contact_label(info.label, info.type)
        href = None
        if value and kind == "email":
            href = f"mailto:{value}"
        elif value and kind in ("phone", "mobile"):
            href = f"tel:{value}"
        elif is_likely_url(value):
            href = ensure_protocol(value)
        entries.append(
            ContactEntry(
                key=info.id,
                label=label,
                value=value,
                icon=contact_icon(kind or label),
                href=href,
                is_external=bool(href and href.startswith("http")),
                is_primary=info.is_primary,
            )
        )

    for link in cv.social_links:
        platform = (link.platform or "").lower()
        label = _contact_label(link.label, platform or None)
        entries.append(
            ContactEntry(
                key=link.id,
                label=label,
                value=link.url or "",
                icon=contact_icon(platform or label),
                href=ensure_protocol(link.url),
                is_external=True,
            )
        )

    deduped: List[ContactEntry] = []
    seen = set()
    for entry in entries:
        value = entry.value.strip()
        if not value:
            continue
        unique_key = f"{entry.label}|{value}".lower()
        if unique_key in seen:
            continue
        seen.add(unique_key)
        deduped.append(replace(entry, value=value))

    deduped.sort(key=lambda e: not e.is_primary)
    return deduped[:PRIMARY_CONTACT_SLOTS], deduped[PRIMARY_CONTACT_SLOTS:]
