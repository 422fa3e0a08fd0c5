"""Unit tests for publication citation formatting."""

import pytest

from scholarcv.contexts.composing import CITATION_STYLES, format_citation, format_publication_number
from scholarcv.contexts.composing.cv_document import Publication

PUB = Publication(
    authors="Doe J",
    title="Deep Learning",
    year="2024",
    journal="Nature",
    volume="5",
    number="2",
    pages="1-10",
    doi="10.1/abc",
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "style,expected",
    [
        ("APA", "Doe J (2024). Deep Learning. Nature, 5(2), 1-10. https://doi.org/10.1/abc"),
        ("IEEE", 'Doe J, "Deep Learning," Nature, vol. 5, no. 2, pp. 1-10, 2024.'),
        ("MLA", 'Doe J. "Deep Learning." Nature 5.2 (2024): 1-10.'),
        ("Chicago", 'Doe J. "Deep Learning." Nature 5, no. 2 (2024): 1-10.'),
        ("Harvard", "Doe J (2024) 'Deep Learning', Nature, 5(2), pp. 1-10."),
        ("Vancouver", "Doe J. Deep Learning. Nature. 2024;5(2):1-10."),
        ("Unknown", "Doe J (2024). Deep Learning. Nature, 5, 1-10."),
    ],
)
def test_format_citation_styles(style, expected):
    """Test each citation style on a fully populated journal article."""
    assert format_citation(PUB, style) == expected


@pytest.mark.unit
def test_format_citation_conference_without_optional_fields():
    """Test that missing venue details are skipped."""
    pub = Publication(authors="Roe R", title="Fast Things", year="2021", conference="ICML")

    assert format_citation(pub, "APA") == "Roe R (2021). Fast Things. ICML"
    assert format_citation(pub, "IEEE") == 'Roe R, "Fast Things," ICML, 2021.'


@pytest.mark.unit
def test_citation_styles_listed():
    """Test the supported style names."""
    assert CITATION_STYLES == ("APA", "IEEE", "MLA", "Chicago", "Harvard", "Vancouver")


@pytest.mark.unit
def test_format_publication_number():
    """Test plain and grouped publication labels."""
    assert format_publication_number(0) == "[1]"
    assert format_publication_number(2, "journal", grouped=True) == "[J3]"
    assert format_publication_number(0, "conference", grouped=True) == "[C1]"
    assert format_publication_number(4, "book", grouped=True) == "[5]"
