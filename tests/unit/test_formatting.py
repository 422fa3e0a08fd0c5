"""Unit tests for date, heading, and contact formatting."""

import pytest

from scholarcv.contexts.composing import (
    CVDocument,
    build_contact_entries,
    format_date,
    format_date_range,
    transform_heading,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,date_format,expected",
    [
        ("2024-01-15", "short", "Jan 2024"),
        ("2024-01-15", "long", "January 2024"),
        ("2024-01-15", "numeric", "01/2024"),
        ("2023-09", "short", "Sep 2023"),
        ("2023-09-01T00:00:00Z", "long", "September 2023"),
        ("Spring 2020", "short", "Spring 2020"),
        ("2024-13", "short", "2024-13"),
        (None, "short", ""),
        ("", "long", ""),
    ],
)
def test_format_date(value, date_format, expected):
    """Test date formats and pass-through of unparseable values."""
    assert format_date(value, date_format) == expected


@pytest.mark.unit
def test_format_date_range():
    """Test joining start and end dates, with Present for current entries."""
    assert format_date_range("2020-03", "2021-06") == "Mar 2020 - Jun 2021"
    assert format_date_range("2020-03", "2021-06", is_current=True) == "Mar 2020 - Present"
    assert format_date_range(None, "2021-06") == "Jun 2021"
    assert format_date_range("2020-03", None) == "Mar 2020"
    assert format_date_range(None, None) == ""


@pytest.mark.unit
@pytest.mark.parametrize(
    "mode,expected",
    [
        ("uppercase", "WORK EXPERIENCE"),
        ("lowercase", "work experience"),
        ("capitalize", "Work Experience"),
        ("first-capital", "Work experience"),
        ("none", "work EXPERIENCE"),
    ],
)
def test_transform_heading(mode, expected):
    """Test every heading transform mode."""
    assert transform_heading("work EXPERIENCE", mode) == expected


def contact_cv():
    return CVDocument.from_dict(
        {
            "email": "a@example.com; b@example.com",
            "phone": "+1 555 0100",
            "location": "Berlin",
            "website": "example.com",
            "github": "github.com/me",
            "contactInfo": [
                {"type": "website", "label": "Website", "value": "EXAMPLE.com"},
                {"type": "orcid", "value": "0000-0001", "isPrimary": True},
                {"type": "phone", "value": "   "},
            ],
            "socialLinks": [{"platform": "twitter", "url": "twitter.com/me"}],
        }
    )


@pytest.mark.unit
def test_contact_entries_order_and_split():
    """Test primary-first ordering and the four-card split."""
    cards, chips = build_contact_entries(contact_cv())

    assert [c.label for c in cards] == ["Email", "Phone", "Orcid", "Location"]
    assert [c.label for c in chips] == ["Website", "GitHub", "Twitter"]


@pytest.mark.unit
def test_contact_entries_links():
    """Test hrefs for email, phone, and URL entries."""
    cards, chips = build_contact_entries(contact_cv())
    by_label = {entry.label: entry for entry in cards + chips}

    # Several emails: one card, no mailto link
    assert by_label["Email"].value == "a@example.com\nb@example.com"
    assert by_label["Email"].href is None
    assert by_label["Phone"].href == "tel:+1 555 0100"
    assert by_label["Website"].href == "https://example.com"
    assert by_label["Website"].is_external
    assert by_label["Orcid"].href is None
    assert by_label["Twitter"].href == "https://twitter.com/me"


@pytest.mark.unit
def test_contact_entries_single_email_gets_mailto():
    """Test mailto link for a single email address."""
    cards, _ = build_contact_entries(CVDocument.from_dict({"email": " me@example.com "}))

    assert cards[0].href == "mailto:me@example.com"


@pytest.mark.unit
def test_contact_entries_empty_cv():
    """Test that a CV without contact details gives no entries."""
    assert build_contact_entries(CVDocument()) == ([], [])
