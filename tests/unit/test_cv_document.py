"""Unit tests for CV document decoding."""

from pathlib import Path

import pytest

from scholarcv.contexts.composing import CVDocument, load_cv_document
from scholarcv.contexts.composing.cv_document import Experience, Skill, build_collection

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"


@pytest.mark.unit
def test_from_dict_accepts_camel_case_and_aliases():
    """Test camelCase keys, theme/layout aliases and field aliases."""
    cv = CVDocument.from_dict(
        {
            "id": "cv-1",
            "fullName": "Ada Example",
            "googleScholar": "scholar.google.com/abc",
            "theme": "modern-blue",
            "layout": "technical-grid",
            "workExperience": [{"position": "Engineer", "organization": "Example Labs", "isCurrent": True}],
        }
    )

    assert cv.full_name == "Ada Example"
    assert cv.google_scholar == "scholar.google.com/abc"
    assert cv.theme_id == "modern-blue"
    assert cv.layout_id == "technical-grid"
    assert cv.experience[0].title == "Engineer"
    assert cv.experience[0].company == "Example Labs"
    assert cv.experience[0].is_current is True


@pytest.mark.unit
def test_canonical_field_wins_over_alias():
    """Test that an alias only fills a missing canonical field."""
    cv = CVDocument.from_dict({"experience": [{"title": "Lead", "position": "Ignored"}]})
    assert cv.experience[0].title == "Lead"


@pytest.mark.unit
def test_collections_are_stable_sorted_by_order():
    """Test that collections sort by order and keep stored sequence for ties."""
    skills = build_collection(
        Skill,
        [
            {"name": "C", "order": 2},
            {"name": "A", "order": 1},
            {"name": "B", "order": 1},
            {"name": "D", "order": "not a number"},
        ],
        "skills",
    )

    assert [s.name for s in skills] == ["A", "B", "C", "D"]
    # Unparseable order falls back to the stored position
    assert skills[-1].order == 3


@pytest.mark.unit
def test_entities_get_default_ids():
    """Test that entities stored without an id get a positional one."""
    cv = CVDocument.from_dict({"awards": [{"title": "Prize"}, {"id": "kept", "title": "Medal"}]})

    assert cv.awards[0].id == "awards-0"
    assert cv.awards[1].id == "kept"


@pytest.mark.unit
def test_bare_strings_and_malformed_entries():
    """Test bare-string skills and languages, and dropping non-mapping entries."""
    cv = CVDocument.from_dict(
        {
            "skills": ["Python", None, 42],
            "languages": ["English"],
            "experience": ["not an entry"],
        }
    )

    assert [s.name for s in cv.skills] == ["Python"]
    assert cv.languages[0].language == "English"
    assert cv.experience == ()


@pytest.mark.unit
def test_highlights_accept_lists_and_multiline_text():
    """Test tuple fields from lists and newline-separated strings."""
    cv = CVDocument.from_dict(
        {"experience": [{"title": "A", "highlights": ["one", "", "two"]}, {"title": "B", "highlights": "x\ny\n"}]}
    )

    assert cv.experience[0].highlights == ("one", "two")
    assert cv.experience[1].highlights == ("x", "y")


@pytest.mark.unit
def test_hidden_sections_from_list_and_section_order():
    """Test hidden sections from hiddenSections and disabled sectionOrder entries."""
    cv = CVDocument.from_dict(
        {
            "hiddenSections": ["awards"],
            "sectionOrder": [
                {"id": "skills", "enabled": False},
                {"id": "experience", "enabled": True},
                {"id": "awards", "enabled": False},
            ],
        }
    )

    assert cv.hidden_sections == ("awards", "skills")
    assert cv.is_hidden("skills")
    assert not cv.is_hidden("experience")


@pytest.mark.unit
def test_string_booleans_are_parsed():
    """Test that form/JSON string flags such as "false" are not treated as truthy."""
    cv = CVDocument.from_dict(
        {
            "showNumbering": "false",
            "referencesAvailableOnRequest": "True",
            "experience": [
                {"title": "Engineer", "isCurrent": "false", "endDate": "2020-01"},
                {"title": "Lead", "isCurrent": "true"},
                {"title": "Intern", "isCurrent": "maybe"},
            ],
            "sectionOrder": [{"id": "skills", "enabled": "false"}, {"id": "awards", "enabled": "true"}],
        }
    )

    assert cv.show_numbering is False
    assert cv.references_available_on_request is True
    assert [e.is_current for e in cv.experience] == [False, True, False]
    assert cv.is_hidden("skills")
    assert not cv.is_hidden("awards")


@pytest.mark.unit
def test_custom_theme_decoding():
    """Test that themeData is decoded and invalid data is treated as absent."""
    cv = CVDocument.from_dict({"themeData": '{"id": "mine", "name": "Mine", "colors": {"primary": "#000000"}}'})
    broken = CVDocument.from_dict({"themeData": "{oops"})

    assert cv.custom_theme is not None
    assert cv.custom_theme.id == "mine"
    assert broken.custom_theme is None


@pytest.mark.unit
def test_custom_section_items():
    """Test that custom sections decode their items with derived ids."""
    cv = CVDocument.from_dict(
        {"customSections": [{"id": "talks", "title": "Talks", "items": [{"label": "Keynote", "description": "Text"}]}]}
    )
    item = cv.custom_sections[0].items[0]

    assert item.id == "talks-item-0"
    assert item.title == "Keynote"
    assert item.content == "Text"


@pytest.mark.unit
def test_defaults():
    """Test document defaults for missing fields."""
    cv = CVDocument.from_dict({})

    assert cv.citation_style == "APA"
    assert cv.theme_id is None
    assert cv.show_numbering is False
    assert cv.experience == ()
    assert Experience().is_current is False


@pytest.mark.unit
def test_load_cv_document_from_yaml():
    """Test loading the full fixture CV from YAML."""
    cv = load_cv_document(FIXTURES_PATH / "full_cv.yaml")

    assert cv.id == "cv-full"
    assert cv.layout_id == "executive-sidebar-left"
    assert cv.citation_style == "IEEE"
    assert [e.title for e in cv.experience][:2] == ["Associate Professor", "Postdoctoral Fellow"]
    assert cv.education[0].field == "Computational Biology"
    assert cv.education[0].grade == "Distinction"
    assert cv.publications[0].publication_type == "journal"
    assert cv.projects[0].url == "github.com/adaexample/foldkit"


@pytest.mark.unit
def test_load_cv_document_rejects_non_mapping(tmp_path):
    """Test that a YAML list is rejected."""
    path = tmp_path / "cv.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ValueError, match="mapping"):
        load_cv_document(path)
