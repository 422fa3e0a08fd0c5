"""Unit tests for the theme and layout catalogs."""

import pytest

from scholarcv.contexts.theming import (
    LayoutRegistry,
    SectionType,
    ThemeRegistry,
    get_layout_by_id,
    get_layout_registry,
    get_theme_by_id,
    get_theme_registry,
    layout_ids,
    spacing_to_scale,
    theme_ids,
    width_to_size_class,
)
from scholarcv.contexts.theming.layout_registry import build_layout
from scholarcv.contexts.theming.theme_registry import build_theme


@pytest.mark.unit
def test_theme_catalog_default_is_first():
    """Test that the first catalog entry is the default theme."""
    registry = get_theme_registry()
    assert registry.ids()[0] == "default"
    assert registry.default.name == "Default Professional"


@pytest.mark.unit
@pytest.mark.parametrize("theme_id", [None, "", "no-such-theme", "Modern-Blue"])
def test_unknown_theme_falls_back_to_default(theme_id):
    """Test that missing, empty, unknown, or wrongly cased ids resolve to the default."""
    assert get_theme_by_id(theme_id).id == "default"


@pytest.mark.unit
def test_every_catalog_theme_resolves_to_itself():
    """Test exact-id lookups for every registered theme."""
    ids = theme_ids()
    assert "modern-blue" in ids
    for theme_id in ids:
        assert get_theme_by_id(theme_id).id == theme_id


@pytest.mark.unit
def test_catalog_themes_are_complete():
    """Test that catalog entries listing few fields are completed from defaults."""
    theme = get_theme_by_id("modern-blue")
    assert theme.colors.primary == "#2563eb"
    assert theme.typography.heading_font == "Helvetica"
    # Not listed in the catalog entry, filled from defaults
    assert theme.groups.photo.size == "medium"
    assert theme.groups.header.alignment == "left"


@pytest.mark.unit
def test_empty_theme_registry_still_has_default():
    """Test that an empty catalog still yields a usable default theme."""
    registry = ThemeRegistry({})
    assert len(registry) == 1
    assert registry.get("anything").id == "default"


@pytest.mark.unit
def test_theme_registry_from_yaml(tmp_path):
    """Test loading a custom theme catalog file."""
    catalog = tmp_path / "themes.yaml"
    catalog.write_text(
        "first:\n"
        "  name: First\n"
        "  colors: {primary: '#123456'}\n"
        "second:\n"
        "  name: Second\n"
    )
    registry = ThemeRegistry.from_yaml(catalog)

    assert registry.ids() == ["first", "second"]
    assert registry.get("missing").id == "first"
    assert registry.get("first").colors.primary == "#123456"
    assert "second" in registry


@pytest.mark.unit
def test_build_theme_drops_malformed_fields():
    """Test that ill-typed catalog fields fall back to defaults."""
    theme = build_theme("odd", {"name": "Odd", "typography": {"name_size": "huge"}, "style": {"skill_style": "neon"}})
    assert theme.typography.name_size == 22
    assert theme.style.skill_style == "pill"


@pytest.mark.unit
def test_layout_catalog_default_and_fallback():
    """Test that unknown layout ids resolve to the first catalog layout."""
    registry = get_layout_registry()
    assert registry.ids()[0] == "classic-single"
    assert get_layout_by_id("no-such-layout").id == "classic-single"
    assert get_layout_by_id(None).id == "classic-single"


@pytest.mark.unit
def test_every_catalog_layout_resolves_to_itself():
    """Test exact-id lookups for every registered layout."""
    for layout_id in layout_ids():
        layout = get_layout_by_id(layout_id)
        assert layout.id == layout_id
        assert len(layout.column_ratios) == layout.columns


@pytest.mark.unit
def test_catalog_placements_stay_inside_columns():
    """Test that every catalog placement references an existing column."""
    for layout in get_layout_registry().layouts():
        for placement in layout.placements.values():
            assert 0 <= placement.column < layout.columns


@pytest.mark.unit
def test_sidebar_layout_places_header():
    """Test that the "personal" placement becomes the header placement."""
    layout = get_layout_by_id("executive-sidebar-left")
    assert layout.header_style == "sidebar"
    assert layout.header_placement is not None
    assert layout.header_placement.column == 0
    assert layout.placement_for(SectionType.EXPERIENCE).column == 1


@pytest.mark.unit
def test_build_layout_ignores_unknown_sections():
    """Test that placements for sections the composer does not know are dropped."""
    layout = build_layout(
        "future",
        {
            "columns": 2,
            "placements": {
                "experience": {"column": 0, "width": "main", "order": 1},
                "videoReel": {"column": 1, "width": "sidebar", "order": 0},
            },
        },
    )
    assert list(layout.placements) == [SectionType.EXPERIENCE]


@pytest.mark.unit
def test_build_layout_clamps_columns_and_widths():
    """Test that out-of-range columns are clamped and unknown widths become full."""
    layout = build_layout(
        "odd",
        {
            "columns": 2,
            "column_ratios": [1, 2, 3],
            "placements": {
                "skills": {"column": 7, "width": "enormous", "order": 0},
                "awards": {"column": -1, "width": "half", "order": 1},
            },
        },
    )
    skills = layout.placement_for(SectionType.SKILLS)
    awards = layout.placement_for(SectionType.AWARDS)

    assert skills.column == 1
    assert skills.width == "full"
    assert awards.column == 0
    assert layout.column_ratios == (1, 1)


@pytest.mark.unit
def test_empty_layout_registry_falls_back_to_single_column():
    """Test that an empty catalog yields a single column holding every section."""
    registry = LayoutRegistry({})
    layout = registry.default

    assert layout.id == "classic-single"
    assert layout.columns == 1
    assert set(layout.placements) == set(SectionType)


@pytest.mark.unit
@pytest.mark.parametrize(
    "width,columns,expected",
    [
        ("full", 1, 1.0),
        ("sidebar", 1, 1.0),
        ("half", 2, 0.5),
        ("sidebar", 2, 0.3333),
        ("main", 2, 0.6667),
        ("sidebar", 3, 0.25),
        ("main", 3, 0.75),
        ("third", 3, 0.3333),
        ("two-thirds", 2, 0.6667),
        ("unknown", 2, 1.0),
    ],
)
def test_width_to_size_class(width, columns, expected):
    """Test width token to page fraction mapping."""
    assert width_to_size_class(width, columns) == expected


@pytest.mark.unit
def test_spacing_to_scale():
    """Test spacing token to px scale, with unknown tokens treated as normal."""
    assert spacing_to_scale("tight") == 12
    assert spacing_to_scale("normal") == 24
    assert spacing_to_scale("relaxed") == 32
    assert spacing_to_scale("cozy") == 24
