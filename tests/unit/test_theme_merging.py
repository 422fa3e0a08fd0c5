"""Unit tests for custom theme validation and the effective style merge."""

import json

import pytest

from scholarcv.contexts.theming import (
    CustomTheme,
    InvalidTheme,
    ValidTheme,
    decode_theme_data,
    get_theme_by_id,
    make_style_resolver,
    resolve_effective_style,
    validate_custom_theme,
)
from scholarcv.contexts.theming.theme_registry import build_theme
from scholarcv.contexts.theming.validation import build_patch, build_section_overrides

VALID_THEME = {
    "id": "custom-1",
    "name": "My Theme",
    "colors": {"primary": "#ff0000"},
}


def make_custom(colors=None, overrides=None):
    return CustomTheme(
        id="custom",
        name="Custom",
        patch=build_patch({"colors": colors or {}}),
        section_overrides=build_section_overrides(overrides or {}),
    )


@pytest.mark.unit
def test_no_custom_theme_gives_theme_values():
    """Test that without a custom theme the effective style equals the theme."""
    theme = get_theme_by_id("elegant-purple")
    style = resolve_effective_style(theme, None, "experience")

    assert style.colors == theme.colors
    assert style.typography == theme.typography
    assert style.theme_id == "elegant-purple"
    assert style.section_id == "experience"


@pytest.mark.unit
def test_custom_theme_overrides_single_field():
    """Test that a partial custom group only replaces the fields it names."""
    theme = get_theme_by_id("modern-blue")
    style = resolve_effective_style(theme, make_custom(colors={"primary": "#ff0000"}))

    assert style.colors.primary == "#ff0000"
    assert style.colors.secondary == theme.colors.secondary
    assert style.typography == theme.typography


@pytest.mark.unit
def test_section_override_applies_only_to_its_section():
    """Test that a section override wins for its own section and nowhere else."""
    theme = get_theme_by_id("modern-blue")
    custom = make_custom(colors={"primary": "#ff0000"}, overrides={"skills": {"colors": {"primary": "#00ff00"}}})

    assert resolve_effective_style(theme, custom, "skills").colors.primary == "#00ff00"
    assert resolve_effective_style(theme, custom, "experience").colors.primary == "#ff0000"
    assert resolve_effective_style(theme, custom, None).colors.primary == "#ff0000"


@pytest.mark.unit
def test_global_and_section_patches_merge_across_groups():
    """Test a colors-only custom theme plus a typography-only section override."""
    theme = get_theme_by_id("modern-blue")
    custom = make_custom(colors={"primary": "#ff0000"}, overrides={"experience": {"typography": {"bodySize": 12}}})
    style = resolve_effective_style(theme, custom, "experience")

    assert style.colors.primary == "#ff0000"
    assert style.typography.body_size == 12
    assert style.colors.secondary == theme.colors.secondary
    assert style.typography.name_size == theme.typography.name_size

    other = resolve_effective_style(theme, custom, "skills")
    assert other.colors.primary == "#ff0000"
    assert other.typography.body_size == theme.typography.body_size


@pytest.mark.unit
def test_custom_section_override_beats_theme_section_override():
    """Test precedence between a theme's own override and a custom one for the same section."""
    theme = build_theme(
        "layered",
        {"name": "Layered", "section_overrides": {"skills": {"colors": {"primary": "#111111"}}}},
    )

    assert resolve_effective_style(theme, None, "skills").colors.primary == "#111111"

    custom = make_custom(overrides={"skills": {"colors": {"primary": "#222222"}}})
    assert resolve_effective_style(theme, custom, "skills").colors.primary == "#222222"


@pytest.mark.unit
def test_override_aliases_are_accepted():
    """Test stored override field names such as text and titleSize."""
    overrides = build_section_overrides({"awards": {"colors": {"text": "#333333"}, "typography": {"titleSize": 15}}})
    patch = overrides["awards"]

    assert patch.group("colors")["text_primary"] == "#333333"
    assert patch.group("typography")["section_title_size"] == 15


@pytest.mark.unit
def test_raw_mapping_custom_theme_is_validated():
    """Test that a plain mapping is validated before merging."""
    theme = get_theme_by_id("modern-blue")

    assert resolve_effective_style(theme, VALID_THEME).colors.primary == "#ff0000"
    # Missing colors: ignored, theme values stand
    assert resolve_effective_style(theme, {"id": "x", "name": "X"}).colors.primary == theme.colors.primary


@pytest.mark.unit
def test_style_resolver_matches_direct_merge():
    """Test that a bound resolver gives the same style as resolve_effective_style."""
    theme = get_theme_by_id("tech-cyan")
    custom = make_custom(overrides={"summary": {"colors": {"accent": "#abcdef"}}})
    resolve = make_style_resolver(theme, custom)

    assert resolve("summary") == resolve_effective_style(theme, custom, "summary")
    assert resolve(None) == resolve_effective_style(theme, custom)


@pytest.mark.unit
def test_validate_custom_theme_accepts_flat_and_nested_shapes():
    """Test both stored custom theme shapes."""
    flat = validate_custom_theme(VALID_THEME)
    nested = validate_custom_theme({"id": "n", "name": "Nested", "global": {"colors": {"primary": "#0000ff"}}})

    assert isinstance(flat, ValidTheme)
    assert flat.theme.patch.group("colors")["primary"] == "#ff0000"
    assert isinstance(nested, ValidTheme)
    assert nested.theme.patch.group("colors")["primary"] == "#0000ff"


@pytest.mark.unit
@pytest.mark.parametrize(
    "payload,reason",
    [
        ("not a theme", "mapping"),
        ({"name": "No Id", "colors": {}}, "'id'"),
        ({"id": "no-name", "colors": {}}, "'name'"),
        ({"id": "x", "name": "X", "colors": "red"}, "colors"),
    ],
)
def test_validate_custom_theme_rejects_bad_shapes(payload, reason):
    """Test that structural problems are reported with a reason."""
    result = validate_custom_theme(payload)

    assert isinstance(result, InvalidTheme)
    assert result.ok is False
    assert reason in result.reason


@pytest.mark.unit
def test_patch_drops_unknown_and_ill_typed_fields():
    """Test field filtering: camelCase keys, flat photo fields, enums, and types."""
    patch = build_patch(
        {
            "colors": {"textPrimary": "#000000", "glow": "#ffffff"},
            "typography": {"nameSize": "big"},
            "style": {"headerStyle": "neon", "sectionDividers": False},
            "layout": {"spacing": True},
            "photoSize": "large",
        }
    )

    assert dict(patch.group("colors")) == {"text_primary": "#000000"}
    assert "typography" not in patch.groups
    assert dict(patch.group("style")) == {"section_dividers": False}
    assert "layout" not in patch.groups
    assert patch.group("photo")["size"] == "large"


@pytest.mark.unit
def test_decode_theme_data():
    """Test decoding stored theme data from JSON strings and mappings."""
    decoded = decode_theme_data(json.dumps(VALID_THEME))

    assert isinstance(decoded, CustomTheme)
    assert decoded.id == "custom-1"
    assert decode_theme_data(VALID_THEME).name == "My Theme"
    assert decode_theme_data(decoded) is decoded


@pytest.mark.unit
@pytest.mark.parametrize("raw", [None, "", "{not json", json.dumps({"id": "x"}), json.dumps([1, 2])])
def test_decode_theme_data_treats_bad_input_as_absent(raw):
    """Test that undecodable or invalid theme data decodes to None."""
    assert decode_theme_data(raw) is None
