"""
Custom Theme Validation

Structural validation and boundary decoding for user-authored themes.

Custom themes arrive as JSON strings or plain mappings (stored alongside the
CV). They are decoded once here into typed CustomTheme objects so the merger
never has to guess at shapes. Two stored shapes are accepted:

- flat:   {"id", "name", "colors": {...}, "typography": {...}, ..., "photoSize": ...}
- nested: {"id", "name", "global": {"colors": {...}, ...}, "photo": {...}, "header": {...}}

Keys may be camelCase or snake_case. Fields with an unknown name or a value of
the wrong type are dropped, never raised.
"""

import json
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Literal, Mapping, Optional, Union

from scholarcv.contexts.theming.defaults import ENUM_FIELDS, STYLE_GROUPS, get_default_groups
from scholarcv.contexts.theming.logger import _log_debug, _log_warning
from scholarcv.contexts.theming.theme import CustomTheme, StylePatch
from scholarcv.utils.text_processing import to_snake_case

_DEFAULT_GROUPS = get_default_groups()

# Alternate field names used by stored section overrides and older themes
FIELD_ALIASES = {
    ("colors", "text"): "text_primary",
    ("typography", "title_size"): "section_title_size",
    ("typography", "title_font"): "heading_font",
    ("typography", "title_transform"): "heading_transform",
    ("photo", "show_photo"): "show",
}

# Top-level photo fields of the flat theme shape
FLAT_PHOTO_FIELDS = {
    "show_photo": "show",
    "photo_size": "size",
    "photo_aspect": "aspect",
    "photo_border_width": "border_width",
    "photo_border_color": "border_color",
    "photo_shadow": "shadow",
    "photo_grayscale": "grayscale",
}


@dataclass(frozen=True)
class ValidTheme:
    theme: CustomTheme
    ok: Literal[True] = True


@dataclass(frozen=True)
class InvalidTheme:
    reason: str
    ok: Literal[False] = False


ThemeValidation = Union[ValidTheme, InvalidTheme]


def _accepts(group: str, key: str, value: Any) -> bool:
    """Check a field value against the type of its compiled-in default."""
    default = _DEFAULT_GROUPS[group][key]
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, (int, float)):
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if not isinstance(value, str):
        return False
    allowed = ENUM_FIELDS.get((group, key))
    return allowed is None or value in allowed


def _clean_group(group: str, raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, Mapping):
        return {}
    cleaned = {}
    for raw_key, value in raw.items():
        key = to_snake_case(str(raw_key))
        key = FIELD_ALIASES.get((group, key), key)
        if key not in _DEFAULT_GROUPS[group]:
            _log_debug(f"Dropping unknown field {group}.{raw_key}")
            continue
        if not _accepts(group, key, value):
            _log_debug(f"Dropping {group}.{raw_key}: unexpected value {value!r}")
            continue
        cleaned[key] = value
    return cleaned


def build_patch(raw: Optional[Mapping[str, Any]]) -> StylePatch:
    """
    Build a StylePatch from a (possibly nested, possibly camelCase) mapping.

    Args:
        raw: Mapping with any of the group keys, optionally under "global",
             plus flat photo fields such as "photoSize"

    Returns:
        StylePatch with only known, well-typed fields
    """
    if not isinstance(raw, Mapping):
        return StylePatch()

    source: Dict[str, Any] = {to_snake_case(str(k)): v for k, v in raw.items()}
    nested = source.get("global")
    if isinstance(nested, Mapping):
        for key, value in nested.items():
            source.setdefault(to_snake_case(str(key)), value)

    groups = {}
    for group in STYLE_GROUPS:
        cleaned = _clean_group(group, source.get(group))
        if group == "photo":
            flat = {FLAT_PHOTO_FIELDS[k]: v for k, v in source.items() if k in FLAT_PHOTO_FIELDS}
            for key, value in _clean_group("photo", flat).items():
                cleaned.setdefault(key, value)
        if cleaned:
            groups[group] = MappingProxyType(cleaned)

    return StylePatch(groups=MappingProxyType(groups))


def build_section_overrides(raw: Any) -> Mapping[str, StylePatch]:
    """Build section id -> StylePatch, skipping empty or malformed entries."""
    if not isinstance(raw, Mapping):
        return MappingProxyType({})
    overrides = {}
    for section_id, entry in raw.items():
        patch = build_patch(entry)
        if not patch.is_empty:
            overrides[str(section_id)] = patch
    return MappingProxyType(overrides)


def validate_custom_theme(value: Any) -> ThemeValidation:
    """
    Structurally validate a decoded custom theme payload.

    Mandatory fields: id (str), name (str), and colors (mapping), the latter
    either at the top level or under "global".

    Args:
        value: Candidate payload (already JSON-decoded)

    Returns:
        ValidTheme wrapping a CustomTheme, or InvalidTheme with a reason
    """
    if isinstance(value, CustomTheme):
        return ValidTheme(value)
    if not isinstance(value, Mapping):
        return InvalidTheme(f"expected a mapping, got {type(value).__name__}")

    theme_id = value.get("id")
    name = value.get("name")
    if not isinstance(theme_id, str):
        return InvalidTheme("missing or non-string 'id'")
    if not isinstance(name, str):
        return InvalidTheme("missing or non-string 'name'")

    colors = value.get("colors")
    nested = value.get("global")
    if colors is None and isinstance(nested, Mapping):
        colors = nested.get("colors")
    if not isinstance(colors, Mapping):
        return InvalidTheme("missing 'colors' object")

    overrides = value.get("sectionOverrides", value.get("section_overrides"))
    return ValidTheme(
        CustomTheme(
            id=theme_id,
            name=name,
            patch=build_patch(value),
            section_overrides=build_section_overrides(overrides),
        )
    )


def decode_theme_data(raw: Union[str, Mapping[str, Any], CustomTheme, None]) -> Optional[CustomTheme]:
    """
    Decode serialized custom theme data at the system boundary.

    Undecodable JSON and payloads failing validation are treated as absent.

    Args:
        raw: JSON string, mapping, already-decoded CustomTheme, or None

    Returns:
        CustomTheme, or None when there is no usable custom theme
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, CustomTheme):
        return raw

    candidate: Any = raw
    if isinstance(raw, str):
        try:
            candidate = json.loads(raw)
        except json.JSONDecodeError as e:
            _log_warning(f"Ignoring custom theme: invalid JSON ({e.msg})")
            return None

    result = validate_custom_theme(candidate)
    if not result.ok:
        _log_warning(f"Ignoring custom theme: {result.reason}")
        return None
    return result.theme
