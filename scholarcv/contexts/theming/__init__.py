"""
Theming context: theme and layout catalogs, custom theme decoding, and the
theme configuration merger.
"""

from scholarcv.contexts.theming.config_resolver import (
    StyleResolver,
    make_style_resolver,
    resolve_effective_style,
)
from scholarcv.contexts.theming.layout_registry import (
    Layout,
    LayoutRegistry,
    SectionPlacement,
    get_layout_by_id,
    get_layout_registry,
    layout_ids,
    spacing_to_scale,
    width_to_size_class,
)
from scholarcv.contexts.theming.section_types import SectionType
from scholarcv.contexts.theming.theme import (
    CustomTheme,
    EffectiveStyle,
    StyleGroups,
    StylePatch,
    Theme,
)
from scholarcv.contexts.theming.theme_registry import (
    ThemeRegistry,
    get_theme_by_id,
    get_theme_registry,
    theme_ids,
)
from scholarcv.contexts.theming.validation import (
    InvalidTheme,
    ValidTheme,
    decode_theme_data,
    validate_custom_theme,
)

__all__ = [
    "CustomTheme",
    "EffectiveStyle",
    "InvalidTheme",
    "Layout",
    "LayoutRegistry",
    "SectionPlacement",
    "SectionType",
    "StyleGroups",
    "StylePatch",
    "StyleResolver",
    "Theme",
    "ThemeRegistry",
    "ValidTheme",
    "decode_theme_data",
    "get_layout_by_id",
    "get_layout_registry",
    "get_theme_by_id",
    "get_theme_registry",
    "layout_ids",
    "make_style_resolver",
    "resolve_effective_style",
    "spacing_to_scale",
    "theme_ids",
    "validate_custom_theme",
    "width_to_size_class",
]
