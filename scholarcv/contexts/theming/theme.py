"""
Theme Data Structures

Typed representation of visual themes. A theme is made of six independent
field groups (colors, typography, layout, style, photo, header); custom
themes and section overrides are partial patches over those groups.

Theme lifecycle:
- Catalog themes are built once by the theme registry and never mutated
- Custom themes are decoded at the boundary (see validation.py)
- EffectiveStyle is produced per section per render by config_resolver.py
"""

from dataclasses import asdict, dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from scholarcv.contexts.theming.defaults import STYLE_GROUPS

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class ThemeColors:
    primary: str
    primary_light: str
    primary_dark: str
    secondary: str
    accent: str
    text_primary: str
    text_secondary: str
    background: str
    surface: str
    border: str


@dataclass(frozen=True)
class ThemeTypography:
    name_size: float
    section_title_size: float
    entry_title_size: float
    body_size: float
    small_size: float
    heading_font: str
    body_font: str
    line_height: float
    heading_transform: str
    letter_spacing: str


@dataclass(frozen=True)
class ThemeLayout:
    """Spacing scale of a theme (px)."""

    header_padding: float
    section_padding: float
    spacing: float
    border_radius: float


@dataclass(frozen=True)
class ThemeStyle:
    header_style: str
    section_style: str
    skill_style: str
    profile_image_shape: str
    border_width: float
    section_dividers: bool
    divider_style: str
    skill_pills: bool
    use_icons: bool
    heading_style: str
    date_format: str


@dataclass(frozen=True)
class PhotoStyle:
    show: bool
    size: str
    aspect: str
    border_width: float
    border_color: str
    shadow: bool
    grayscale: bool


@dataclass(frozen=True)
class HeaderStyle:
    layout: str
    photo_position: str
    alignment: str


GROUP_TYPES = {
    "colors": ThemeColors,
    "typography": ThemeTypography,
    "layout": ThemeLayout,
    "style": ThemeStyle,
    "photo": PhotoStyle,
    "header": HeaderStyle,
}


@dataclass(frozen=True)
class StylePatch:
    """
    Partial field groups, holding only fields that are present and well typed.

    Attributes:
        groups: Mapping of group name to {field: value}; absent groups are untouched by merges
    """

    groups: Mapping[str, Mapping[str, Any]] = field(default_factory=lambda: _EMPTY)

    def group(self, name: str) -> Mapping[str, Any]:
        return self.groups.get(name, _EMPTY)

    @property
    def is_empty(self) -> bool:
        return not any(self.groups.values())


@dataclass(frozen=True)
class StyleGroups:
    """The six fully-resolved field groups shared by Theme and EffectiveStyle."""

    colors: ThemeColors
    typography: ThemeTypography
    layout: ThemeLayout
    style: ThemeStyle
    photo: PhotoStyle
    header: HeaderStyle

    @classmethod
    def from_dict(cls, groups: Mapping[str, Mapping[str, Any]]) -> "StyleGroups":
        return cls(**{name: GROUP_TYPES[name](**groups[name]) for name in STYLE_GROUPS})

    def apply(self, patch: Optional[StylePatch]) -> "StyleGroups":
        """
        Overlay a patch field by field within each group.

        Groups missing from the patch are returned unchanged.
        """
        if patch is None or patch.is_empty:
            return self
        updates = {}
        for name in STYLE_GROUPS:
            fields = patch.group(name)
            if fields:
                updates[name] = replace(getattr(self, name), **fields)
        return replace(self, **updates) if updates else self

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {name: asdict(getattr(self, name)) for name in STYLE_GROUPS}


@dataclass(frozen=True)
class Theme:
    """
    Named immutable style descriptor from the theme catalog.

    Attributes:
        id: Stable catalog identifier (e.g. "modern-blue")
        name: Display name
        description: One-line description
        groups: Fully resolved field groups
        section_overrides: Section id -> patch applied after any custom theme
    """

    id: str
    name: str
    description: str
    groups: StyleGroups
    section_overrides: Mapping[str, StylePatch] = field(default_factory=lambda: _EMPTY)

    @property
    def colors(self) -> ThemeColors:
        return self.groups.colors

    @property
    def typography(self) -> ThemeTypography:
        return self.groups.typography

    @property
    def style(self) -> ThemeStyle:
        return self.groups.style


@dataclass(frozen=True)
class CustomTheme:
    """
    User-authored theme, already decoded and shape-checked.

    Attributes:
        id: Identifier chosen by the author
        name: Display name
        patch: Global patch applied over the base theme
        section_overrides: Section id -> patch, winning over the base theme's overrides
    """

    id: str
    name: str
    patch: StylePatch = field(default_factory=StylePatch)
    section_overrides: Mapping[str, StylePatch] = field(default_factory=lambda: _EMPTY)


@dataclass(frozen=True)
class EffectiveStyle:
    """Materialized style for one section after every merge step. Never persisted."""

    section_id: Optional[str]
    theme_id: str
    colors: ThemeColors
    typography: ThemeTypography
    layout: ThemeLayout
    style: ThemeStyle
    photo: PhotoStyle
    header: HeaderStyle

    @classmethod
    def from_groups(
        cls, groups: StyleGroups, theme_id: str, section_id: Optional[str] = None
    ) -> "EffectiveStyle":
        return cls(
            section_id=section_id,
            theme_id=theme_id,
            colors=groups.colors,
            typography=groups.typography,
            layout=groups.layout,
            style=groups.style,
            photo=groups.photo,
            header=groups.header,
        )
