"""
Theme Configuration Merger

Resolves the effective style for a section by overlaying, in order:

    1. the named catalog theme (complete)
    2. the custom theme's global patch
    3. the section override for the section id (custom theme wins over the
       base theme's own override for the same id)

Each step is a field-level merge inside each of the six field groups, so a
custom theme that supplies a full group replaces that group outright while
groups it does not mention pass through untouched.
"""

from typing import Any, Callable, Mapping, Optional

from scholarcv.contexts.theming.logger import _log_warning
from scholarcv.contexts.theming.theme import CustomTheme, EffectiveStyle, StylePatch, Theme
from scholarcv.contexts.theming.validation import validate_custom_theme

StyleResolver = Callable[[Optional[str]], EffectiveStyle]


def _coerce_custom_theme(custom_theme: Any) -> Optional[CustomTheme]:
    if custom_theme is None or isinstance(custom_theme, CustomTheme):
        return custom_theme
    result = validate_custom_theme(custom_theme)
    if not result.ok:
        _log_warning(f"Ignoring custom theme override: {result.reason}")
        return None
    return result.theme


def _section_patch(
    theme: Theme, custom_theme: Optional[CustomTheme], section_id: Optional[str]
) -> Optional[StylePatch]:
    if not section_id:
        return None
    overrides: Mapping[str, StylePatch] = dict(theme.section_overrides)
    if custom_theme is not None:
        overrides.update(custom_theme.section_overrides)
    return overrides.get(section_id)


def resolve_effective_style(
    theme: Theme,
    custom_theme: Any = None,
    section_id: Optional[str] = None,
) -> EffectiveStyle:
    """
    Merge a theme, an optional custom theme and a section override.

    Args:
        theme: Catalog theme (always complete)
        custom_theme: CustomTheme, or a raw mapping to validate first; invalid
                      input is ignored
        section_id: Section identifier (e.g. "experience"); None for the
                    document-level style

    Returns:
        EffectiveStyle with every field populated

    Example:
        >>> style = resolve_effective_style(theme, custom, "skills")
        >>> style.colors.primary
        '#ff0000'
    """
    custom = _coerce_custom_theme(custom_theme)

    groups = theme.groups
    if custom is not None:
        groups = groups.apply(custom.patch)
    groups = groups.apply(_section_patch(theme, custom, section_id))

    return EffectiveStyle.from_groups(groups, theme_id=theme.id, section_id=section_id)


def make_style_resolver(theme: Theme, custom_theme: Any = None) -> StyleResolver:
    """
    Bind a theme and custom theme into a section_id -> EffectiveStyle callable.

    The custom theme is validated once here; each call re-runs the merge.
    """
    custom = _coerce_custom_theme(custom_theme)

    def resolve(section_id: Optional[str] = None) -> EffectiveStyle:
        return resolve_effective_style(theme, custom, section_id)

    return resolve
