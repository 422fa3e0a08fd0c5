"""
Theme Registry

Read-only catalog of named visual themes, loaded once per process from
themes.yaml and completed from the compiled-in defaults.

Lookups never fail: an unknown, empty, or missing id resolves to the first
registered theme ("Default Professional"), so a CV always renders.
"""

import os
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from scholarcv.contexts.theming.defaults import DEFAULT_THEME_ID, get_default_groups
from scholarcv.contexts.theming.logger import log_catalog_loaded, log_fallback
from scholarcv.contexts.theming.theme import StyleGroups, Theme
from scholarcv.contexts.theming.validation import build_patch, build_section_overrides

load_dotenv()
THEMES_PATH = Path(
    os.getenv("SCHOLARCV_THEMES_PATH", Path(__file__).parent / "data" / "themes.yaml")
)


def build_theme(theme_id: str, entry: Mapping[str, Any]) -> Theme:
    """
    Build a complete Theme from a catalog entry.

    Args:
        theme_id: Catalog key
        entry: Entry with name, description, and any field groups to override

    Returns:
        Theme with every field resolved against the compiled-in defaults
    """
    base = StyleGroups.from_dict(get_default_groups())
    return Theme(
        id=theme_id,
        name=str(entry.get("name") or theme_id),
        description=str(entry.get("description") or ""),
        groups=base.apply(build_patch(entry)),
        section_overrides=build_section_overrides(entry.get("section_overrides")),
    )


class ThemeRegistry:
    """
    Immutable lookup table of themes keyed by id, in registration order.

    The first registered theme is the fallback for every lookup miss.
    """

    def __init__(self, themes: Mapping[str, Theme]):
        if not themes:
            themes = {DEFAULT_THEME_ID: build_theme(DEFAULT_THEME_ID, {"name": "Default Professional"})}
        self._themes: Mapping[str, Theme] = MappingProxyType(dict(themes))
        self._default = next(iter(self._themes.values()))

    @classmethod
    def from_yaml(cls, catalog_path: Path = None) -> "ThemeRegistry":
        """
        Load a theme catalog file.

        Args:
            catalog_path: Path to themes YAML. Defaults to SCHOLARCV_THEMES_PATH

        Returns:
            ThemeRegistry holding every catalog entry
        """
        if catalog_path is None:
            catalog_path = THEMES_PATH

        raw: Dict[str, Any] = OmegaConf.to_container(OmegaConf.load(catalog_path), resolve=True) or {}
        themes = {str(theme_id): build_theme(str(theme_id), entry or {}) for theme_id, entry in raw.items()}
        log_catalog_loaded("themes", catalog_path, list(themes))
        return cls(themes)

    @property
    def default(self) -> Theme:
        return self._default

    def get(self, theme_id: Optional[str]) -> Theme:
        """
        Look up a theme by exact id.

        Args:
            theme_id: Theme id; None or "" are allowed

        Returns:
            The matching theme, or the default theme on a miss
        """
        theme = self._themes.get(theme_id) if theme_id else None
        if theme is None:
            log_fallback("theme", theme_id, self._default.id)
            return self._default
        return theme

    def ids(self) -> List[str]:
        return list(self._themes)

    def themes(self) -> List[Theme]:
        return list(self._themes.values())

    def __contains__(self, theme_id: object) -> bool:
        return theme_id in self._themes

    def __len__(self) -> int:
        return len(self._themes)


@lru_cache(maxsize=None)
def get_theme_registry() -> ThemeRegistry:
    """Process-wide theme registry, built on first use."""
    return ThemeRegistry.from_yaml()


def get_theme_by_id(theme_id: Optional[str]) -> Theme:
    """Resolve a theme id against the process-wide catalog, falling back to the default."""
    return get_theme_registry().get(theme_id)


def theme_ids() -> List[str]:
    return get_theme_registry().ids()
