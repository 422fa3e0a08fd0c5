"""
Layout Registry

Read-only catalog of structural layouts (columns, section placements, header
and spacing policy), loaded once per process from layouts.yaml.

Same absence policy as the theme registry: unknown ids resolve to the first
registered layout. Placement keys naming an unknown section type are dropped
while loading, so older or partial layouts still render.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

from scholarcv.contexts.theming.defaults import DEFAULT_LAYOUT_ID
from scholarcv.contexts.theming.logger import _log_debug, log_catalog_loaded, log_fallback
from scholarcv.contexts.theming.section_types import HEADER_PLACEMENT_KEY, SectionType

load_dotenv()
LAYOUTS_PATH = Path(
    os.getenv("SCHOLARCV_LAYOUTS_PATH", Path(__file__).parent / "data" / "layouts.yaml")
)

SECTION_WIDTHS = ("full", "half", "third", "two-thirds", "sidebar", "main")

# Spacing tokens in px
SPACING_SCALE = {
    "tight": 12,
    "normal": 24,
    "relaxed": 32,
}


@dataclass(frozen=True)
class SectionPlacement:
    """Where a section goes: column index (0-based), width token, order within the column."""

    column: int
    width: str = "full"
    order: int = 0


@dataclass(frozen=True)
class Layout:
    """
    Named immutable structural descriptor.

    Attributes:
        id: Stable catalog identifier (e.g. "classic-single")
        name: Display name
        description: One-line description
        columns: Column count (1-3)
        column_ratios: Relative column widths, one per column
        placements: Section type -> placement; section types absent here are not rendered
        header_placement: Placement of the header region, if the layout gives one
        header_style: compact | expanded | centered | sidebar
        spacing: tight | normal | relaxed
        section_dividers: Whether sections are separated by a rule
        page_break_behavior: auto | section | avoid
    """

    id: str
    name: str
    description: str = ""
    columns: int = 1
    column_ratios: Tuple[float, ...] = (1,)
    placements: Mapping[SectionType, SectionPlacement] = field(
        default_factory=lambda: MappingProxyType({})
    )
    header_placement: Optional[SectionPlacement] = None
    header_style: str = "expanded"
    spacing: str = "normal"
    section_dividers: bool = True
    page_break_behavior: str = "auto"

    def placement_for(self, section_type: SectionType) -> Optional[SectionPlacement]:
        return self.placements.get(section_type)


def width_to_size_class(width: str, column_count: int) -> float:
    """
    Map an abstract width token to a fraction of the page width.

    Single-column layouts always give the full width.

    Args:
        width: full | half | third | two-thirds | sidebar | main
        column_count: Number of columns in the layout

    Returns:
        Fraction in (0, 1]; unknown tokens give 1.0

    Examples:
        >>> width_to_size_class("sidebar", 2)
        0.3333
        >>> width_to_size_class("main", 3)
        0.75
    """
    if column_count <= 1:
        return 1.0
    sizes = {
        "full": 1.0,
        "half": 0.5,
        "third": 1 / 3,
        "two-thirds": 2 / 3,
        "sidebar": 1 / 3 if column_count == 2 else 1 / 4,
        "main": 2 / 3 if column_count == 2 else 3 / 4,
    }
    return round(sizes.get(width, 1.0), 4)


def spacing_to_scale(spacing: str) -> int:
    """Map tight/normal/relaxed to a px spacing scale (unknown tokens give normal)."""
    return SPACING_SCALE.get(spacing, SPACING_SCALE["normal"])


def _build_placement(raw: Mapping[str, Any], columns: int) -> SectionPlacement:
    column = int(raw.get("column", 0))
    width = str(raw.get("width", "full"))
    if width not in SECTION_WIDTHS:
        _log_debug(f"Unknown width token '{width}', treating as full")
        width = "full"
    return SectionPlacement(
        column=min(max(column, 0), columns - 1),
        width=width,
        order=int(raw.get("order", 0)),
    )


def build_layout(layout_id: str, entry: Mapping[str, Any]) -> Layout:
    """
    Build a Layout from a catalog entry.

    Args:
        layout_id: Catalog key
        entry: Entry with columns, column_ratios, placements, and policy fields

    Returns:
        Layout with placements keyed by SectionType
    """
    columns = max(int(entry.get("columns", 1)), 1)
    ratios = tuple(entry.get("column_ratios") or (1,) * columns)
    if len(ratios) != columns:
        ratios = (1,) * columns

    placements: Dict[SectionType, SectionPlacement] = {}
    header_placement = None
    for key, raw in (entry.get("placements") or {}).items():
        if key == HEADER_PLACEMENT_KEY:
            header_placement = _build_placement(raw, columns)
            continue
        section_type = SectionType.parse(key)
        if section_type is None:
            _log_debug(f"Layout '{layout_id}': ignoring placement for unknown section '{key}'")
            continue
        placements[section_type] = _build_placement(raw, columns)

    return Layout(
        id=layout_id,
        name=str(entry.get("name") or layout_id),
        description=str(entry.get("description") or ""),
        columns=columns,
        column_ratios=ratios,
        placements=MappingProxyType(placements),
        header_placement=header_placement,
        header_style=str(entry.get("header_style", "expanded")),
        spacing=str(entry.get("spacing", "normal")),
        section_dividers=bool(entry.get("section_dividers", True)),
        page_break_behavior=str(entry.get("page_break_behavior", "auto")),
    )


def _fallback_layout() -> Layout:
    """Single column with every known section in enum order."""
    placements = {
        section_type: SectionPlacement(column=0, width="full", order=index)
        for index, section_type in enumerate(SectionType)
    }
    return Layout(
        id=DEFAULT_LAYOUT_ID,
        name="Classic Single Column",
        placements=MappingProxyType(placements),
    )


class LayoutRegistry:
    """Immutable lookup table of layouts keyed by id, in registration order."""

    def __init__(self, layouts: Mapping[str, Layout]):
        if not layouts:
            layouts = {DEFAULT_LAYOUT_ID: _fallback_layout()}
        self._layouts: Mapping[str, Layout] = MappingProxyType(dict(layouts))
        self._default = next(iter(self._layouts.values()))

    @classmethod
    def from_yaml(cls, catalog_path: Path = None) -> "LayoutRegistry":
        """
        Load a layout catalog file.

        Args:
            catalog_path: Path to layouts YAML. Defaults to SCHOLARCV_LAYOUTS_PATH

        Returns:
            LayoutRegistry holding every catalog entry
        """
        if catalog_path is None:
            catalog_path = LAYOUTS_PATH

        raw: Dict[str, Any] = OmegaConf.to_container(OmegaConf.load(catalog_path), resolve=True) or {}
        layouts = {str(layout_id): build_layout(str(layout_id), entry or {}) for layout_id, entry in raw.items()}
        log_catalog_loaded("layouts", catalog_path, list(layouts))
        return cls(layouts)

    @property
    def default(self) -> Layout:
        return self._default

    def get(self, layout_id: Optional[str]) -> Layout:
        """Look up a layout by exact id, returning the default layout on a miss."""
        layout = self._layouts.get(layout_id) if layout_id else None
        if layout is None:
            log_fallback("layout", layout_id, self._default.id)
            return self._default
        return layout

    def ids(self) -> List[str]:
        return list(self._layouts)

    def layouts(self) -> List[Layout]:
        return list(self._layouts.values())

    def __contains__(self, layout_id: object) -> bool:
        return layout_id in self._layouts

    def __len__(self) -> int:
        return len(self._layouts)


@lru_cache(maxsize=None)
def get_layout_registry() -> LayoutRegistry:
    """Process-wide layout registry, built on first use."""
    return LayoutRegistry.from_yaml()


def get_layout_by_id(layout_id: Optional[str]) -> Layout:
    """Resolve a layout id against the process-wide catalog, falling back to the default."""
    return get_layout_registry().get(layout_id)


def layout_ids() -> List[str]:
    return get_layout_registry().ids()
