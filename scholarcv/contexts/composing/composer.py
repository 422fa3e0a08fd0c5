"""
Document Composer

Decides which sections a CV shows and where each one goes in a layout.

Composition walks the closed SectionType enum in registration order and, for
each type, emits a SectionInstance only when all of these hold:

- the CV does not hide the section
- the section has renderable content (see ENTRY_FILTERS)
- the layout has a placement for the section type

Instances are then bucketed by column and stable-sorted by placement order,
so two sections claiming the same (column, order) slot keep enum order.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from scholarcv.contexts.composing.cv_document import CVDocument, CustomSection
from scholarcv.contexts.composing.logger import log_composition
from scholarcv.contexts.theming import Layout, SectionPlacement, SectionType, width_to_size_class

REFERENCES_ON_REQUEST = "Available upon request"

ENTRY_FILTERS: Dict[SectionType, Callable[[Any], bool]] = {
    SectionType.EXPERIENCE: lambda e: bool(e.title or e.company or e.summary or e.description),
    SectionType.EDUCATION: lambda e: bool(e.school or e.degree or e.field),
    SectionType.SKILLS: lambda e: bool(e.name),
    SectionType.PUBLICATIONS: lambda e: bool(e.title or e.citation or e.authors),
    SectionType.PROJECTS: lambda e: bool(e.name or e.summary),
    SectionType.CERTIFICATIONS: lambda e: bool(e.name or e.issuer),
    SectionType.AWARDS: lambda e: bool(e.title or e.issuer),
    SectionType.LANGUAGES: lambda e: bool(e.language),
    SectionType.REFERENCES: lambda e: bool(e.name or e.email or e.phone),
}

# CVDocument collection backing each list-based section type
SECTION_COLLECTIONS = {
    SectionType.EXPERIENCE: "experience",
    SectionType.EDUCATION: "education",
    SectionType.SKILLS: "skills",
    SectionType.PUBLICATIONS: "publications",
    SectionType.PROJECTS: "projects",
    SectionType.CERTIFICATIONS: "certifications",
    SectionType.AWARDS: "awards",
    SectionType.LANGUAGES: "languages",
    SectionType.REFERENCES: "references",
}


@dataclass(frozen=True)
class SectionInstance:
    """
    One section of one CV, placed in a layout.

    Attributes:
        section_type: Closed section type
        section_id: Style/override key ("experience", or a custom section's id)
        title: Heading before any transform
        entries: Filtered entities to render, in their stored order
        placement: Layout placement (column already clamped to the layout)
        size: Fraction of the page width (see width_to_size_class)
        text: Free text body (summary, custom section content, references note)
    """

    section_type: SectionType
    section_id: str
    title: str
    entries: Tuple[Any, ...]
    placement: SectionPlacement
    size: float
    text: Optional[str] = None


def _custom_section_instance(
    section: CustomSection, placement: SectionPlacement, size: float
) -> Optional[SectionInstance]:
    items = tuple(item for item in section.items if item.title or item.content)
    if not items and not section.content:
        return None
    return SectionInstance(
        section_type=SectionType.CUSTOM_SECTIONS,
        section_id=section.id,
        title=section.title or SectionType.CUSTOM_SECTIONS.display_title,
        entries=items,
        placement=placement,
        size=size,
        text=None if items else section.content,
    )


def _section_instances(
    cv: CVDocument, section_type: SectionType, placement: SectionPlacement, size: float
) -> List[SectionInstance]:
    if section_type is SectionType.CUSTOM_SECTIONS:
        instances = []
        for section in cv.custom_sections:
            if cv.is_hidden(section.id):
                continue
            instance = _custom_section_instance(section, placement, size)
            if instance is not None:
                instances.append(instance)
        return instances

    base = dict(section_type=section_type, section_id=section_type.value, title=section_type.display_title)

    if section_type is SectionType.SUMMARY:
        if not cv.summary:
            return []
        return [SectionInstance(entries=(), placement=placement, size=size, text=cv.summary, **base)]

    if section_type is SectionType.REFERENCES and cv.references_available_on_request:
        return [SectionInstance(entries=(), placement=placement, size=size, text=REFERENCES_ON_REQUEST, **base)]

    keep = ENTRY_FILTERS[section_type]
    entries = tuple(e for e in getattr(cv, SECTION_COLLECTIONS[section_type]) if keep(e))
    if not entries:
        return []
    return [SectionInstance(entries=entries, placement=placement, size=size, **base)]


def compose_sections(cv: CVDocument, layout: Layout) -> List[List[SectionInstance]]:
    """
    Place a CV's visible sections into a layout's columns.

    Args:
        cv: Hydrated CV document
        layout: Layout supplying placements

    Returns:
        One list of SectionInstance per layout column, each sorted by
        placement order (ties keep section type order)

    Example:
        >>> columns = compose_sections(cv, get_layout_by_id("executive-sidebar-left"))
        >>> [s.section_id for s in columns[0]]
        ['skills', 'languages']
    """
    column_count = max(layout.columns, 1)
    columns: List[List[SectionInstance]] = [[] for _ in range(column_count)]

    for section_type in SectionType:
        if cv.is_hidden(section_type.value):
            continue
        placement = layout.placement_for(section_type)
        if placement is None:
            continue
        column = min(max(placement.column, 0), column_count - 1)
        if column != placement.column:
            placement = SectionPlacement(column=column, width=placement.width, order=placement.order)
        size = width_to_size_class(placement.width, column_count)
        columns[column].extend(_section_instances(cv, section_type, placement, size))

    for column in columns:
        column.sort(key=lambda instance: instance.placement.order)

    log_composition(cv.id, layout.id, columns)
    return columns
