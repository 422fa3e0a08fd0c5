"""
Composing Context

Responsibilities:
- Hydrated CV document model (sub-entities with id and order)
- Decides which sections render and in which layout column
- Text formatting shared with rendering (dates, headings, citations, contacts)

Owns: CV document decoding, section visibility and placement
Never: Produces markup or chooses colors and fonts
"""

from scholarcv.contexts.composing.citations import CITATION_STYLES, format_citation, format_publication_number
from scholarcv.contexts.composing.composer import SectionInstance, compose_sections
from scholarcv.contexts.composing.cv_document import CVDocument, load_cv_document
from scholarcv.contexts.composing.formatting import (
    ContactEntry,
    build_contact_entries,
    format_date,
    format_date_range,
    transform_heading,
)

__all__ = [
    "CITATION_STYLES",
    "CVDocument",
    "ContactEntry",
    "SectionInstance",
    "build_contact_entries",
    "compose_sections",
    "format_citation",
    "format_date",
    "format_date_range",
    "format_publication_number",
    "load_cv_document",
    "transform_heading",
]
