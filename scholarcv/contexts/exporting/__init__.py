"""
Exporting Context

Responsibilities:
- Turns a rendered CV into a downloadable artifact (PDF, HTML zip, Word guide)
- Drives the headless browser used for PDF printing
- Names artifacts after the CV title

Owns: Export format dispatch, PDF printing, archive packaging
Never: Decides styling or section placement (delegates to rendering)
"""

from scholarcv.contexts.exporting.exceptions import ExportError, PdfExportError, UnsupportedFormatError
from scholarcv.contexts.exporting.exporters import SUPPORTED_FORMATS, ExportArtifact, export_cv, normalize_format
from scholarcv.contexts.exporting.guided import build_word_instructions
from scholarcv.contexts.exporting.html_bundle import build_html_bundle
from scholarcv.contexts.exporting.pdf import html_to_pdf

__all__ = [
    "ExportArtifact",
    "ExportError",
    "PdfExportError",
    "SUPPORTED_FORMATS",
    "UnsupportedFormatError",
    "build_html_bundle",
    "build_word_instructions",
    "export_cv",
    "html_to_pdf",
    "normalize_format",
]
