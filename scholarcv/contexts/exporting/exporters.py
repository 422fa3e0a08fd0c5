"""
Export dispatcher.

Maps a format string onto one of three export paths:

- pdf: themed HTML printed by headless Chromium
- html: zip archive of index.html plus linked assets
- doc / docx / word: static page describing PDF -> Word conversion

Formats are matched case-insensitively and rejected before any rendering.
"""

import time
from dataclasses import dataclass
from typing import Any, Optional

from scholarcv.contexts.composing import CVDocument
from scholarcv.contexts.exporting.exceptions import ExportError, UnsupportedFormatError
from scholarcv.contexts.exporting.guided import build_word_instructions
from scholarcv.contexts.exporting.html_bundle import build_html_bundle
from scholarcv.contexts.exporting.logger import log_export_failure, log_export_result, log_export_start
from scholarcv.contexts.exporting.pdf import html_to_pdf
from scholarcv.contexts.rendering import AssetResolver, render_cv
from scholarcv.utils.text_processing import sanitize_filename

PDF_FORMAT = "pdf"
HTML_FORMAT = "html"
WORD_FORMATS = ("doc", "docx", "word")
SUPPORTED_FORMATS = (PDF_FORMAT, HTML_FORMAT) + WORD_FORMATS


@dataclass(frozen=True)
class ExportArtifact:
    """
    A finished export, ready to be written to disk or sent as a download.

    Attributes:
        content: File bytes
        content_type: MIME type of content
        filename: Suggested download filename
    """

    content: bytes
    content_type: str
    filename: str


def normalize_format(export_format: Optional[str]) -> str:
    """
    Lowercase a requested format and check it against SUPPORTED_FORMATS.

    Raises:
        UnsupportedFormatError: For anything outside SUPPORTED_FORMATS
    """
    normalized = (export_format or "").strip().lower()
    if normalized not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(export_format, SUPPORTED_FORMATS)
    return normalized


def export_cv(
    cv: CVDocument,
    export_format: str = PDF_FORMAT,
    theme_id: Optional[str] = None,
    layout_id: Optional[str] = None,
    custom_theme: Any = None,
    asset_resolver: Optional[AssetResolver] = None,
    timeout_ms: Optional[int] = None,
) -> ExportArtifact:
    """
    Export a CV in the requested format.

    Args:
        cv: Hydrated CV document
        export_format: pdf, html, doc, docx or word (case-insensitive)
        theme_id: Theme override; defaults to the CV's theme
        layout_id: Layout override; defaults to the CV's layout
        custom_theme: Custom theme override; defaults to the CV's custom theme
        asset_resolver: Photo resolver passed through to render_cv
        timeout_ms: Bound on the PDF print

    Returns:
        ExportArtifact

    Raises:
        UnsupportedFormatError: For an unknown format (nothing is rendered)
        PdfExportError: If the headless browser fails
    """
    export_format = normalize_format(export_format)
    name = sanitize_filename(cv.title)

    start = time.time()
    log_export_start(cv.id, export_format, theme_id, layout_id)

    render_args = dict(
        theme_id=theme_id,
        layout_id=layout_id,
        custom_theme=custom_theme,
        asset_resolver=asset_resolver,
    )

    try:
        if export_format == PDF_FORMAT:
            output = render_cv(cv, embed_assets=True, **render_args)
            artifact = ExportArtifact(
                content=html_to_pdf(output.markup, timeout_ms=timeout_ms),
                content_type="application/pdf",
                filename=f"{name}.pdf",
            )
        elif export_format == HTML_FORMAT:
            output = render_cv(cv, embed_assets=False, **render_args)
            artifact = ExportArtifact(
                content=build_html_bundle(output),
                content_type="application/zip",
                filename=f"{name}-html.zip",
            )
        else:
            artifact = ExportArtifact(
                content=build_word_instructions(cv),
                content_type="text/html",
                filename=f"{name}-word-instructions.html",
            )
    except ExportError as e:
        log_export_failure(cv.id, export_format, e, time.time() - start)
        raise

    log_export_result(cv.id, artifact, time.time() - start)
    return artifact
