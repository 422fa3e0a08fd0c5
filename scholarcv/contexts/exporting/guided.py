"""
Guided Word export.

There is no native .docx writer: asking for doc/docx/word returns a static
HTML page that walks the user through PDF -> Word conversion.
"""

from pathlib import Path
from typing import List

from scholarcv.contexts.composing import CVDocument
from scholarcv.contexts.rendering import TemplateRegistry
from scholarcv.utils.text_processing import sanitize_filename

WORD_TEMPLATES_PATH = Path(__file__).parent / "templates"
WORD_INSTRUCTIONS_TEMPLATE = "word_instructions.html.jinja"


def _steps(filename: str) -> List[dict]:
    return [
        {
            "title": "Export as PDF first",
            "detail": f"Download {filename}.pdf, for example with",
            "command": "export_cv.py export <cv-file> --format pdf",
        },
        {
            "title": "Open PDF in Microsoft Word",
            "detail": 'Right-click the downloaded PDF file and select "Open with" > "Microsoft Word".',
            "command": None,
        },
        {
            "title": "Save as Word Document",
            "detail": 'In Word, go to File > Save As and choose the ".docx" format.',
            "command": None,
        },
    ]


def build_word_instructions(cv: CVDocument, registry: TemplateRegistry = None) -> bytes:
    """
    Render the PDF-to-Word instruction page for a CV.

    Args:
        cv: CV document (only its title is used)
        registry: Template registry; defaults to the exporting templates

    Returns:
        UTF-8 encoded HTML page
    """
    if registry is None:
        registry = TemplateRegistry(WORD_TEMPLATES_PATH)
    filename = sanitize_filename(cv.title)
    markup = registry.render(
        WORD_INSTRUCTIONS_TEMPLATE,
        title=filename,
        cv_title=cv.title or cv.full_name or "your CV",
        steps=_steps(filename),
    )
    return markup.encode("utf-8")
