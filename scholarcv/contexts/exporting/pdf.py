"""
PDF export through a headless Chromium print.

One browser is launched per call and closed on every exit path; nothing is
pooled or retried. The page is printed on A4 with the same margins as the
rendered page frame.
"""

import os

from dotenv import load_dotenv
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from scholarcv.contexts.exporting.exceptions import PdfExportError
from scholarcv.contexts.exporting.logger import _log_debug
from scholarcv.contexts.rendering import PAGE_MARGINS_MM, PAGE_SIZE

load_dotenv()
PDF_EXPORT_TIMEOUT_MS = int(os.getenv("PDF_EXPORT_TIMEOUT_MS", "30000"))
PDF_BROWSER_ARGS = [
    arg.strip()
    for arg in os.getenv("PDF_BROWSER_ARGS", "--no-sandbox,--disable-setuid-sandbox").split(",")
    if arg.strip()
]

PDF_MARGINS = {side: f"{mm}mm" for side, mm in PAGE_MARGINS_MM.items()}


def html_to_pdf(markup: str, timeout_ms: int = None) -> bytes:
    """
    Print HTML markup to PDF bytes.

    Args:
        markup: Self-contained HTML document
        timeout_ms: Bound on browser launch, page load and printing.
                    Defaults to PDF_EXPORT_TIMEOUT_MS

    Returns:
        PDF file content

    Raises:
        PdfExportError: If the browser fails to launch, load or print in time
    """
    timeout = timeout_ms if timeout_ms is not None else PDF_EXPORT_TIMEOUT_MS

    try:
        with sync_playwright() as playwright:
            browser = playwright.chromium.launch(headless=True, args=PDF_BROWSER_ARGS, timeout=timeout)
            try:
                page = browser.new_page()
                page.set_default_timeout(timeout)
                page.set_content(markup, wait_until="networkidle", timeout=timeout)
                pdf = page.pdf(
                    format=PAGE_SIZE,
                    margin=PDF_MARGINS,
                    print_background=True,
                    prefer_css_page_size=True,
                    display_header_footer=False,
                )
            finally:
                browser.close()
    except PlaywrightTimeoutError as e:
        raise PdfExportError(f"PDF export timed out after {timeout} ms", original_error=e) from e
    except PlaywrightError as e:
        raise PdfExportError("Headless browser failed to print the CV", original_error=e) from e

    _log_debug(f"Printed PDF ({len(pdf)} bytes)")
    return pdf
