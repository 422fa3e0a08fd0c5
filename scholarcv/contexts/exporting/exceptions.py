"""Custom exceptions for exporting context."""

from typing import Iterable, Optional


class ExportError(Exception):
    """Base class for failures while producing an export artifact."""


class UnsupportedFormatError(ExportError, ValueError):
    """
    Exception raised for an export format outside the supported set.

    Raised before anything is rendered.

    Attributes:
        export_format: The rejected format string
        supported: Formats that would have been accepted
    """

    def __init__(self, export_format: Optional[str], supported: Iterable[str] = ()):
        self.export_format = export_format
        self.supported = tuple(supported)

        message = f"Unsupported export format: {export_format!r}"
        if self.supported:
            message += f" (expected one of: {', '.join(self.supported)})"

        super().__init__(message)


class PdfExportError(ExportError):
    """
    Exception raised when the headless browser fails to print a PDF.

    Attributes:
        message: Error description
        original_error: The underlying Playwright error or timeout
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error

        parts = [message]

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
