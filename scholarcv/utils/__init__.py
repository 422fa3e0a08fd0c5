"""
Shared utilities for scholarcv.

Common functionality used across contexts:
- Logger setup with provenance
- Text processing helpers
- Timestamps for CLI output directories
"""

from scholarcv.utils.text_processing import sanitize_filename
from scholarcv.utils.timestamp import now

__all__ = ["sanitize_filename", "now"]
