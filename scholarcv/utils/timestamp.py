"""Timestamp helpers for naming CLI log and export directories."""

from datetime import datetime


def now() -> str:
    """Compact local timestamp, e.g. 20251114_123456."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")
