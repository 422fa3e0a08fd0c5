"""
Text processing utilities for formatting and display.
"""

import re
from typing import Optional

FILENAME_UNSAFE = re.compile(r"[^a-z0-9\-_.]+", re.IGNORECASE)
URL_WITH_PROTOCOL = re.compile(r"^https?://", re.IGNORECASE)
URL_LIKE = re.compile(r"\.[a-z]{2,}$", re.IGNORECASE)
CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def sanitize_filename(name: Optional[str], fallback: str = "CV") -> str:
    """
    Make a download filename out of a CV title.

    Each run of characters outside [a-z0-9-_.] (case-insensitive) becomes a
    single underscore. Blank or missing titles fall back to ``fallback``.

    Example:
        >>> sanitize_filename("My/CV:2024*")
        'My_CV_2024_'
    """
    base = (name or fallback).strip() or fallback
    return FILENAME_UNSAFE.sub("_", base)


def ensure_protocol(url: Optional[str]) -> Optional[str]:
    """Prefix bare hosts with https://, returning None for blank input."""
    if not url:
        return None
    trimmed = str(url).strip()
    if not trimmed:
        return None
    if URL_WITH_PROTOCOL.match(trimmed):
        return trimmed
    return f"https://{trimmed}"


def is_likely_url(value: Optional[str]) -> bool:
    """True for values with a protocol or ending in a domain-like suffix."""
    if not value:
        return False
    trimmed = str(value).strip()
    return bool(URL_WITH_PROTOCOL.match(trimmed) or URL_LIKE.search(trimmed))


def to_snake_case(key: str) -> str:
    """
    Convert a camelCase key to snake_case.

    Example:
        >>> to_snake_case("textPrimary")
        'text_primary'
    """
    return CAMEL_BOUNDARY.sub("_", key).lower()


def humanize_label(value: str) -> str:
    """
    Turn a type token into a display label.

    Example:
        >>> humanize_label("google_scholar")
        'Google Scholar'
    """
    normalized = value.replace("_", " ").lower()
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), normalized)
