"""
Theming context logger.

Provides logging interface for theming context with automatic [theme] prefix.
All theming modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[theme]"


def _log_warning(message: str) -> None:
    """Log warning message with [theme] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [theme] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_catalog_loaded(kind: str, path, ids) -> None:
    """Log a freshly loaded theme or layout catalog."""
    _log_debug(f"Loaded {len(ids)} {kind} from {path}")
    _log_debug(f"  ids: {', '.join(ids)}")


def log_fallback(kind: str, requested, fallback_id: str) -> None:
    """Log a lookup miss that degraded to the catalog default."""
    if requested:
        _log_debug(f"Unknown {kind} '{requested}', using '{fallback_id}'")
