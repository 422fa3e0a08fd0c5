"""
Composing context logger.

Provides logging interface for composing context with automatic [compose] prefix.
All composing modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[compose]"


def _log_debug(message: str) -> None:
    """Log debug message with [compose] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_composition(cv_id: str, layout_id: str, columns) -> None:
    """Log which sections landed in which column."""
    counts = ", ".join(str(len(column)) for column in columns)
    _log_debug(f"Composed CV '{cv_id}' with layout '{layout_id}' ({counts} sections per column)")
    for index, column in enumerate(columns):
        for instance in column:
            _log_debug(f"  column {index}: {instance.section_id} ({instance.placement.width})")
