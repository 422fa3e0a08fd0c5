"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[render]"


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(cv_id: str, theme_id: str, layout_id: str, custom_theme_id=None) -> None:
    """Log start of a render with its resolved inputs."""
    _log_debug(f"Rendering CV '{cv_id}' (theme: {theme_id}, layout: {layout_id})")
    if custom_theme_id:
        _log_debug(f"  Custom theme: {custom_theme_id}")


def log_render_result(cv_id: str, output, elapsed_time: float) -> None:
    """
    Log a finished render.

    Args:
        cv_id: CV identifier
        output: RenderedOutput from render_document()
        elapsed_time: Time taken
    """
    _log_debug(
        f"Rendered CV '{cv_id}': {len(output.markup)} chars, "
        f"{len(output.assets)} asset(s) ({elapsed_time:.3f}s)"
    )
