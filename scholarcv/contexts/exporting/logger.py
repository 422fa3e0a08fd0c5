"""
Exporting context logger.

Provides logging interface for exporting context with automatic [export] prefix.
All exporting modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from scholarcv.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[export]"


def setup_exporting_logger(log_dir: Path, export_format: str) -> Path:
    """
    Setup logger for an export session.

    Configures loguru with provenance tracking and export-specific context.

    Args:
        log_dir: Directory for this export session
        export_format: Requested format, recorded in the provenance header

    Returns:
        Path to log file

    Example:
        from scholarcv.contexts.exporting.logger import setup_exporting_logger, _log_info

        log_file = setup_exporting_logger(log_dir, "pdf")
        _log_info("Starting export...")
    """
    return _setup_logger(
        context_name="export",
        log_dir=log_dir,
        extra_provenance={"Format": export_format},
    )


# Wrapper functions with automatic [export] prefix


def _log_info(message: str) -> None:
    """Log info message with [export] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [export] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [export] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [export] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level export-specific logging helpers


def log_export_start(cv_id: str, export_format: str, theme_id=None, layout_id=None) -> None:
    """Log start of an export with its requested inputs."""
    _log_info(f"Exporting CV '{cv_id}' as {export_format}")
    _log_debug(f"  Theme: {theme_id or '(from CV)'}, layout: {layout_id or '(from CV)'}")


def log_export_result(cv_id: str, artifact, elapsed_time: float) -> None:
    """
    Log a finished export.

    Args:
        cv_id: CV identifier
        artifact: ExportArtifact from export_cv()
        elapsed_time: Time taken
    """
    _log_success(f"{cv_id}: exported {artifact.filename} ({len(artifact.content)} bytes, {elapsed_time:.2f}s)")
    _log_debug(f"  Content type: {artifact.content_type}")


def log_export_failure(cv_id: str, export_format: str, error: Exception, elapsed_time: float) -> None:
    """Log a failed export."""
    _log_error(f"Failed to export {cv_id} as {export_format} ({elapsed_time:.2f}s)")
    _log_error(f"  Error: {error}")
