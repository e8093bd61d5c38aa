"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, content_root: Path, output_dir: Path) -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this build session
        content_root: Content root being rendered
        output_dir: Directory the site is written to

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Content root": content_root, "Output": output_dir},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_build_start(content_root: Path, output_dir: Path, num_documents: int) -> None:
    """Log start of a site build with context."""
    _log_info(f"Building {num_documents} documents from {content_root}")
    _log_debug(f"  Output: {output_dir}")


def log_build_result(result, elapsed_time: float) -> None:
    """
    Log build result.

    Args:
        result: BuildResult from build_site()
        elapsed_time: Time taken to build
    """
    if result.success:
        _log_success(f"Build succeeded: {len(result.written)} files ({elapsed_time:.2f}s)")
        _log_info(f"  Output: {result.output_dir}")
    else:
        _log_error(f"Build failed ({elapsed_time:.2f}s)")
        for i, err in enumerate(result.errors, 1):
            _log_error(f"  Error {i}: {err}")
