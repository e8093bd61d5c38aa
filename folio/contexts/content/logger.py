"""
Content context logger.

Provides logging interface for content context with automatic [content] prefix.
All content modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[content]"

# Wrapper functions with automatic [content] prefix


def _log_info(message: str) -> None:
    """Log info message with [content] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [content] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [content] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [content] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [content] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level content-specific logging helpers


def log_load_start(content_root: Path) -> None:
    """Log start of loading a content tree."""
    _log_info(f"Loading content from {content_root}")


def log_load_result(site, elapsed_time: float) -> None:
    """
    Log result of loading a content tree.

    Args:
        site: SiteContent from SiteContent.load()
        elapsed_time: Time taken to load
    """
    summary = f"{len(site.pages)} pages, {len(site.posts)} posts ({elapsed_time:.2f}s)"
    if site.load_errors:
        _log_warning(f"Loaded {summary} with {len(site.load_errors)} load errors")
        for path, error in site.load_errors:
            _log_error(f"  {path}: {error.message}")
            for problem in getattr(error, "problems", []):
                _log_error(f"    - {problem}")
    else:
        _log_success(f"Loaded {summary}")
