"""
Checking context logger.

Provides logging interface for checking context with automatic [check] prefix.
All checking modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[check]"


def setup_checking_logger(log_dir: Path, content_root: Path, offline: bool = False) -> Path:
    """
    Setup logger for checking context.

    Args:
        log_dir: Directory for this checking session
        content_root: Content root being checked
        offline: Whether external links are skipped (recorded in provenance)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="check",
        log_dir=log_dir,
        extra_provenance={"Content root": content_root, "Offline": offline},
    )


# Wrapper functions with automatic [check] prefix


def _log_info(message: str) -> None:
    """Log info message with [check] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [check] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [check] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [check] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [check] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level checking-specific logging helpers


def log_check_result(result, verbose: bool = False) -> None:
    """
    Log the outcome of one check.

    Args:
        result: CheckResult from a check function
        verbose: Show every issue instead of the first few
    """
    if result.passed:
        _log_success(f"{result.name}: passed ({result.checked} checked)")
    else:
        _log_error(f"{result.name}: {len(result.errors)} errors ({result.checked} checked)")

    issue_limit = None if verbose else 10
    for i, issue in enumerate(result.errors[:issue_limit], 1):
        _log_error(f"  Error {i}: {issue}")
    if issue_limit is not None and len(result.errors) > issue_limit:
        _log_error(f"  ... and {len(result.errors) - issue_limit} more errors")

    # Warnings at debug level (can be noisy)
    if result.warnings:
        _log_warning(f"{result.name}: {len(result.warnings)} warnings")
        for i, issue in enumerate(result.warnings, 1):
            _log_debug(f"  Warning {i}: {issue}")


def log_report_result(report, elapsed_time: float) -> None:
    """Log the overall outcome of a checking session."""
    if report.is_valid:
        _log_success(f"All checks passed ({elapsed_time:.2f}s)")
    else:
        _log_error(f"{len(report.errors)} errors across checks ({elapsed_time:.2f}s)")
