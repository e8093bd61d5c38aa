"""
Session logging shared by the checking and rendering contexts.

Each CLI run gets its own directory under LOGS_PATH holding one log file per
context, headed by a provenance block (command, folio version, content root).
Context-specific wrappers live in contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from folio import __version__
from folio.utils.timestamp import now

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def session_log_dir(logs_path: Path, session: str) -> Path:
    """Timestamped directory for one CLI run, e.g. outs/logs/check_links_20251114_123456."""
    return Path(logs_path) / f"{session}_{now()}"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, Any]] = None,
) -> Path:
    """
    Route loguru output to {log_dir}/{context_name}.log and the console.

    The file receives DEBUG and above (every loaded document, every skipped
    link); the console only INFO and above. Handlers from a previous session
    are removed first, so repeated runs in one process do not double-log.

    Args:
        context_name: Log file stem ("check", "render")
        log_dir: Session directory, created if missing
        extra_provenance: Extra header lines, e.g. {"Content root": path}

    Returns:
        Path to log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.level("WARNING", color="<yellow>")

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra: Optional[Dict[str, Any]] = None) -> None:
    """Write the session header: command line, folio and Python versions, then any extras."""
    logger.info("=" * 80)
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"folio {__version__} on Python {sys.version.split()[0]}")

    for key, value in (extra or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
