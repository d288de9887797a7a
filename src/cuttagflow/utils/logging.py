"""Centralized logging utilities for CutTagFlow.

Provides a single place to configure logging and fetch namespaced loggers.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"

# Log rotation settings
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_BACKUP_COUNT = 5

LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> None:
    """Configure logging for the 'cuttagflow' namespace.

    Args:
        level: Logging level for the application logger
        log_file: Optional path for log file output
        max_bytes: Maximum size per log file before rotation (default: 10MB)
        backup_count: Number of backup files to keep (default: 5)

    Notes:
        - Root logger kept at WARNING to suppress third-party noise
        - Console handler uses concise format; file handler (if any) is detailed at DEBUG
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)

    app_logger = logging.getLogger("cuttagflow")
    app_logger.setLevel(logging.DEBUG if log_file else level)
    # Avoid duplicate logs if called multiple times
    for h in list(app_logger.handlers):
        app_logger.removeHandler(h)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    app_logger.addHandler(console)

    if log_file:
        try:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
            app_logger.addHandler(file_handler)
        except OSError as e:
            import warnings

            warnings.warn(f"Failed to create log file {log_file}: {e}")

    # Do not propagate to root to avoid double-printing
    app_logger.propagate = False


def level_from_verbosity(verbose: int) -> int:
    """Map a -v count to a logging level."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def level_from_name(name: Optional[str], default: int = logging.WARNING) -> int:
    """Map a config level name (case-insensitive) to a logging level."""
    if not name:
        return default
    return LEVEL_NAMES.get(str(name).upper(), default)


def get_logger(name: str) -> logging.Logger:
    """Return a namespaced logger under 'cuttagflow' root."""
    base = logging.getLogger("cuttagflow")
    return base.getChild(name)


class LogTemplates:
    """Standard log message templates for stage and tool lifecycle events."""

    STAGE_START = "Running stage {stage_number}: {stage_name}"
    STAGE_SUCCESS = "Completed stage {stage_number}: {stage_name} ({duration:.1f}s)"
    STAGE_FAILURE = "Stage {stage_number} failed: {stage_name} - {error}"
    STAGE_SKIPPED = "Skipping stage {stage_number}: {stage_name} (already done)"

    INDEX_FOUND = "Found existing {kind}: {path}"
    INDEX_BUILD = "Building {kind}: {path}"
