"""Loguru logging configuration for the CLI and library.

Terminal output stays short at INFO and above; DEBUG adds the source
location. The optional log file always records the full format and is
written as UTF-8, since pharmacy and district names are Turkish.
"""

import sys
from pathlib import Path

from loguru import logger

from pharmacy_finder.core.config import Settings

LOG_FILE_NAME = "pharmacy-finder.log"

_SHORT_FORMAT = "<level>{level:<8}</level> | {message}"
_FULL_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> Path | None:
    """Configure Loguru sinks.

    Args:
        log_level: Minimum log level to emit, case-insensitive.
        log_dir: Optional directory for a log file rotated daily and kept 7 days.

    Returns:
        Path of the log file, or None when file logging is off.
    """
    level = log_level.upper()
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=_FULL_FORMAT if level in ("TRACE", "DEBUG") else _SHORT_FORMAT,
    )

    if not log_dir:
        return None

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / LOG_FILE_NAME
    logger.add(
        log_file,
        level=level,
        format=_FULL_FORMAT,
        rotation="1 day",
        retention="7 days",
        encoding="utf-8",
    )
    return log_file


def setup_logging_from_settings(settings: Settings) -> Path | None:
    """Configure logging from the ``log_level`` and ``log_dir`` settings."""
    return setup_logging(settings.log_level, settings.log_dir)
