"""Logging configuration for BioGraph Records.

Record construction and reversal log at DEBUG, batch pack/unpack and graph
export at INFO, biolink model refreshes at INFO (WARNING when a download
fails). The package logger carries the configured level; third-party HTTP
loggers are held at WARNING.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .settings import get_settings

PACKAGE_LOGGER = "biograph_records"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
QUIET_LOGGERS = ("urllib3", "requests")


def _resolve_level(level: Optional[str]) -> int:
    name = (level or get_settings().log_level).upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {name}")
    return resolved


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """Configure logging for the package.

    Args:
        level: Logging level name (default: settings.log_level)
        log_file: Optional file path for log output
        format_string: Optional custom format string

    Returns:
        The package logger

    Example:
        >>> setup_logging(level="DEBUG", log_file=Path("logs/records.log"))
    """
    resolved = _resolve_level(level)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    logging.basicConfig(
        level=resolved,
        format=format_string or DEFAULT_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(resolved)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logging.getLogger().addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    package_logger.debug(f"Logging configured at {logging.getLevelName(resolved)}")
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, nested under the package logger when given a bare name."""
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
