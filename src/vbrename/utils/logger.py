"""
Logging setup for the ``vbrename`` package.

Engine modules log through children of the ``"vbrename"`` logger, so one
``setup_logger()`` call (or ``RenameConfig.configure_logging``) configures
the whole package: a short console format, plus an optional rotating file
with source locations.

Examples:
    >>> logger = setup_logger(level="DEBUG", log_file=Path("logs/vbrename.log"))
    >>> get_logger("vbrename.core.references").debug("Reference list created")
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from .path_utils import ensure_directory

ROOT_LOGGER_NAME = "vbrename"

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# File logs roll over at 10MB, keeping 5 old files
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def _resolve_level(level: str) -> int:
    if level.upper() not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}. Must be one of {VALID_LOG_LEVELS}")
    return getattr(logging, level.upper())


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(log_file: Path) -> logging.Handler:
    ensure_directory(log_file.parent)
    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str = "INFO",
    log_file: Path | None = None,
) -> logging.Logger:
    """Attach a console handler (and a file handler) to logger ``name``.

    Repeated calls update the level but never stack handlers. The file
    handler always records DEBUG and above.

    Raises:
        ValueError: If ``level`` is not one of ``VALID_LOG_LEVELS``
    """
    numeric_level = _resolve_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    file_handlers = [
        h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    console_handlers = [
        h for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and h not in file_handlers
    ]

    if console_handlers:
        for handler in console_handlers:
            handler.setLevel(numeric_level)
    else:
        logger.addHandler(_console_handler(numeric_level))

    if log_file is not None and not file_handlers:
        logger.addHandler(_file_handler(log_file))

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return logger ``name``, setting up a console logger only if nothing
    upstream (the logger, an ancestor or the root) already has handlers."""
    logger = logging.getLogger(name)
    if logger.hasHandlers():
        return logger
    return setup_logger(name)
