"""
Utility modules for logging and report paths.

Examples:
    >>> from vbrename.utils import setup_logger, ensure_extension
    >>> logger = setup_logger("vbrename")
"""

from .path_utils import (
    PathLike,
    normalize_path,
    ensure_directory,
    ensure_extension,
)

from .logger import (
    setup_logger,
    get_logger,
    VALID_LOG_LEVELS,
)

__all__ = [
    # Path utilities
    "PathLike",
    "normalize_path",
    "ensure_directory",
    "ensure_extension",
    # Logger
    "setup_logger",
    "get_logger",
    "VALID_LOG_LEVELS",
]
