"""
Path utilities for report output locations.

This module provides the small set of path helpers used by the logging and
export layers. All functions use pathlib.Path.

Examples:
    >>> from vbrename.utils.path_utils import normalize_path, ensure_extension
    >>> path = ensure_extension(normalize_path("~/reports/Module1"), ".json")
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

# Type alias for path-like objects
PathLike = Union[str, Path]


def normalize_path(path: PathLike) -> Path:
    """
    Convert a string or Path object to a normalized absolute Path.

    Args:
        path: A file system path as string or Path object.

    Returns:
        Normalized absolute Path object.

    Raises:
        ValueError: If path is empty or None.

    Examples:
        >>> normalize_path("~/reports/project.references.json")
        PosixPath('/home/user/reports/project.references.json')
    """
    if path is None or (isinstance(path, str) and not path.strip()):
        raise ValueError("Path cannot be None or empty")

    return Path(path).expanduser().resolve()


def ensure_directory(path: Path) -> Path:
    """
    Create directory if it doesn't exist, return Path.

    Args:
        path: Directory path to create.

    Returns:
        The directory Path object.

    Raises:
        OSError: If directory creation fails.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def ensure_extension(path: Path, ext: str) -> Path:
    """
    Add extension if missing.

    Args:
        path: File path.
        ext: Extension to ensure (with or without leading dot).

    Returns:
        Path with extension.

    Examples:
        >>> ensure_extension(Path("Module1.linereplace"), ".json")
        PosixPath('Module1.linereplace.json')
        >>> ensure_extension(Path("checks.csv"), "csv")
        PosixPath('checks.csv')
    """
    if not ext.startswith('.'):
        ext = '.' + ext
    if path.suffix.lower() == ext.lower():
        return path
    return path.with_name(path.name + ext)
