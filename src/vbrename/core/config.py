"""Configuration data model for rename planning runs.

This module defines the ``RenameConfig`` dataclass holding the options that
shape how the engine plans edits and writes its reports. It handles
validation and conversion to and from plain dictionaries so a run profile can
be stored as JSON next to the analysed project.

Example:
    >>> config = RenameConfig(name="legacy-cleanup")
    >>> config.options["skip_string_literals"] = True
    >>> config.validate()
    >>> RenameConfig.from_dict(config.to_dict()).options["skip_string_literals"]
    True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from vbrename.utils.logger import VALID_LOG_LEVELS, get_logger, setup_logger

logger = get_logger("vbrename.core.config")

CONFIG_VERSION = "1.0"


def default_options() -> Dict[str, Any]:
    """Return a fresh copy of the default option values."""
    return {
        "skip_string_literals": False,
        "strip_comments": True,
        "export_indent": 2,
        "log_level": "INFO",
    }


# Expected type of every known option
OPTION_TYPES: Dict[str, type] = {
    "skip_string_literals": bool,
    "strip_comments": bool,
    "export_indent": int,
    "log_level": str,
}


@dataclass
class RenameConfig:
    """Rename run profile.

    Attributes:
        name: Profile name
        version: Schema version (currently "1.0")
        options: Option values, see below

    Options:
        skip_string_literals: Default for ``plan_rename`` calls that do not
            say whether matches inside quoted literals are eligible
        strip_comments: Plan edits against the code part of each line only,
            so names mentioned in trailing comments are left alone
        export_indent: Indentation used by the JSON exporters
        log_level: Level for the ``"vbrename"`` logger
    """

    name: str
    version: str = CONFIG_VERSION
    options: Dict[str, Any] = field(default_factory=default_options)

    def get(self, option: str) -> Any:
        """Return an option value, falling back to its default."""
        if option in self.options:
            return self.options[option]
        return default_options()[option]

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ValueError: If any validation check fails
        """
        if self.version != CONFIG_VERSION:
            raise ValueError(
                f"Invalid version: {self.version}. Expected '{CONFIG_VERSION}'"
            )

        for option, value in self.options.items():
            if option not in OPTION_TYPES:
                raise ValueError(
                    f"Unknown option '{option}' in configuration. "
                    f"Valid options: {sorted(OPTION_TYPES)}"
                )
            expected = OPTION_TYPES[option]
            # bool is a subclass of int; keep the two apart
            if expected is int and isinstance(value, bool):
                raise ValueError(f"Option '{option}' must be an integer")
            if not isinstance(value, expected):
                raise ValueError(
                    f"Option '{option}' must be of type {expected.__name__}"
                )

        if self.get("export_indent") < 0:
            raise ValueError("Option 'export_indent' must be non-negative")

        if self.get("log_level").upper() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.get('log_level')}. "
                f"Expected one of {VALID_LOG_LEVELS}"
            )

        logger.debug(f"Configuration '{self.name}' validated successfully")

    def configure_logging(self, log_file: Path | None = None) -> logging.Logger:
        """Set up the package logger at the configured level."""
        return setup_logger("vbrename", level=self.get("log_level"), log_file=log_file)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for JSON serialization."""
        return {
            "version": self.version,
            "name": self.name,
            "options": self.options.copy(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RenameConfig:
        """Create configuration from dictionary.

        Options missing from ``data`` keep their default values.

        Raises:
            KeyError: If required fields are missing
        """
        try:
            options = default_options()
            options.update(data.get("options", {}))
            config = cls(
                version=data["version"],
                name=data["name"],
                options=options,
            )
        except KeyError as e:
            raise KeyError(f"Missing required field in configuration: {e}")

        logger.debug(f"Created configuration from dictionary: {config.name}")
        return config
