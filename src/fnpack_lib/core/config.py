# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for fnpack.

This module defines dataclasses representing all configurable aspects of fnpack,
including the ignore file, archive compression, environment variables,
date formats, and exit codes.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class IgnoreSettings:
    """Settings for loading ignore rules."""

    # Name of the ignore file looked up in the root of the packaged directory.
    filename: str = ".gcloudignore"
    # Encoding used to read the ignore file.
    encoding: str = "utf-8"


@dataclass
class PackagerSettings:
    """Settings for Packager operations."""

    # Deflate compression level (0-9) used for archive entries.
    compression_level: int = 7
    # Delete a partially written archive if packaging fails.
    remove_partial: bool = False


@dataclass
class EnvironmentVariables:
    """Environment variable names used by fnpack."""

    # Enables fnpack debug mode.
    debug_mode: str = "FNPACK_DEBUG"
    # Explicit path to the fnpack config file.
    config: str = "FNPACK_CONFIG"


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by fnpack.
    standard: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code for failures of fnpack commands.
    default: int = 91
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 99


@dataclass
class Config:
    """Main configuration for fnpack."""

    ignore: IgnoreSettings = field(default_factory=IgnoreSettings)
    packager: PackagerSettings = field(default_factory=PackagerSettings)
    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    date_formats: DateFormats = field(default_factory=DateFormats)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)

    # Name of the fnpack binary.
    binary_name: str = "fnpack"

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read fnpack config '{config_path}': {e}.")

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            # 1. Explicit environment variable (highest priority)
            Path(env_path)
            if (env_path := os.getenv(EnvironmentVariables.config))
            else None,
            # 2. Current working directory (for development/override)
            Path.cwd() / "fnpack_config.toml",
            # 3. XDG config home (standard user config location)
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "fnpack"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Handles nested dataclasses properly.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        field_name = field_info.name
        field_type = field_info.type

        if field_name in data:
            value = data[field_name]
            if is_dataclass(field_type) and isinstance(value, dict):
                field_values[field_name] = _dict_to_dataclass(field_type, value)
            else:
                field_values[field_name] = value

    return cls(**field_values)


# Global configuration for fnpack.
CFG = Config.load()
