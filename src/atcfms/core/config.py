"""Configuration loader for YAML files.

This module provides configuration loading with support for nested access,
built-in MCP preset defaults, and overlaying user files on top of those defaults.

Typical usage example:
    from atcfms.core.config import ConfigLoader

    config = ConfigLoader.with_defaults("config/fms.yaml")
    preset = config.get("mode_presets.arrival")
"""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


DEFAULT_FMS_CONFIG: dict[str, Any] = {
    "mode_presets": {
        "arrival": {
            "altitude": {"mode": "VNAV"},
            "heading": {"mode": "LNAV"},
            "speed": {"mode": "VNAV"},
        },
        "departure": {
            "altitude": {"mode": "VNAV"},
            "heading": {"mode": "LNAV"},
            "speed": {"mode": "HOLD", "value": 250},
        },
    },
}


class ConfigError(Exception):
    """Raised when configuration operations fail."""


class ConfigLoader:
    """Configuration loader for YAML files.

    Provides loading, nested access, and default values for configuration.

    Examples:
        >>> config = ConfigLoader.load("config/fms.yaml")
        >>> mode = config.get("mode_presets.arrival.altitude.mode", default="VNAV")
    """

    def __init__(self, data: dict[str, Any]) -> None:
        """Initialize with configuration data.

        Args:
            data: Configuration dictionary.
        """
        self._data = data

    @classmethod
    def load(cls, path: str | Path) -> "ConfigLoader":
        """Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            ConfigLoader instance with loaded data.

        Raises:
            ConfigError: If file cannot be loaded.
        """
        path = Path(path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {path}")

        logger.info("Loaded configuration from: %s", path)
        return cls(data)

    @classmethod
    def defaults(cls) -> "ConfigLoader":
        """Return a loader holding a private copy of the built-in FMS defaults."""
        return cls(copy.deepcopy(DEFAULT_FMS_CONFIG))

    @classmethod
    def with_defaults(cls, path: str | Path | None = None) -> "ConfigLoader":
        """Load a YAML file and overlay it on the built-in defaults.

        Args:
            path: Optional path to a user configuration file.

        Returns:
            ConfigLoader with defaults merged with the file's values.
        """
        config = cls.defaults()
        if path is not None:
            config.merge(cls.load(path))
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation.

        Args:
            key: Configuration key (supports dot notation).
            default: Default value if key not found.

        Returns:
            Configuration value or default.

        Examples:
            >>> config.get("mode_presets.departure.speed.value", default=250)
        """
        value = self._data

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_section(self, key: str) -> dict[str, Any]:
        """Get an entire configuration section.

        Args:
            key: Section key (supports dot notation).

        Returns:
            Configuration section as dictionary.

        Raises:
            ConfigError: If section not found or not a dict.
        """
        value = self.get(key)

        if value is None:
            raise ConfigError(f"Configuration section not found: {key}")

        if not isinstance(value, dict):
            raise ConfigError(f"Configuration key is not a section: {key}")

        return value

    def merge(self, other: "ConfigLoader") -> None:
        """Merge another configuration into this one.

        Values from ``other`` win over existing ones.
        """
        self._data = self._merge_dicts(self._data, other._data)

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value

        return result

    def to_dict(self) -> dict[str, Any]:
        """Get the configuration as a dictionary."""
        return copy.deepcopy(self._data)
