"""Logging system for the FMS core and its collaborators.

This module provides a small logging layer with YAML configuration and
per-component loggers. Getting a logger never touches the root logger:
handlers are installed only by an explicit ``initialize_logging()`` call,
normally made by the application hosting the FMS. Console logging is on by
default; file logging is opt-in through the ``file`` section.

Typical usage example:
    from atcfms.core.logging_system import get_logger

    logger = get_logger(__name__)
    logger.info("Sequenced to %s", waypoint.name)
"""

import logging
import time
from pathlib import Path
from typing import Any

import yaml

_logging_config: dict[str, Any] = {}
_loggers_cache: dict[str, logging.Logger] = {}


class LoggingError(Exception):
    """Raised when logging system operations fail."""


def initialize_logging(config_path: str | Path | None = None) -> None:
    """Initialize the logging system from YAML configuration.

    Should be called once at startup by the hosting application. It takes
    over the root logger: existing root handlers are replaced. Calling it
    again replaces the handlers installed by the previous call.

    Args:
        config_path: Path to logging configuration YAML file.
            If None, uses default configuration.

    Raises:
        LoggingError: If the configuration file is missing, unreadable or
            names an unknown level.

    Examples:
        >>> initialize_logging("config/logging.yaml")
        >>> log = get_logger("atcfms.avionics.fms")
    """
    global _logging_config

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise LoggingError(f"Logging config file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise LoggingError(f"Failed to load logging config: {e}") from e

        if not isinstance(loaded, dict):
            raise LoggingError(f"Logging config root must be a mapping: {config_path}")

        _logging_config = {**_get_default_config(), **loaded}
    else:
        _logging_config = _get_default_config()

    _loggers_cache.clear()
    _configure_root_logger()

    # Module loggers are created at import time, before this call
    for name in _logging_config.get("components", {}):
        get_logger(name)


def _get_default_config() -> dict[str, Any]:
    """Get default logging configuration.

    Returns:
        Default logging configuration dictionary.
    """
    return {
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "date_format": "%Y-%m-%d %H:%M:%S",
        "console": {
            "enabled": True,
            "level": "INFO",
        },
        "file": {
            "enabled": False,
            "log_dir": "logs",
            "filename": "atcfms.log",
        },
        "components": {},
    }


def _configure_root_logger() -> None:
    """Configure the root logger with handlers."""
    console_config = _logging_config.get("console", {})
    root_level = _parse_level(_logging_config.get("level", "INFO"))
    console_level = _parse_level(console_config.get("level", "INFO"))

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)
    root_logger.handlers.clear()

    if console_config.get("enabled", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(_get_formatter())
        root_logger.addHandler(console_handler)

    file_config = _logging_config.get("file", {})
    if file_config.get("enabled", False):
        log_dir = Path(file_config.get("log_dir", "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(
            log_dir / file_config.get("filename", "atcfms.log"),
            mode="a",
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(_get_formatter())
        root_logger.addHandler(file_handler)


def _parse_level(level: str | int) -> int:
    """Convert a level name (any case) or number to a logging level.

    Raises:
        LoggingError: If the level name is unknown.
    """
    if isinstance(level, int):
        return level

    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise LoggingError(f"Unknown logging level: {level}")
    return value


class MillisecondFormatter(logging.Formatter):
    """Formatter that appends milliseconds with a dot separator."""

    def formatTime(self, record, datefmt=None):
        ct = self.converter(record.created)
        s = time.strftime(datefmt or "%Y-%m-%d %H:%M:%S", ct)
        return f"{s}.{int(record.msecs):03d}"


def _get_formatter() -> logging.Formatter:
    fmt = _logging_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    datefmt = _logging_config.get("date_format", "%Y-%m-%d %H:%M:%S")
    return MillisecondFormatter(fmt, datefmt)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a component.

    Loggers are cached and reused. A logger's level can be set per component
    under the ``components`` section of the logging config, and a component
    can be silenced entirely with ``enabled: false``. No handler is
    installed here; records propagate to whatever the host configured.

    Args:
        name: Logger name (typically the module ``__name__``).

    Returns:
        Configured logger instance.

    Examples:
        >>> log = get_logger("atcfms.avionics.leg")
        >>> log.debug("Built %d waypoints", count)
    """
    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = logging.getLogger(name)

    component_config = _logging_config.get("components", {}).get(name, {})

    if component_config.get("enabled", True):
        if "level" in component_config:
            logger.setLevel(_parse_level(component_config["level"]))
        logger.disabled = False
    else:
        logger.disabled = True

    _loggers_cache[name] = logger
    return logger


def shutdown_logging() -> None:
    """Flush and close all handlers and forget cached loggers."""
    logging.shutdown()
    _loggers_cache.clear()
