################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""This is the internal module for loading and overriding the chronos settings.

The settings are read from the environment once, on first use. ``configure()``
replaces them for the rest of the process.
"""
import logging
import os
import threading
import typing as t

from pydantic import ValidationError

from .. import exceptions
from ..schema.settings import Settings
from ._env import DEFAULT_TIMEZONE_ENV

logger = logging.getLogger(__name__)

_settings: t.Optional[Settings] = None
_lock = threading.Lock()


def _build_settings(**values: t.Any) -> Settings:
    try:
        return Settings(**values)
    except ValidationError as e:
        raise exceptions.ConfigurationError(f"Invalid chronos settings: {e}") from e


def load_settings_from_env() -> Settings:
    """Builds settings from the environment variables.

    Raises:
        chronos.exceptions.ConfigurationError: when a variable holds an invalid
            value.
    """
    values: t.Dict[str, t.Any] = {}
    if (tz_name := os.getenv(DEFAULT_TIMEZONE_ENV)) is not None:
        values["default_timezone"] = tz_name

    return _build_settings(**values)


def get_settings() -> Settings:
    """Returns the current process-wide settings, loading them if needed."""
    global _settings

    # Reading a module global is atomic. The lock only guards the first load.
    if (current := _settings) is not None:
        return current

    with _lock:
        if _settings is None:
            _settings = load_settings_from_env()
            logger.debug("Loaded %s", _settings)
        return _settings


def configure(**overrides: t.Any) -> Settings:
    """Overrides the process-wide settings.

    Unspecified fields keep their current values.

    Example:
        >>> chronos.configure(default_timezone="Europe/Warsaw")

    Raises:
        chronos.exceptions.ConfigurationError: when the resulting settings are
            invalid. The previous settings are kept in that case.
    """
    global _settings

    with _lock:
        base = _settings if _settings is not None else load_settings_from_env()
        new_settings = _build_settings(**{**base.model_dump(), **overrides})
        _settings = new_settings

    logger.debug("Reconfigured: %s", new_settings)
    return new_settings


def reset_settings():
    """Drops the loaded settings. The next read goes back to the environment."""
    global _settings

    with _lock:
        _settings = None
