"""Environment variable loaders for configuration."""

from __future__ import annotations

import logging
import os

from .errors import InvalidConfigurationValueError


def optional_ratio_env_var(name: str, default: float) -> float:
    """Return a ratio in ``[0, 1]`` from the environment, or ``default`` if unset/blank."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default

    try:
        value = float(raw)
    except ValueError as exc:
        raise InvalidConfigurationValueError(name, raw, "not a number") from exc

    if not 0.0 <= value <= 1.0:
        raise InvalidConfigurationValueError(name, raw, "must be between 0 and 1")
    return value


_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def optional_log_level_env_var(name: str, default: int) -> int:
    """Return a ``logging`` level from a level name in the environment."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default

    level = _LOG_LEVELS.get(raw.strip().lower())
    if level is None:
        raise InvalidConfigurationValueError(
            name, raw, f"expected one of {', '.join(_LOG_LEVELS)}"
        )
    return level
