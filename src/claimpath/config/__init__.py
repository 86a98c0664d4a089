"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_log_level_env_var, optional_ratio_env_var
from .errors import ConfigurationError, InvalidConfigurationValueError
from .logging import LOG_FORMAT, LOG_LEVEL_ENV_VAR, configure_logging, resolve_log_level
from .traversal import (
    DEFAULT_HIGH_SUPPORT_THRESHOLD,
    DEFAULT_SUPPORT_DELTA_THRESHOLD,
    TraversalConfig,
    get_traversal_config,
)

__all__ = [
    "DEFAULT_HIGH_SUPPORT_THRESHOLD",
    "DEFAULT_SUPPORT_DELTA_THRESHOLD",
    "LOG_FORMAT",
    "LOG_LEVEL_ENV_VAR",
    "ConfigurationError",
    "InvalidConfigurationValueError",
    "TraversalConfig",
    "configure_logging",
    "get_traversal_config",
    "optional_log_level_env_var",
    "optional_ratio_env_var",
    "resolve_log_level",
]
