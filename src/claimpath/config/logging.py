"""Root logger setup for the command line.

Log records go to stderr so they never mix with command output on stdout.
``--verbose`` forces DEBUG; otherwise ``CLAIMPATH_LOG_LEVEL`` picks the level.
"""

from __future__ import annotations

import logging
from typing import Final

from .env import optional_log_level_env_var

LOG_LEVEL_ENV_VAR: Final[str] = "CLAIMPATH_LOG_LEVEL"
LOG_FORMAT: Final[str] = "%(levelname)s %(name)s: %(message)s"


def resolve_log_level(*, verbose: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    return optional_log_level_env_var(LOG_LEVEL_ENV_VAR, logging.WARNING)


def configure_logging(
    *,
    verbose: bool = False,
    level: int | None = None,
    force: bool = False,
) -> int:
    """Configure the root logger and return the level that was applied.

    An explicit ``level`` overrides both ``verbose`` and the environment.
    """

    if level is None:
        level = resolve_log_level(verbose=verbose)
    logging.basicConfig(level=level, format=LOG_FORMAT, force=force)
    return level
