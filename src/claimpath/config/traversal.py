"""Thresholds used while building a claim decision graph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_ratio_env_var

DEFAULT_SUPPORT_DELTA_THRESHOLD: Final[float] = 0.15
DEFAULT_HIGH_SUPPORT_THRESHOLD: Final[float] = 0.25

SUPPORT_DELTA_ENV_VAR: Final[str] = "CLAIMPATH_SUPPORT_DELTA_THRESHOLD"
HIGH_SUPPORT_ENV_VAR: Final[str] = "CLAIMPATH_HIGH_SUPPORT_THRESHOLD"


@dataclass(frozen=True, slots=True)
class TraversalConfig:
    """Role-assignment thresholds.

    ``support_delta_threshold`` is the minimum support-ratio gap between two
    conflicting claims before the weaker one is demoted to challenger.
    ``high_support_threshold`` is the ratio at which a claim counts as
    high-support on its own.
    """

    support_delta_threshold: float = DEFAULT_SUPPORT_DELTA_THRESHOLD
    high_support_threshold: float = DEFAULT_HIGH_SUPPORT_THRESHOLD


def get_traversal_config() -> TraversalConfig:
    return TraversalConfig(
        support_delta_threshold=optional_ratio_env_var(
            SUPPORT_DELTA_ENV_VAR, DEFAULT_SUPPORT_DELTA_THRESHOLD
        ),
        high_support_threshold=optional_ratio_env_var(
            HIGH_SUPPORT_ENV_VAR, DEFAULT_HIGH_SUPPORT_THRESHOLD
        ),
    )
