from __future__ import annotations

from .claims import (
    CONDITIONAL_POINT_PREFIX,
    PAIR_SEPARATOR,
    Claim,
    ConditionalGate,
    Edge,
    conditional_point_id,
)
from .enums import ClaimRole, ClaimStatus, ClaimType, EdgeKind, ForcingPointKind, GateAnswer

__all__ = [
    "CONDITIONAL_POINT_PREFIX",
    "PAIR_SEPARATOR",
    "Claim",
    "ClaimRole",
    "ClaimStatus",
    "ClaimType",
    "ConditionalGate",
    "Edge",
    "EdgeKind",
    "ForcingPointKind",
    "GateAnswer",
    "conditional_point_id",
]
