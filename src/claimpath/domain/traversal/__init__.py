"""Forcing point extraction and the traversal state machine.

Flow for one conversation turn:
1) extract ordered forcing points from a built ``ClaimGraph``
2) start from ``initial_state`` (every claim active)
3) ask ``next_forcing_point`` and feed the answer to ``resolve_conditional`` or
   ``resolve_conflict``
4) stop once ``is_complete``; hand ``traversal_outcome`` to synthesis
"""

from __future__ import annotations

from .engine import (
    TraversalOutcome,
    active_claims,
    cascade_pruning,
    collected_evidence,
    get_live_forcing_points,
    is_complete,
    live_tensions,
    next_forcing_point,
    pruned_claims,
    resolve_conditional,
    resolve_conflict,
    traversal_outcome,
)
from .errors import (
    ForcingPointAlreadyResolvedError,
    ForcingPointKindError,
    InvalidSelectionError,
    SnapshotMismatchError,
    TraversalContractError,
    UnknownForcingPointError,
)
from .forcing_points import (
    ConflictOption,
    ForcingPoint,
    ForcingPointMeta,
    PrerequisiteInfo,
    conditional_point_id,
    conflict_point_id,
    extract_forcing_points,
    summarize_forcing_points,
)
from .session import TraversalSession, parse_gate_answer
from .state import (
    ConditionalResolution,
    ConflictResolution,
    Resolution,
    TraversalState,
    initial_state,
)
from .summary import NO_CONSTRAINTS_SUMMARY, build_path_summary

__all__ = [
    "NO_CONSTRAINTS_SUMMARY",
    "ConditionalResolution",
    "ConflictOption",
    "ConflictResolution",
    "ForcingPoint",
    "ForcingPointAlreadyResolvedError",
    "ForcingPointKindError",
    "ForcingPointMeta",
    "InvalidSelectionError",
    "PrerequisiteInfo",
    "Resolution",
    "SnapshotMismatchError",
    "TraversalContractError",
    "TraversalOutcome",
    "TraversalSession",
    "TraversalState",
    "UnknownForcingPointError",
    "active_claims",
    "build_path_summary",
    "cascade_pruning",
    "collected_evidence",
    "conditional_point_id",
    "conflict_point_id",
    "extract_forcing_points",
    "get_live_forcing_points",
    "initial_state",
    "is_complete",
    "live_tensions",
    "next_forcing_point",
    "parse_gate_answer",
    "pruned_claims",
    "resolve_conditional",
    "resolve_conflict",
    "summarize_forcing_points",
    "traversal_outcome",
]
