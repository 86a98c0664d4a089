"""JSON adapter for claim-assembler payloads and traversal snapshots."""

from __future__ import annotations

from .schema import (
    ClaimGraphPayload,
    ClaimPayload,
    ConditionalPayload,
    ConditionalResolutionPayload,
    ConflictResolutionPayload,
    EdgePayload,
    TraversalSnapshotPayload,
)
from .translator import (
    parse_claim_graph_payload,
    restore_session,
    restore_state,
    snapshot_session,
    translate_claim_graph,
)

__all__ = [
    "ClaimGraphPayload",
    "ClaimPayload",
    "ConditionalPayload",
    "ConditionalResolutionPayload",
    "ConflictResolutionPayload",
    "EdgePayload",
    "TraversalSnapshotPayload",
    "parse_claim_graph_payload",
    "restore_session",
    "restore_state",
    "snapshot_session",
    "translate_claim_graph",
]
