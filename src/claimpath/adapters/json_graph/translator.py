"""Translate JSON payloads into domain graphs and traversal states, and back."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from claimpath.domain.graph import build_claim_graph
from claimpath.domain.model import Claim, ClaimType, ConditionalGate, Edge, EdgeKind
from claimpath.domain.traversal import (
    ConditionalResolution,
    ConflictResolution,
    TraversalSession,
    TraversalState,
)

from .schema import (
    ClaimGraphPayload,
    ConditionalResolutionPayload,
    ConflictResolutionPayload,
    TraversalSnapshotPayload,
)

if TYPE_CHECKING:
    from claimpath.config import TraversalConfig
    from claimpath.domain.graph import ClaimGraph
    from claimpath.domain.traversal import Resolution

    from .schema import ClaimPayload, ConditionalPayload, EdgePayload, ResolutionPayload

log = getLogger(__name__)

_EDGE_KINDS = {kind.value: kind for kind in EdgeKind}


def parse_claim_graph_payload(raw: str | bytes) -> ClaimGraphPayload:
    return ClaimGraphPayload.model_validate_json(raw)


def translate_claim_graph(
    payload: ClaimGraphPayload,
    *,
    config: TraversalConfig | None = None,
) -> ClaimGraph:
    """Build a domain graph; edge types other than prerequisite/conflict are skipped."""

    edges: list[Edge] = []
    for edge_payload in payload.edges:
        edge = _translate_edge(edge_payload)
        if edge is None:
            log.debug(
                "Skipping %s edge %s -> %s",
                edge_payload.type,
                edge_payload.source,
                edge_payload.target,
            )
            continue
        edges.append(edge)

    return build_claim_graph(
        (_translate_claim(claim) for claim in payload.claims),
        edges,
        (_translate_gate(gate) for gate in payload.conditionals),
        total_perspectives=payload.total_perspectives,
        config=config,
    )


def snapshot_session(session: TraversalSession) -> TraversalSnapshotPayload:
    state = session.state
    return TraversalSnapshotPayload(
        turn_id=session.turn_id,
        claim_status=dict(state.claim_status),
        resolutions=[_resolution_payload(resolution) for resolution in state.resolutions.values()],
        path_steps=list(state.path_steps),
    )


def restore_state(snapshot: TraversalSnapshotPayload) -> TraversalState:
    return TraversalState(
        claim_status=dict(snapshot.claim_status),
        resolutions={
            resolution.forcing_point_id: _translate_resolution(resolution)
            for resolution in snapshot.resolutions
        },
        path_steps=tuple(snapshot.path_steps),
    )


def restore_session(snapshot: TraversalSnapshotPayload, graph: ClaimGraph) -> TraversalSession:
    return TraversalSession.resume(graph, turn_id=snapshot.turn_id, state=restore_state(snapshot))


def _translate_claim(payload: ClaimPayload) -> Claim:
    return Claim(
        id=payload.id,
        label=payload.label,
        text=payload.text,
        claim_type=ClaimType.parse(payload.type),
        supporters=tuple(payload.supporters),
        provenance_ids=tuple(payload.provenance_ids),
    )


def _translate_edge(payload: EdgePayload) -> Edge | None:
    kind = _EDGE_KINDS.get(payload.type.strip().lower())
    if kind is None:
        return None
    return Edge(
        source_id=payload.source,
        target_id=payload.target,
        kind=kind,
        question=payload.question,
        provenance_ids=tuple(payload.provenance_ids),
    )


def _translate_gate(payload: ConditionalPayload) -> ConditionalGate:
    return ConditionalGate(
        id=payload.id,
        affected_claims=tuple(claim_id.strip() for claim_id in payload.affected_claims),
        condition=payload.condition,
        question=payload.question,
        provenance_ids=tuple(payload.provenance_ids),
    )


def _resolution_payload(resolution: Resolution) -> ResolutionPayload:
    if isinstance(resolution, ConditionalResolution):
        return ConditionalResolutionPayload(
            forcing_point_id=resolution.forcing_point_id,
            answer=resolution.answer,
            user_input=resolution.user_input,
            gate_id=resolution.gate_id,
        )
    return ConflictResolutionPayload(
        forcing_point_id=resolution.forcing_point_id,
        selected_claim_id=resolution.selected_claim_id,
        selected_label=resolution.selected_label,
        rejected_claim_ids=list(resolution.rejected_claim_ids),
    )


def _translate_resolution(payload: ResolutionPayload) -> Resolution:
    if isinstance(payload, ConditionalResolutionPayload):
        return ConditionalResolution(
            forcing_point_id=payload.forcing_point_id,
            answer=payload.answer,
            user_input=payload.user_input,
            gate_id=payload.gate_id,
        )
    return ConflictResolution(
        forcing_point_id=payload.forcing_point_id,
        selected_claim_id=payload.selected_claim_id,
        selected_label=payload.selected_label,
        rejected_claim_ids=tuple(payload.rejected_claim_ids),
    )
