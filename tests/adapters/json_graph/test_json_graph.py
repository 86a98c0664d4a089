from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from claimpath.adapters.json_graph import (
    ClaimGraphPayload,
    ConditionalResolutionPayload,
    ConflictResolutionPayload,
    TraversalSnapshotPayload,
    parse_claim_graph_payload,
    restore_session,
    snapshot_session,
    translate_claim_graph,
)
from claimpath.domain.graph import DiagnosticKind
from claimpath.domain.model import ClaimRole, ClaimStatus, ClaimType, GateAnswer
from claimpath.domain.traversal import (
    ConflictResolution,
    SnapshotMismatchError,
    TraversalSession,
    extract_forcing_points,
)

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def payload(claim_graph_path: Path) -> ClaimGraphPayload:
    return parse_claim_graph_payload(claim_graph_path.read_bytes())


def test_payload_accepts_assembler_aliases(payload: ClaimGraphPayload) -> None:
    assert payload.total_perspectives == 4
    assert payload.claims[0].provenance_ids == ["s1", "s2"]
    assert payload.edges[0].source == "c_budget"
    assert payload.edges[0].target == "c_index"
    assert payload.conditionals[1].affected_claims == ["c_crypto", "c_missing"]


def test_payload_accepts_snake_case_names() -> None:
    payload = ClaimGraphPayload.model_validate(
        {
            "total_perspectives": 2,
            "claims": [{"id": "c0", "label": "Save", "provenance_ids": ["s1"]}],
            "edges": [],
            "conditionals": [{"id": "g0", "affected_claims": ["c0"]}],
        }
    )

    assert payload.claims[0].provenance_ids == ["s1"]
    assert payload.conditionals[0].affected_claims == ["c0"]


def test_payload_rejects_negative_perspective_count() -> None:
    with pytest.raises(ValidationError):
        ClaimGraphPayload.model_validate({"modelCount": -1, "claims": []})


def test_payload_requires_claim_ids() -> None:
    with pytest.raises(ValidationError):
        parse_claim_graph_payload(json.dumps({"modelCount": 1, "claims": [{"label": "x"}]}))


def test_translate_builds_annotated_graph(
    payload: ClaimGraphPayload,
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.DEBUG, logger="claimpath.adapters.json_graph.translator")

    graph = translate_claim_graph(payload)

    assert graph.claim_ids == ("c_budget", "c_index", "c_stocks", "c_rebalance", "c_crypto")
    assert {claim.id: claim.tier for claim in graph.claims} == {
        "c_budget": 0,
        "c_index": 1,
        "c_stocks": 0,
        "c_rebalance": 2,
        "c_crypto": 0,
    }
    stocks = graph.claim_for("c_stocks")
    crypto = graph.claim_for("c_crypto")
    assert stocks is not None
    assert crypto is not None
    assert stocks.role is ClaimRole.CHALLENGER
    assert crypto.claim_type is ClaimType.SPECULATIVE
    assert "Skipping supports edge c_budget -> c_crypto" in caplog.text

    (tension,) = graph.tensions
    assert tension.key == "c_index::c_stocks"
    assert tension.tier == 2
    assert tension.question == "Passive or active investing?"
    assert tension.blocked_by_gates == ("g_employer",)

    assert [entry.kind for entry in graph.diagnostics.entries] == [
        DiagnosticKind.DANGLING_EDGE,
        DiagnosticKind.DANGLING_GATE_CLAIM,
    ]


def test_sample_forcing_points(payload: ClaimGraphPayload) -> None:
    points = extract_forcing_points(translate_claim_graph(payload))

    assert [(point.id, point.tier, point.question) for point in points] == [
        ("fp_cond_g_risk", 0, "You tolerate high volatility"),
        ("fp_cond_g_employer", 1, "Do you have access to an employer retirement plan?"),
        ("fp_conflict_c_index::c_stocks", 2, "Passive or active investing?"),
    ]
    assert points[2].blocked_by == ("fp_cond_g_employer",)
    assert points[2].provenance_ids == ("s3", "s4", "s5")


def test_snapshot_round_trip_restores_session(payload: ClaimGraphPayload) -> None:
    graph = translate_claim_graph(payload)
    session = TraversalSession.start(graph, turn_id="turn-7")
    session.answer("fp_cond_g_risk", "yes")
    session.answer("fp_conflict_c_index::c_stocks", "c_index")

    raw = snapshot_session(session).model_dump_json()
    assert '"answer":"yes"' in raw
    restored = restore_session(TraversalSnapshotPayload.model_validate_json(raw), graph)

    assert restored.turn_id == "turn-7"
    assert restored.state == session.state
    assert restored.state.resolutions["fp_conflict_c_index::c_stocks"] == ConflictResolution(
        forcing_point_id="fp_conflict_c_index::c_stocks",
        selected_claim_id="c_index",
        selected_label="Buy index funds",
        rejected_claim_ids=("c_stocks",),
    )


def test_snapshot_resolutions_are_discriminated_by_kind() -> None:
    snapshot = TraversalSnapshotPayload.model_validate(
        {
            "turn_id": "turn-1",
            "claim_status": {"c0": "active", "c1": "pruned"},
            "resolutions": [
                {"kind": "conditional", "forcing_point_id": "fp_cond_g0", "answer": "no"},
                {
                    "kind": "conflict",
                    "forcing_point_id": "fp_conflict_c0::c1",
                    "selected_claim_id": "c0",
                },
            ],
        }
    )

    conditional, conflict = snapshot.resolutions
    assert isinstance(conditional, ConditionalResolutionPayload)
    assert conditional.answer is GateAnswer.NO
    assert isinstance(conflict, ConflictResolutionPayload)
    assert snapshot.claim_status["c1"] is ClaimStatus.PRUNED


def test_snapshot_for_another_graph_is_rejected(payload: ClaimGraphPayload) -> None:
    graph = translate_claim_graph(payload)
    snapshot = TraversalSnapshotPayload(
        turn_id="turn-1",
        claim_status={"c_other": ClaimStatus.ACTIVE},
    )

    with pytest.raises(SnapshotMismatchError) as exc:
        restore_session(snapshot, graph)

    assert exc.value.unknown_ids == ("c_other",)
    assert exc.value.missing_ids == graph.claim_ids
