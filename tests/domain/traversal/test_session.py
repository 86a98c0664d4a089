from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from claimpath.domain.model import ClaimStatus, GateAnswer
from claimpath.domain.traversal import (
    ConditionalResolution,
    SnapshotMismatchError,
    TraversalSession,
    TraversalState,
    UnknownForcingPointError,
    parse_gate_answer,
)

if TYPE_CHECKING:
    from claimpath.domain.graph import ClaimGraph


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("y", GateAnswer.YES),
        ("Yes", GateAnswer.YES),
        (" TRUE ", GateAnswer.YES),
        ("satisfied", GateAnswer.YES),
        ("n", GateAnswer.NO),
        ("NO", GateAnswer.NO),
        ("0", GateAnswer.NO),
        ("unsatisfied", GateAnswer.NO),
        ("?", GateAnswer.UNCERTAIN),
        ("Unsure", GateAnswer.UNCERTAIN),
        ("uncertain", GateAnswer.UNCERTAIN),
    ],
)
def test_parse_gate_answer(raw: str, expected: GateAnswer) -> None:
    assert parse_gate_answer(raw) is expected


def test_parse_gate_answer_rejects_anything_else() -> None:
    with pytest.raises(ValueError, match="yes, no or uncertain"):
        parse_gate_answer("maybe")


def test_session_walks_to_completion(layered_graph: ClaimGraph) -> None:
    session = TraversalSession.start(layered_graph, turn_id="turn-1")

    asked: list[str] = []
    answers = {"fp_cond_ga": "yes", "fp_cond_gb": "no", "fp_conflict_c0::c1": "c0"}
    while (point := session.next_forcing_point()) is not None:
        asked.append(point.id)
        session.answer(point.id, answers[point.id])

    assert asked == ["fp_cond_ga", "fp_cond_gb", "fp_conflict_c0::c1"]
    assert session.is_complete
    outcome = session.outcome()
    assert [claim.id for claim in outcome.active_claims] == ["a", "c0"]
    assert [claim.id for claim in outcome.pruned_claims] == ["b", "e", "c1"]
    assert outcome.selected_claim_ids == ("a", "c0")
    assert outcome.path_summary.splitlines() == [
        '✓ "You have savings"',
        '✗ "You invest for 10+ years" — 2 claim(s) pruned',
        '→ Chose "Rent" over "Buy"',
    ]


def test_sessions_do_not_share_state(layered_graph: ClaimGraph) -> None:
    first = TraversalSession.start(layered_graph, turn_id="turn-1")
    second = TraversalSession.start(layered_graph, turn_id="turn-2")

    first.answer_conditional("fp_cond_ga", answer=GateAnswer.NO)

    assert first.state.pruned_ids == ("a", "b", "e")
    assert second.state.pruned_ids == ()
    assert len(second.live_forcing_points()) == 4


def test_unknown_forcing_point_is_rejected(layered_graph: ClaimGraph) -> None:
    session = TraversalSession.start(layered_graph, turn_id="turn-1")

    with pytest.raises(UnknownForcingPointError) as exc:
        session.answer("fp_cond_missing", "yes")

    assert exc.value.forcing_point_id == "fp_cond_missing"


def test_resume_reattaches_matching_state(layered_graph: ClaimGraph) -> None:
    original = TraversalSession.start(layered_graph, turn_id="turn-1")
    original.answer_conflict("fp_conflict_c0::c1", selected_claim_id="c1")

    resumed = TraversalSession.resume(layered_graph, turn_id="turn-1", state=original.state)

    assert resumed.state == original.state
    assert resumed.live_forcing_points() == original.live_forcing_points()


def test_resume_rejects_state_from_another_graph(
    layered_graph: ClaimGraph,
    chain_graph: ClaimGraph,
) -> None:
    foreign = TraversalSession.start(chain_graph, turn_id="turn-1").state

    with pytest.raises(SnapshotMismatchError) as exc:
        TraversalSession.resume(layered_graph, turn_id="turn-1", state=foreign)

    assert exc.value.unknown_ids == ("c2", "c3")
    assert exc.value.missing_ids == ("a", "b", "e")
    assert "missing claims: a, b, e" in str(exc.value)


def test_resume_rejects_unknown_resolutions(layered_graph: ClaimGraph) -> None:
    state = TraversalSession.start(layered_graph, turn_id="turn-1").state
    tampered = TraversalState(
        claim_status=dict.fromkeys(state.claim_status, ClaimStatus.ACTIVE),
        resolutions={
            "fp_cond_elsewhere": ConditionalResolution(
                forcing_point_id="fp_cond_elsewhere", answer=GateAnswer.YES
            )
        },
    )

    with pytest.raises(SnapshotMismatchError) as exc:
        TraversalSession.resume(layered_graph, turn_id="turn-1", state=tampered)

    assert exc.value.unknown_ids == ("fp_cond_elsewhere",)
    assert exc.value.missing_ids == ()


def test_uncertain_answer_settles_gate_without_pruning(layered_graph: ClaimGraph) -> None:
    session = TraversalSession.start(layered_graph, turn_id="turn-1")

    session.answer("fp_cond_ga", "?")

    assert session.state.pruned_ids == ()
    assert session.state.path_steps == ('? "You have savings" — uncertain',)
    next_point = session.next_forcing_point()
    assert next_point is not None
    assert next_point.id == "fp_cond_gb"
    assert session.outcome().selected_claim_ids == ()


def test_outcome_collects_confirmed_claims_and_evidence(layered_graph: ClaimGraph) -> None:
    session = TraversalSession.start(layered_graph, turn_id="turn-1")

    session.answer("fp_cond_gb", "yes")
    session.answer("fp_conflict_c0::c1", "c1")
    session.answer("fp_cond_ga", "unsure")

    outcome = session.outcome()
    assert outcome.selected_claim_ids == ("b", "c1")
    assert outcome.collected_provenance == ("s2",)
