"""Caller-owned traversal context for one conversation turn.

A session pairs one claim graph with the forcing points derived from it and
the latest traversal state. Callers keep one session per turn (for example,
keyed by turn id in their own conversation store); the engine itself holds no
module-level state, so independent sessions can run side by side.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from claimpath.domain.model import ForcingPointKind, GateAnswer

from .engine import (
    get_live_forcing_points,
    is_complete,
    next_forcing_point,
    resolve_conditional,
    resolve_conflict,
    traversal_outcome,
)
from .errors import SnapshotMismatchError, UnknownForcingPointError
from .forcing_points import extract_forcing_points
from .state import initial_state

if TYPE_CHECKING:
    from claimpath.domain.graph import ClaimGraph

    from .engine import TraversalOutcome
    from .forcing_points import ForcingPoint
    from .state import TraversalState


@dataclass(slots=True)
class TraversalSession:
    turn_id: str
    graph: ClaimGraph
    forcing_points: tuple[ForcingPoint, ...]
    state: TraversalState

    @classmethod
    def start(cls, graph: ClaimGraph, *, turn_id: str) -> TraversalSession:
        return cls(
            turn_id=turn_id,
            graph=graph,
            forcing_points=extract_forcing_points(graph),
            state=initial_state(graph),
        )

    @classmethod
    def resume(
        cls,
        graph: ClaimGraph,
        *,
        turn_id: str,
        state: TraversalState,
    ) -> TraversalSession:
        """Reattach a stored state to the graph it was derived from."""

        session = cls.start(graph, turn_id=turn_id)
        point_ids = {point.id for point in session.forcing_points}
        unknown = (
            *(claim_id for claim_id in state.claim_status if claim_id not in graph),
            *(point_id for point_id in state.resolutions if point_id not in point_ids),
        )
        missing = tuple(
            claim_id for claim_id in graph.claim_ids if claim_id not in state.claim_status
        )
        if unknown or missing:
            raise SnapshotMismatchError(turn_id, unknown_ids=unknown, missing_ids=missing)
        session.state = state
        return session

    @property
    def is_complete(self) -> bool:
        return is_complete(self.forcing_points, self.state)

    def forcing_point(self, forcing_point_id: str) -> ForcingPoint:
        for point in self.forcing_points:
            if point.id == forcing_point_id:
                return point
        raise UnknownForcingPointError(forcing_point_id)

    def live_forcing_points(self) -> tuple[ForcingPoint, ...]:
        return get_live_forcing_points(self.forcing_points, self.state)

    def next_forcing_point(self) -> ForcingPoint | None:
        return next_forcing_point(self.forcing_points, self.state)

    def answer_conditional(
        self,
        forcing_point_id: str,
        *,
        answer: GateAnswer,
        user_input: str | None = None,
    ) -> TraversalState:
        self.state = resolve_conditional(
            self.state,
            self.graph,
            self.forcing_point(forcing_point_id),
            answer=answer,
            user_input=user_input,
        )
        return self.state

    def answer_conflict(self, forcing_point_id: str, *, selected_claim_id: str) -> TraversalState:
        self.state = resolve_conflict(
            self.state,
            self.graph,
            self.forcing_point(forcing_point_id),
            selected_claim_id=selected_claim_id,
        )
        return self.state

    def answer(self, forcing_point_id: str, value: str) -> TraversalState:
        """Apply a raw answer: yes/no/uncertain for conditionals, a claim id for conflicts."""

        point = self.forcing_point(forcing_point_id)
        if point.kind is ForcingPointKind.CONFLICT:
            return self.answer_conflict(forcing_point_id, selected_claim_id=value)
        return self.answer_conditional(forcing_point_id, answer=parse_gate_answer(value))

    def outcome(self) -> TraversalOutcome:
        return traversal_outcome(self.graph, self.forcing_points, self.state)


_ANSWER_TOKENS = {
    GateAnswer.YES: frozenset({"y", "yes", "true", "1", "satisfied"}),
    GateAnswer.NO: frozenset({"n", "no", "false", "0", "unsatisfied"}),
    GateAnswer.UNCERTAIN: frozenset({"?", "uncertain", "unsure", "unknown"}),
}


def parse_gate_answer(value: str) -> GateAnswer:
    normalized = value.strip().lower()
    for answer, tokens in _ANSWER_TOKENS.items():
        if normalized in tokens:
            return answer
    raise ValueError(f"Expected yes, no or uncertain, got {value!r}")
