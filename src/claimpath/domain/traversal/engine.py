"""Traversal state machine.

Every operation is a pure function of ``(state, action)``: the returned state
is a fresh value and the given one is left untouched. Answers prune claims,
and pruning cascades along prerequisite edges until the whole dependency
chain below the pruned claims is gone. A pruned claim never becomes active
again within one traversal.

Responsibilities of this module:
- apply conditional and conflict answers
- decide which forcing points are still live, and which one to ask next
- expose the active/pruned claim sets for synthesis

Misuse by the caller (answering twice, choosing a non-option) raises a
``TraversalContractError`` subclass.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING

from claimpath.domain.model import ClaimStatus, ForcingPointKind, GateAnswer

from .errors import ForcingPointAlreadyResolvedError, ForcingPointKindError, InvalidSelectionError
from .state import ConditionalResolution, ConflictResolution, TraversalState
from .summary import build_path_summary, render_conditional_step, render_conflict_step

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from claimpath.domain.graph import ClaimGraph, Tension
    from claimpath.domain.model import Claim

    from .forcing_points import ForcingPoint
    from .state import Resolution

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class TraversalOutcome:
    """What the synthesis layer needs once questions stop."""

    active_claims: tuple[Claim, ...]
    pruned_claims: tuple[Claim, ...]
    path_summary: str
    is_complete: bool
    selected_claim_ids: tuple[str, ...] = ()
    collected_provenance: tuple[str, ...] = ()


def resolve_conditional(
    state: TraversalState,
    graph: ClaimGraph,
    forcing_point: ForcingPoint,
    *,
    answer: GateAnswer,
    user_input: str | None = None,
) -> TraversalState:
    """Answer a conditional gate.

    ``NO`` prunes the gate's claims and their dependents. ``YES`` confirms the
    claims. ``UNCERTAIN`` settles the question without pruning anything.
    """

    _ensure_resolvable(state, forcing_point, expected=ForcingPointKind.CONDITIONAL)

    claim_status = dict(state.claim_status)
    pruned: tuple[str, ...] = ()
    if answer is GateAnswer.NO:
        pruned = _prune(claim_status, graph, forcing_point.affected_claims)

    resolution = ConditionalResolution(
        forcing_point_id=forcing_point.id,
        answer=answer,
        user_input=user_input,
        gate_id=forcing_point.gate_id,
    )
    step = render_conditional_step(
        forcing_point.condition,
        answer=answer,
        user_input=user_input,
        pruned_count=len(pruned),
    )
    log.debug("Resolved %s: answer=%s, pruned=%s", forcing_point.id, answer, pruned)
    return _next_state(state, claim_status=claim_status, resolution=resolution, step=step)


def resolve_conflict(
    state: TraversalState,
    graph: ClaimGraph,
    forcing_point: ForcingPoint,
    *,
    selected_claim_id: str,
) -> TraversalState:
    """Keep ``selected_claim_id`` and prune every other option of the conflict."""

    _ensure_resolvable(state, forcing_point, expected=ForcingPointKind.CONFLICT)
    selected = forcing_point.option_for(selected_claim_id)
    if selected is None:
        raise InvalidSelectionError(
            forcing_point.id, selected_claim_id, forcing_point.option_ids
        )
    if not state.is_active(selected_claim_id):
        raise InvalidSelectionError(
            forcing_point.id,
            selected_claim_id,
            forcing_point.option_ids,
            reason="already pruned",
        )

    rejected = tuple(
        option for option in forcing_point.options if option.claim_id != selected_claim_id
    )
    claim_status = dict(state.claim_status)
    pruned = _prune(claim_status, graph, (option.claim_id for option in rejected))

    resolution = ConflictResolution(
        forcing_point_id=forcing_point.id,
        selected_claim_id=selected.claim_id,
        selected_label=selected.label,
        rejected_claim_ids=tuple(option.claim_id for option in rejected),
    )
    step = render_conflict_step(selected.label, (option.label for option in rejected))
    log.debug("Resolved %s: selected=%s, pruned=%s", forcing_point.id, selected_claim_id, pruned)
    return _next_state(state, claim_status=claim_status, resolution=resolution, step=step)


def get_live_forcing_points(
    points: Sequence[ForcingPoint],
    state: TraversalState,
) -> tuple[ForcingPoint, ...]:
    """Unresolved points whose answer can still change the active claim set."""

    return tuple(point for point in points if _is_live(point, state))


def is_complete(points: Sequence[ForcingPoint], state: TraversalState) -> bool:
    return not get_live_forcing_points(points, state)


def next_forcing_point(
    points: Sequence[ForcingPoint],
    state: TraversalState,
) -> ForcingPoint | None:
    """The first live point whose upstream points are settled.

    A blocker is settled once it is resolved or no longer live. If every live
    point is still blocked (only possible with cyclic gate dependencies) the
    first live point is returned so a traversal can always progress.
    """

    live = get_live_forcing_points(points, state)
    if not live:
        return None

    live_ids = {point.id for point in live}
    for point in live:
        if all(
            blocker in state.resolutions or blocker not in live_ids
            for blocker in point.blocked_by
        ):
            return point
    return live[0]


def live_tensions(graph: ClaimGraph, state: TraversalState) -> tuple[Tension, ...]:
    return tuple(tension for tension in graph.tensions if tension.is_live(state.claim_status))


def active_claims(graph: ClaimGraph, state: TraversalState) -> tuple[Claim, ...]:
    return tuple(claim for claim in graph.claims if state.is_active(claim.id))


def pruned_claims(graph: ClaimGraph, state: TraversalState) -> tuple[Claim, ...]:
    return tuple(
        claim for claim in graph.claims if state.status_of(claim.id) is ClaimStatus.PRUNED
    )


def collected_evidence(
    graph: ClaimGraph,
    points: Sequence[ForcingPoint],
    state: TraversalState,
) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Claims the user explicitly kept, and the provenance behind them.

    A claim is kept when a gate covering it was answered yes or it won a
    conflict, and it is still active. Both tuples follow answer order.
    """

    points_by_id = {point.id: point for point in points}
    selected: dict[str, None] = {}
    for resolution in state.resolutions.values():
        if isinstance(resolution, ConflictResolution):
            candidates: Iterable[str] = (resolution.selected_claim_id,)
        elif resolution.answer is GateAnswer.YES:
            point = points_by_id.get(resolution.forcing_point_id)
            candidates = point.affected_claims if point is not None else ()
        else:
            continue
        selected.update((claim_id, None) for claim_id in candidates if state.is_active(claim_id))

    provenance: dict[str, None] = {}
    for claim_id in selected:
        claim = graph.claim_for(claim_id)
        if claim is not None:
            provenance.update(dict.fromkeys(claim.provenance_ids))
    return tuple(selected), tuple(provenance)


def traversal_outcome(
    graph: ClaimGraph,
    points: Sequence[ForcingPoint],
    state: TraversalState,
) -> TraversalOutcome:
    selected, provenance = collected_evidence(graph, points, state)
    return TraversalOutcome(
        active_claims=active_claims(graph, state),
        pruned_claims=pruned_claims(graph, state),
        path_summary=build_path_summary(state),
        is_complete=is_complete(points, state),
        selected_claim_ids=selected,
        collected_provenance=provenance,
    )


def cascade_pruning(
    state: TraversalState,
    graph: ClaimGraph,
    claim_ids: Iterable[str],
) -> TraversalState:
    """Prune ``claim_ids`` and everything that transitively depends on them."""

    claim_status = dict(state.claim_status)
    _prune(claim_status, graph, claim_ids)
    return TraversalState(
        claim_status=claim_status,
        resolutions=state.resolutions,
        path_steps=state.path_steps,
    )


def _is_live(point: ForcingPoint, state: TraversalState) -> bool:
    if point.id in state.resolutions:
        return False
    if point.kind is ForcingPointKind.CONDITIONAL:
        return any(state.is_active(claim_id) for claim_id in point.affected_claims)
    return sum(1 for claim_id in point.option_ids if state.is_active(claim_id)) >= 2


def _ensure_resolvable(
    state: TraversalState,
    point: ForcingPoint,
    *,
    expected: ForcingPointKind,
) -> None:
    if point.kind is not expected:
        raise ForcingPointKindError(point.id, expected=expected, actual=point.kind)
    if point.id in state.resolutions:
        raise ForcingPointAlreadyResolvedError(point.id)


def _prune(
    claim_status: dict[str, ClaimStatus],
    graph: ClaimGraph,
    claim_ids: Iterable[str],
) -> tuple[str, ...]:
    """Prune in place, breadth-first along dependents; return newly pruned ids."""

    newly_pruned: list[str] = []
    queue: deque[str] = deque()
    for claim_id in claim_ids:
        if claim_status.get(claim_id) is ClaimStatus.ACTIVE:
            claim_status[claim_id] = ClaimStatus.PRUNED
            newly_pruned.append(claim_id)
            queue.append(claim_id)

    while queue:
        for dependent_id in graph.dependents_of(queue.popleft()):
            if claim_status.get(dependent_id) is ClaimStatus.ACTIVE:
                claim_status[dependent_id] = ClaimStatus.PRUNED
                newly_pruned.append(dependent_id)
                queue.append(dependent_id)

    return tuple(newly_pruned)


def _next_state(
    state: TraversalState,
    *,
    claim_status: dict[str, ClaimStatus],
    resolution: Resolution,
    step: str,
) -> TraversalState:
    return TraversalState(
        claim_status=claim_status,
        resolutions={**state.resolutions, resolution.forcing_point_id: resolution},
        path_steps=(*state.path_steps, step),
    )
