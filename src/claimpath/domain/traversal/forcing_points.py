"""Forcing point extraction.

A forcing point is one user-facing question whose answer collapses part of
the claim graph. Conditional gates and conflict tensions each become one
forcing point. The extracted sequence is ordered by:

1) ascending tier
2) conditionals before conflicts within a tier
3) extraction order (gate order, then first-seen conflict edge order)

The sequence is immutable. Points that become moot because their claims were
pruned stay in it; the state machine filters them by liveness.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from claimpath.domain.model import ForcingPointKind, conditional_point_id

if TYPE_CHECKING:
    from claimpath.domain.graph import ClaimGraph, Tension
    from claimpath.domain.model import ConditionalGate

CONFLICT_ID_PREFIX = "fp_conflict_"
DEFAULT_CONDITIONAL_QUESTION = "Is this applicable to your situation?"

_KIND_ORDER = {ForcingPointKind.CONDITIONAL: 0, ForcingPointKind.CONFLICT: 1}
_SUMMARY_LABEL_LIMIT = 3


@dataclass(frozen=True, slots=True, kw_only=True)
class PrerequisiteInfo:
    """Advisory context: a claim the option depends on."""

    claim_id: str
    label: str
    text: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictOption:
    claim_id: str
    label: str
    text: str = ""
    prerequisites: tuple[PrerequisiteInfo, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ForcingPoint:
    id: str
    kind: ForcingPointKind
    tier: int
    question: str
    condition: str
    affected_claims: tuple[str, ...] = ()
    options: tuple[ConflictOption, ...] = ()
    blocked_by: tuple[str, ...] = ()
    provenance_ids: tuple[str, ...] = ()
    gate_id: str | None = None

    @property
    def option_ids(self) -> tuple[str, ...]:
        return tuple(option.claim_id for option in self.options)

    @property
    def target_claims(self) -> tuple[str, ...]:
        """Claims whose status this point can change."""

        if self.kind is ForcingPointKind.CONDITIONAL:
            return self.affected_claims
        return self.option_ids

    def option_for(self, claim_id: str) -> ConflictOption | None:
        for option in self.options:
            if option.claim_id == claim_id:
                return option
        return None


@dataclass(frozen=True, slots=True, kw_only=True)
class ForcingPointMeta:
    conditional_count: int
    conflict_count: int
    max_tier: int


def conflict_point_id(tension: Tension) -> str:
    return f"{CONFLICT_ID_PREFIX}{tension.key}"


def extract_forcing_points(graph: ClaimGraph) -> tuple[ForcingPoint, ...]:
    """Derive the ordered forcing point sequence for ``graph``."""

    points = [
        *(_conditional_point(gate, graph) for gate in graph.gates),
        *(_conflict_point(tension, graph) for tension in graph.tensions),
    ]
    return tuple(sorted(points, key=lambda point: (point.tier, _KIND_ORDER[point.kind])))


def summarize_forcing_points(points: tuple[ForcingPoint, ...]) -> ForcingPointMeta:
    return ForcingPointMeta(
        conditional_count=sum(1 for p in points if p.kind is ForcingPointKind.CONDITIONAL),
        conflict_count=sum(1 for p in points if p.kind is ForcingPointKind.CONFLICT),
        max_tier=max((point.tier for point in points), default=0),
    )


def _conditional_point(gate: ConditionalGate, graph: ClaimGraph) -> ForcingPoint:
    point_id = gate.forcing_point_id
    affected = tuple(dict.fromkeys(gate.affected_claims))
    question, condition = _conditional_wording(gate, point_id=point_id, graph=graph)

    provenance = set(gate.provenance_ids)
    for claim_id in affected:
        claim = graph.claim_for(claim_id)
        if claim is not None:
            provenance.update(claim.provenance_ids)

    return ForcingPoint(
        id=point_id,
        kind=ForcingPointKind.CONDITIONAL,
        tier=max((graph.tier_of(claim_id) for claim_id in affected), default=0),
        question=question,
        condition=condition,
        affected_claims=affected,
        blocked_by=_upstream_gate_points(gate, graph),
        provenance_ids=tuple(sorted(provenance)),
        gate_id=gate.id,
    )


def _conditional_wording(
    gate: ConditionalGate,
    *,
    point_id: str,
    graph: ClaimGraph,
) -> tuple[str, str]:
    raw = (gate.question or gate.condition or "").strip()
    placeholders = {point_id, gate.id, f"Condition: {point_id}", f"Condition: {gate.id}"}
    if raw and raw not in placeholders:
        condition = gate.condition.strip() or raw
        return raw, condition

    labels = [graph.label_for(claim_id) for claim_id in gate.affected_claims]
    summary = ", ".join(labels[:_SUMMARY_LABEL_LIMIT])
    if len(labels) > _SUMMARY_LABEL_LIMIT:
        summary += f" +{len(labels) - _SUMMARY_LABEL_LIMIT} more"
    condition = f"Affects: {summary}" if summary else f"Affects {len(labels)} claim(s)"
    return DEFAULT_CONDITIONAL_QUESTION, condition


def _upstream_gate_points(gate: ConditionalGate, graph: ClaimGraph) -> tuple[str, ...]:
    """Gates guarding a prerequisite of ``gate``'s claims must be asked first.

    A pair of gates that are each upstream of the other (possible with
    prerequisite cycles) do not block one another.
    """

    upstream = _strict_upstream(gate, graph)
    blockers: list[str] = []
    for other in graph.gates:
        if other.id == gate.id or not upstream.intersection(other.affected_claims):
            continue
        if _strict_upstream(other, graph).intersection(gate.affected_claims):
            continue
        blockers.append(other.forcing_point_id)
    return tuple(blockers)


def _strict_upstream(gate: ConditionalGate, graph: ClaimGraph) -> set[str]:
    return set(graph.upstream_of(gate.affected_claims)).difference(gate.affected_claims)


def _conflict_point(tension: Tension, graph: ClaimGraph) -> ForcingPoint:
    options = tuple(_conflict_option(claim_id, graph) for claim_id in tension.claim_ids)
    a_label, b_label = (option.label for option in options)

    provenance = set(tension.provenance_ids)
    for claim_id in tension.claim_ids:
        claim = graph.claim_for(claim_id)
        if claim is not None:
            provenance.update(claim.provenance_ids)

    question = (tension.question or "").strip() or f"Choose between: {a_label} vs {b_label}"
    return ForcingPoint(
        id=conflict_point_id(tension),
        kind=ForcingPointKind.CONFLICT,
        tier=tension.tier,
        question=question,
        condition=f"{a_label} vs {b_label}",
        options=options,
        blocked_by=tuple(conditional_point_id(gate_id) for gate_id in tension.blocked_by_gates),
        provenance_ids=tuple(sorted(provenance)),
    )


def _conflict_option(claim_id: str, graph: ClaimGraph) -> ConflictOption:
    return ConflictOption(
        claim_id=claim_id,
        label=graph.label_for(claim_id),
        text=_text_of(claim_id, graph),
        prerequisites=tuple(
            PrerequisiteInfo(
                claim_id=prereq_id,
                label=graph.label_for(prereq_id),
                text=_text_of(prereq_id, graph),
            )
            for prereq_id in graph.prerequisites_of(claim_id)
        ),
    )


def _text_of(claim_id: str, graph: ClaimGraph) -> str:
    claim = graph.claim_for(claim_id)
    return claim.text if claim is not None else ""
