"""Immutable claim decision graph for one conversation turn.

``build_claim_graph`` is the only supported way to construct a graph. It:

1) deduplicates claims and drops relationships that reference unknown claims
2) assigns anchor/challenger roles from support ratios
3) computes prerequisite tiers, reporting cycles instead of failing
4) extracts deduplicated tensions from conflict edges

The resulting graph is read-only. Traversal state is tracked separately and
only ever refers to claims by id.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from claimpath.config import TraversalConfig
from claimpath.domain.model import PAIR_SEPARATOR, EdgeKind

from .closure import reachable_from
from .diagnostics import Diagnostic, DiagnosticKind, GraphDiagnostics
from .roles import assign_roles, support_ratio
from .tensions import extract_tensions
from .tiers import compute_tiers

if TYPE_CHECKING:
    from collections.abc import Iterable

    from claimpath.domain.model import Claim, ConditionalGate, Edge

    from .tensions import Tension
    from .tiers import Cycle

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class ClaimGraph:
    """Annotated claims plus the relationships between them.

    ``claims`` keeps input order. ``prerequisites`` maps a claim to the claims
    it depends on; ``dependents`` is the inverse.
    """

    total_perspectives: int
    _claims_by_id: dict[str, Claim] = field(repr=False)
    edges: tuple[Edge, ...] = ()
    gates: tuple[ConditionalGate, ...] = ()
    tensions: tuple[Tension, ...] = ()
    cycles: tuple[Cycle, ...] = ()
    diagnostics: GraphDiagnostics = field(default_factory=GraphDiagnostics)
    _prerequisites: dict[str, tuple[str, ...]] = field(default_factory=dict, repr=False)
    _dependents: dict[str, tuple[str, ...]] = field(default_factory=dict, repr=False)

    @property
    def claims(self) -> tuple[Claim, ...]:
        return tuple(self._claims_by_id.values())

    @property
    def claim_ids(self) -> tuple[str, ...]:
        return tuple(self._claims_by_id)

    @property
    def max_tier(self) -> int:
        return max((claim.tier for claim in self._claims_by_id.values()), default=0)

    @property
    def roots(self) -> tuple[str, ...]:
        """Claims with neither prerequisites nor a conditional gate."""

        gated = {claim_id for gate in self.gates for claim_id in gate.affected_claims}
        return tuple(
            claim_id
            for claim_id in self._claims_by_id
            if not self._prerequisites.get(claim_id) and claim_id not in gated
        )

    def __contains__(self, claim_id: object) -> bool:
        return claim_id in self._claims_by_id

    def claim_for(self, claim_id: str) -> Claim | None:
        return self._claims_by_id.get(claim_id)

    def label_for(self, claim_id: str) -> str:
        claim = self._claims_by_id.get(claim_id)
        return claim.label if claim is not None and claim.label else claim_id

    def tier_of(self, claim_id: str) -> int:
        claim = self._claims_by_id.get(claim_id)
        return claim.tier if claim is not None else 0

    def prerequisites_of(self, claim_id: str) -> tuple[str, ...]:
        return self._prerequisites.get(claim_id, ())

    def dependents_of(self, claim_id: str) -> tuple[str, ...]:
        return self._dependents.get(claim_id, ())

    def upstream_of(self, claim_ids: Iterable[str]) -> tuple[str, ...]:
        """Transitive prerequisites of ``claim_ids``."""

        return reachable_from(claim_ids, self._prerequisites)

    def downstream_of(self, claim_ids: Iterable[str]) -> tuple[str, ...]:
        """Transitive dependents of ``claim_ids``."""

        return reachable_from(claim_ids, self._dependents)

    def claims_by_tier(self) -> dict[int, tuple[str, ...]]:
        grouped: dict[int, list[str]] = {}
        for claim in self._claims_by_id.values():
            grouped.setdefault(claim.tier, []).append(claim.id)
        return {tier: tuple(grouped[tier]) for tier in sorted(grouped)}


def build_claim_graph(
    claims: Iterable[Claim],
    edges: Iterable[Edge] = (),
    gates: Iterable[ConditionalGate] = (),
    *,
    total_perspectives: int,
    config: TraversalConfig | None = None,
) -> ClaimGraph:
    """Build an annotated, read-only graph from assembler output."""

    config = config or TraversalConfig()
    diagnostics: list[Diagnostic] = []

    claims_by_id = _unique_claims(claims, diagnostics)
    kept_edges = _valid_edges(edges, claims_by_id.keys(), diagnostics)
    kept_gates = _valid_gates(gates, claims_by_id.keys(), diagnostics)

    prerequisites: dict[str, list[str]] = {claim_id: [] for claim_id in claims_by_id}
    dependents: dict[str, list[str]] = {claim_id: [] for claim_id in claims_by_id}
    for edge in kept_edges:
        if edge.kind is EdgeKind.PREREQUISITE:
            prerequisites[edge.target_id].append(edge.source_id)
            dependents[edge.source_id].append(edge.target_id)

    roles = assign_roles(
        tuple(claims_by_id.values()),
        kept_edges,
        total_perspectives=total_perspectives,
        config=config,
    )
    tier_result = compute_tiers(claims_by_id, prerequisites)
    for cycle in tier_result.cycles:
        _record(
            diagnostics,
            DiagnosticKind.PREREQUISITE_CYCLE,
            f"Prerequisite cycle resolved to tier 0: {' -> '.join(cycle)}",
            cycle,
        )

    annotated = {
        claim_id: replace(
            claim,
            role=roles[claim_id],
            support_ratio=support_ratio(claim.support_count, total_perspectives),
            tier=tier_result.tier_of(claim_id),
        )
        for claim_id, claim in claims_by_id.items()
    }
    frozen_prerequisites = {claim_id: tuple(deps) for claim_id, deps in prerequisites.items()}

    tensions = extract_tensions(
        kept_edges,
        gates=kept_gates,
        tier_of=tier_result.tier_of,
        upstream_of=lambda ids: reachable_from(ids, frozen_prerequisites),
    )

    graph = ClaimGraph(
        total_perspectives=total_perspectives,
        _claims_by_id=annotated,
        edges=kept_edges,
        gates=kept_gates,
        tensions=tensions,
        cycles=tier_result.cycles,
        diagnostics=GraphDiagnostics(tuple(diagnostics)),
        _prerequisites=frozen_prerequisites,
        _dependents={claim_id: tuple(ids) for claim_id, ids in dependents.items()},
    )
    log.debug(
        "Built claim graph: claims=%s, edges=%s, gates=%s, tensions=%s, max_tier=%s",
        len(annotated),
        len(kept_edges),
        len(kept_gates),
        len(tensions),
        graph.max_tier,
    )
    return graph


def _unique_claims(claims: Iterable[Claim], diagnostics: list[Diagnostic]) -> dict[str, Claim]:
    claims_by_id: dict[str, Claim] = {}
    for claim in claims:
        if PAIR_SEPARATOR in claim.id:
            _record(
                diagnostics,
                DiagnosticKind.RESERVED_CLAIM_ID,
                f"Claim id {claim.id!r} contains {PAIR_SEPARATOR!r} and was dropped",
                (claim.id,),
            )
            continue
        if claim.id in claims_by_id:
            _record(
                diagnostics,
                DiagnosticKind.DUPLICATE_CLAIM,
                f"Duplicate claim id dropped: {claim.id}",
                (claim.id,),
            )
            continue
        claims_by_id[claim.id] = replace(claim, supporters=tuple(dict.fromkeys(claim.supporters)))
    return claims_by_id


def _valid_edges(
    edges: Iterable[Edge],
    known: Iterable[str],
    diagnostics: list[Diagnostic],
) -> tuple[Edge, ...]:
    known = set(known)
    seen: set[tuple[str, str, EdgeKind]] = set()
    kept: list[Edge] = []
    for edge in edges:
        refs = (edge.source_id, edge.target_id)
        missing = [claim_id for claim_id in refs if claim_id not in known]
        if missing:
            _record(
                diagnostics,
                DiagnosticKind.DANGLING_EDGE,
                f"{edge.kind} edge {edge.source_id} -> {edge.target_id} references "
                f"unknown claim(s): {', '.join(missing)}",
                refs,
            )
            continue
        if edge.source_id == edge.target_id:
            _record(
                diagnostics,
                DiagnosticKind.SELF_LOOP,
                f"{edge.kind} edge on a single claim dropped: {edge.source_id}",
                refs,
            )
            continue
        identity = (edge.source_id, edge.target_id, edge.kind)
        if identity in seen:
            _record(
                diagnostics,
                DiagnosticKind.DUPLICATE_EDGE,
                f"Duplicate {edge.kind} edge dropped: {edge.source_id} -> {edge.target_id}",
                refs,
            )
            continue
        seen.add(identity)
        kept.append(edge)
    return tuple(kept)


def _valid_gates(
    gates: Iterable[ConditionalGate],
    known: Iterable[str],
    diagnostics: list[Diagnostic],
) -> tuple[ConditionalGate, ...]:
    known = set(known)
    # gate ids "x" and "fp_cond_x" map to the same forcing point
    seen: dict[str, str] = {}
    kept: list[ConditionalGate] = []
    for gate in gates:
        first = seen.get(gate.forcing_point_id)
        if first is not None:
            _record(
                diagnostics,
                DiagnosticKind.DUPLICATE_GATE,
                f"Conditional gate {gate.id} dropped: forcing point "
                f"{gate.forcing_point_id} already belongs to gate {first}",
                (gate.id, first),
            )
            continue

        affected = tuple(dict.fromkeys(gate.affected_claims))
        missing = tuple(claim_id for claim_id in affected if claim_id not in known)
        if missing:
            _record(
                diagnostics,
                DiagnosticKind.DANGLING_GATE_CLAIM,
                f"Gate {gate.id} references unknown claim(s): {', '.join(missing)}",
                (gate.id, *missing),
            )
            affected = tuple(claim_id for claim_id in affected if claim_id in known)
        if not affected:
            _record(
                diagnostics,
                DiagnosticKind.EMPTY_GATE,
                f"Gate {gate.id} affects no known claims and was dropped",
                (gate.id,),
            )
            continue

        seen[gate.forcing_point_id] = gate.id
        kept.append(replace(gate, affected_claims=affected))
    return tuple(kept)


def _record(
    diagnostics: list[Diagnostic],
    kind: DiagnosticKind,
    message: str,
    refs: tuple[str, ...],
) -> None:
    log.warning(message)
    diagnostics.append(Diagnostic(kind=kind, message=message, refs=refs))
