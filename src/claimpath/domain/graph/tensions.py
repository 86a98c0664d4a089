"""Conflict pairs between claims.

Conflict edges are symmetric: ``A conflicts B`` and ``B conflicts A`` describe
the same tension. Pairs are keyed by their sorted ids, so the first edge for a
pair wins and its question/provenance describe the tension.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from claimpath.domain.model import PAIR_SEPARATOR, ClaimStatus, EdgeKind

if TYPE_CHECKING:
    from collections.abc import Callable, Collection, Iterable, Mapping

    from claimpath.domain.model import ConditionalGate, Edge


@dataclass(frozen=True, slots=True, kw_only=True)
class Tension:
    """Two mutually exclusive claims, ``claim_a_id < claim_b_id``."""

    claim_a_id: str
    claim_b_id: str
    tier: int
    question: str | None = None
    provenance_ids: tuple[str, ...] = ()
    blocked_by_gates: tuple[str, ...] = ()

    @property
    def key(self) -> str:
        return f"{self.claim_a_id}{PAIR_SEPARATOR}{self.claim_b_id}"

    @property
    def claim_ids(self) -> tuple[str, str]:
        return self.claim_a_id, self.claim_b_id

    def is_live(self, claim_status: Mapping[str, ClaimStatus]) -> bool:
        return all(
            claim_status.get(claim_id) is ClaimStatus.ACTIVE for claim_id in self.claim_ids
        )

    def is_blocked(self, resolved_gate_ids: Collection[str]) -> bool:
        """Whether an upstream gate still has to be answered first."""

        return any(gate_id not in resolved_gate_ids for gate_id in self.blocked_by_gates)


def extract_tensions(
    edges: Iterable[Edge],
    *,
    gates: Iterable[ConditionalGate],
    tier_of: Callable[[str], int],
    upstream_of: Callable[[Iterable[str]], tuple[str, ...]],
) -> tuple[Tension, ...]:
    """Deduplicate conflict edges into tensions, in first-seen edge order."""

    gates = tuple(gates)
    tensions: list[Tension] = []
    seen: set[tuple[str, str]] = set()

    for edge in edges:
        if edge.kind is not EdgeKind.CONFLICT:
            continue
        pair = edge.pair_key
        if pair in seen:
            continue
        seen.add(pair)

        a, b = pair
        scope = {a, b, *upstream_of(pair)}
        tensions.append(
            Tension(
                claim_a_id=a,
                claim_b_id=b,
                tier=max(tier_of(a), tier_of(b)) + 1,
                question=edge.question,
                provenance_ids=edge.provenance_ids,
                blocked_by_gates=tuple(
                    gate.id for gate in gates if scope.intersection(gate.affected_claims)
                ),
            )
        )

    return tuple(tensions)
