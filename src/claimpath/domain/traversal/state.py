"""Traversal state values.

A ``TraversalState`` is a value: transitions build a new state and never
mutate the one they were given. A state only makes sense together with the
claim graph it was created from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, TypeAlias

from claimpath.domain.model import ClaimStatus, ForcingPointKind, GateAnswer

if TYPE_CHECKING:
    from collections.abc import Mapping

    from claimpath.domain.graph import ClaimGraph


@dataclass(frozen=True, slots=True, kw_only=True)
class ConditionalResolution:
    forcing_point_id: str
    answer: GateAnswer
    user_input: str | None = None
    gate_id: str | None = None
    kind: Literal[ForcingPointKind.CONDITIONAL] = ForcingPointKind.CONDITIONAL


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictResolution:
    forcing_point_id: str
    selected_claim_id: str
    selected_label: str = ""
    rejected_claim_ids: tuple[str, ...] = ()
    kind: Literal[ForcingPointKind.CONFLICT] = ForcingPointKind.CONFLICT


Resolution: TypeAlias = ConditionalResolution | ConflictResolution


@dataclass(frozen=True, slots=True)
class TraversalState:
    claim_status: Mapping[str, ClaimStatus] = field(default_factory=dict)
    resolutions: Mapping[str, Resolution] = field(default_factory=dict)
    path_steps: tuple[str, ...] = ()

    def status_of(self, claim_id: str) -> ClaimStatus | None:
        return self.claim_status.get(claim_id)

    def is_active(self, claim_id: str) -> bool:
        return self.claim_status.get(claim_id) is ClaimStatus.ACTIVE

    def is_resolved(self, forcing_point_id: str) -> bool:
        return forcing_point_id in self.resolutions

    @property
    def active_ids(self) -> tuple[str, ...]:
        return self._ids_with(ClaimStatus.ACTIVE)

    @property
    def pruned_ids(self) -> tuple[str, ...]:
        return self._ids_with(ClaimStatus.PRUNED)

    def resolved_gate_ids(self) -> frozenset[str]:
        return frozenset(
            resolution.gate_id
            for resolution in self.resolutions.values()
            if isinstance(resolution, ConditionalResolution) and resolution.gate_id is not None
        )

    def _ids_with(self, status: ClaimStatus) -> tuple[str, ...]:
        return tuple(
            claim_id
            for claim_id, claim_status in self.claim_status.items()
            if claim_status is status
        )


def initial_state(graph: ClaimGraph) -> TraversalState:
    """All claims active, nothing resolved."""

    return TraversalState(claim_status=dict.fromkeys(graph.claim_ids, ClaimStatus.ACTIVE))
