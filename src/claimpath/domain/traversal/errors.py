"""Caller contract violations raised by the traversal engine.

These signal that the caller's view of a traversal has drifted from the
engine's. They are never retried or swallowed inside the engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from claimpath.domain.model import ForcingPointKind


class TraversalContractError(RuntimeError):
    """Base class for misuse of the traversal API."""


class ForcingPointAlreadyResolvedError(TraversalContractError):
    def __init__(self, forcing_point_id: str) -> None:
        self.forcing_point_id = forcing_point_id
        super().__init__(f"Forcing point already resolved: {forcing_point_id}")


class InvalidSelectionError(TraversalContractError):
    """Raised when a conflict is resolved with a claim that cannot be selected.

    Either the claim is not one of the conflict's options, or an earlier
    answer has already pruned it.
    """

    def __init__(
        self,
        forcing_point_id: str,
        selected_claim_id: str,
        option_ids: Iterable[str],
        *,
        reason: str = "not an option",
    ) -> None:
        self.forcing_point_id = forcing_point_id
        self.selected_claim_id = selected_claim_id
        self.option_ids = tuple(option_ids)
        self.reason = reason
        super().__init__(
            f"Claim {selected_claim_id!r} cannot be selected for {forcing_point_id}: "
            f"{reason} (options: {', '.join(self.option_ids)})"
        )


class ForcingPointKindError(TraversalContractError):
    def __init__(
        self,
        forcing_point_id: str,
        *,
        expected: ForcingPointKind,
        actual: ForcingPointKind,
    ) -> None:
        self.forcing_point_id = forcing_point_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Forcing point {forcing_point_id} is a {actual} point, expected {expected}"
        )


class UnknownForcingPointError(TraversalContractError):
    def __init__(self, forcing_point_id: str) -> None:
        self.forcing_point_id = forcing_point_id
        super().__init__(f"Unknown forcing point: {forcing_point_id}")


class SnapshotMismatchError(TraversalContractError):
    """Raised when a stored traversal state does not belong to the supplied graph."""

    def __init__(
        self,
        turn_id: str,
        *,
        unknown_ids: Iterable[str] = (),
        missing_ids: Iterable[str] = (),
    ) -> None:
        self.turn_id = turn_id
        #: ids in the snapshot that the graph does not know
        self.unknown_ids = tuple(unknown_ids)
        #: graph claims the snapshot carries no status for
        self.missing_ids = tuple(missing_ids)
        details = []
        if self.unknown_ids:
            details.append(f"unknown ids: {', '.join(self.unknown_ids)}")
        if self.missing_ids:
            details.append(f"missing claims: {', '.join(self.missing_ids)}")
        super().__init__(
            f"Snapshot for turn {turn_id} does not match the claim graph; {'; '.join(details)}"
        )
