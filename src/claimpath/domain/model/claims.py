"""Immutable claim graph primitives.

Claims arrive from an external assembler that has already extracted them from
model perspectives and linked them to evidence. ``provenance_ids`` are opaque
references into that evidence store; this package never dereferences them.

``tier`` and ``role`` are derived while building the graph. Input claims may
omit them; ``ClaimGraph`` replaces the claim with a fully annotated copy.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import ClaimRole, ClaimType, EdgeKind

CONDITIONAL_POINT_PREFIX = "fp_cond_"
# joins the two claim ids of a conflict pair; claim ids must not contain it
PAIR_SEPARATOR = "::"


@dataclass(frozen=True, slots=True, kw_only=True)
class Claim:
    """One atomic proposition supported by one or more perspectives."""

    id: str
    label: str
    text: str = ""
    claim_type: ClaimType = ClaimType.SPECULATIVE
    role: ClaimRole = ClaimRole.ANCHOR
    supporters: tuple[int, ...] = ()
    support_ratio: float = 0.0
    provenance_ids: tuple[str, ...] = ()
    tier: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Claim id must not be empty")
        if self.tier < 0:
            raise ValueError(f"Claim tier must be non-negative: {self.id}={self.tier}")

    @property
    def support_count(self) -> int:
        return len(self.supporters)

    @property
    def is_challenger(self) -> bool:
        return self.role is ClaimRole.CHALLENGER


@dataclass(frozen=True, slots=True, kw_only=True)
class Edge:
    """Directed relationship between two claims."""

    source_id: str
    target_id: str
    kind: EdgeKind
    question: str | None = None
    provenance_ids: tuple[str, ...] = ()

    @property
    def pair_key(self) -> tuple[str, str]:
        """Order-independent key for deduplicating symmetric relationships."""

        a, b = sorted((self.source_id, self.target_id))
        return a, b


@dataclass(frozen=True, slots=True, kw_only=True)
class ConditionalGate:
    """Precondition whose failure removes ``affected_claims`` from the path."""

    id: str
    affected_claims: tuple[str, ...]
    condition: str = ""
    question: str | None = None
    provenance_ids: tuple[str, ...] = field(default=())

    @property
    def forcing_point_id(self) -> str:
        return conditional_point_id(self.id)


def conditional_point_id(gate_id: str) -> str:
    """Id of the forcing point asking about ``gate_id``; already-prefixed ids are kept."""

    if gate_id.startswith(CONDITIONAL_POINT_PREFIX):
        return gate_id
    return f"{CONDITIONAL_POINT_PREFIX}{gate_id}"
