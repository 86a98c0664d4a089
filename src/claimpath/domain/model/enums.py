"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ClaimType(StrEnum):
    FACTUAL = "factual"
    PRESCRIPTIVE = "prescriptive"
    CONDITIONAL = "conditional"
    CONTESTED = "contested"
    SPECULATIVE = "speculative"

    @classmethod
    def parse(cls, value: str | None) -> ClaimType:
        """Map a raw classification onto a known type; unknown values are speculative."""

        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.SPECULATIVE


class ClaimRole(StrEnum):
    """Mainstream-supported anchor versus contesting minority challenger."""

    ANCHOR = "anchor"
    CHALLENGER = "challenger"


class EdgeKind(StrEnum):
    # source must hold before target is viable
    PREREQUISITE = "prerequisite"
    # source and target are mutually exclusive
    CONFLICT = "conflict"


class ForcingPointKind(StrEnum):
    CONDITIONAL = "conditional"
    CONFLICT = "conflict"


class ClaimStatus(StrEnum):
    ACTIVE = "active"
    PRUNED = "pruned"


class GateAnswer(StrEnum):
    """User answer to a conditional gate; ``UNCERTAIN`` proceeds without pruning."""

    YES = "yes"
    NO = "no"
    UNCERTAIN = "uncertain"
