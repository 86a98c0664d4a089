"""Data-quality diagnostics collected while building a claim graph.

Claims and relationships come from probabilistic extraction upstream, so
malformed input is expected. Nothing recorded here is fatal: the builder drops
the offending element, records why, and carries on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class DiagnosticKind(StrEnum):
    DUPLICATE_CLAIM = "duplicate_claim"
    RESERVED_CLAIM_ID = "reserved_claim_id"
    DANGLING_EDGE = "dangling_edge"
    SELF_LOOP = "self_loop"
    DUPLICATE_EDGE = "duplicate_edge"
    DANGLING_GATE_CLAIM = "dangling_gate_claim"
    EMPTY_GATE = "empty_gate"
    DUPLICATE_GATE = "duplicate_gate"
    PREREQUISITE_CYCLE = "prerequisite_cycle"


@dataclass(frozen=True, slots=True, kw_only=True)
class Diagnostic:
    kind: DiagnosticKind
    message: str
    refs: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class GraphDiagnostics:
    entries: tuple[Diagnostic, ...] = field(default=())

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def of_kind(self, kind: DiagnosticKind) -> tuple[Diagnostic, ...]:
        return tuple(entry for entry in self.entries if entry.kind is kind)
