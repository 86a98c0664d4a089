"""Claim decision graph: roles, prerequisite tiers and conflict tensions."""

from __future__ import annotations

from .diagnostics import Diagnostic, DiagnosticKind, GraphDiagnostics
from .graph import ClaimGraph, build_claim_graph
from .roles import assign_roles, support_ratio
from .tensions import Tension, extract_tensions
from .tiers import Cycle, TierResult, compute_tiers

__all__ = [
    "ClaimGraph",
    "Cycle",
    "Diagnostic",
    "DiagnosticKind",
    "GraphDiagnostics",
    "Tension",
    "TierResult",
    "assign_roles",
    "build_claim_graph",
    "compute_tiers",
    "extract_tensions",
    "support_ratio",
]
