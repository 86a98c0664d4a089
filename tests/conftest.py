from __future__ import annotations

from pathlib import Path

import pytest

from claimpath.domain.graph import ClaimGraph, build_claim_graph
from claimpath.domain.model import Claim, ConditionalGate, Edge, EdgeKind


@pytest.fixture(autouse=True)
def _clear_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CLAIMPATH_SUPPORT_DELTA_THRESHOLD", raising=False)
    monkeypatch.delenv("CLAIMPATH_HIGH_SUPPORT_THRESHOLD", raising=False)
    monkeypatch.delenv("CLAIMPATH_LOG_LEVEL", raising=False)


@pytest.fixture(scope="session")
def claim_graph_path() -> Path:
    return Path(__file__).resolve().parent / "data" / "claim_graph.json"


@pytest.fixture
def chain_graph() -> ClaimGraph:
    """``c0 <- c1 <- c2``: c1 depends on c0, c2 depends on c1; c3 is independent."""

    return build_claim_graph(
        [
            Claim(id="c0", label="Foundation", supporters=(0, 1)),
            Claim(id="c1", label="Middle", supporters=(0,)),
            Claim(id="c2", label="Top", supporters=(1,)),
            Claim(id="c3", label="Independent", supporters=(2,)),
        ],
        [
            Edge(source_id="c0", target_id="c1", kind=EdgeKind.PREREQUISITE),
            Edge(source_id="c1", target_id="c2", kind=EdgeKind.PREREQUISITE),
        ],
        [
            ConditionalGate(id="g0", affected_claims=("c0",), condition="You have savings"),
            ConditionalGate(id="g3", affected_claims=("c3",), condition="You rent"),
        ],
        total_perspectives=3,
    )


@pytest.fixture
def conflict_graph() -> ClaimGraph:
    """``c0`` conflicts with ``c1`` (both tier 0); ``c2`` depends on ``c1``."""

    return build_claim_graph(
        [
            Claim(id="c0", label="Rent", supporters=(0,)),
            Claim(id="c1", label="Buy", supporters=(1,)),
            Claim(id="c2", label="Get a mortgage", supporters=(1,)),
        ],
        [
            Edge(source_id="c0", target_id="c1", kind=EdgeKind.CONFLICT),
            Edge(source_id="c1", target_id="c2", kind=EdgeKind.PREREQUISITE),
        ],
        total_perspectives=2,
    )


@pytest.fixture
def layered_graph() -> ClaimGraph:
    """Gated chain ``a <- b <- e`` (tiers 0..2) beside an ungated ``c0``/``c1`` conflict."""

    return build_claim_graph(
        [
            Claim(id="a", label="Emergency fund", text="Keep six months of expenses"),
            Claim(id="b", label="Index funds", provenance_ids=("s2",)),
            Claim(id="e", label="Rebalance"),
            Claim(id="c0", label="Rent", supporters=(0,)),
            Claim(id="c1", label="Buy", supporters=(1,)),
        ],
        [
            Edge(source_id="a", target_id="b", kind=EdgeKind.PREREQUISITE),
            Edge(source_id="b", target_id="e", kind=EdgeKind.PREREQUISITE),
            Edge(source_id="c0", target_id="c1", kind=EdgeKind.CONFLICT),
        ],
        [
            ConditionalGate(id="ge", affected_claims=("e",), condition="You review yearly"),
            ConditionalGate(
                id="gb",
                affected_claims=("b",),
                condition="You invest for 10+ years",
                provenance_ids=("s1", "s2"),
            ),
            ConditionalGate(id="ga", affected_claims=("a",), condition="You have savings"),
        ],
        total_perspectives=2,
    )
