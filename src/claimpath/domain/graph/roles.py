"""Anchor/challenger role assignment for conflicting claims.

Every claim starts as an anchor. Each distinct conflict pair is then compared
by support ratio:

- a large gap demotes the weaker side to challenger, but only when the
  stronger side is itself stable (a foundation for other claims, or high
  support on its own)
- a small gap reconfirms stable sides as anchors without ever lifting a
  challenger demoted by an earlier pair
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from claimpath.domain.model import ClaimRole, EdgeKind

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping, Sequence

    from claimpath.config import TraversalConfig
    from claimpath.domain.model import Claim, Edge


def support_ratio(supporter_count: int, total_perspectives: int) -> float:
    return supporter_count / max(1, total_perspectives)


def assign_roles(
    claims: Sequence[Claim],
    edges: Iterable[Edge],
    *,
    total_perspectives: int,
    config: TraversalConfig,
) -> dict[str, ClaimRole]:
    """Return the role of every claim, keyed by claim id."""

    edges = tuple(edges)
    roles = {claim.id: ClaimRole.ANCHOR for claim in claims}
    ratios = {
        claim.id: support_ratio(claim.support_count, total_perspectives) for claim in claims
    }
    foundations = {
        edge.source_id for edge in edges if edge.kind is EdgeKind.PREREQUISITE
    }

    def is_stable(claim_id: str) -> bool:
        return (
            claim_id in foundations
            or ratios.get(claim_id, 0.0) >= config.high_support_threshold
        )

    seen_pairs: set[tuple[str, str]] = set()
    for edge in edges:
        if edge.kind is not EdgeKind.CONFLICT:
            continue
        pair = edge.pair_key
        if pair in seen_pairs:
            continue
        seen_pairs.add(pair)

        a, b = edge.source_id, edge.target_id
        if a not in roles or b not in roles:
            continue
        _assign_pair(a, b, roles=roles, ratios=ratios, is_stable=is_stable, config=config)

    return roles


def _assign_pair(
    a: str,
    b: str,
    *,
    roles: dict[str, ClaimRole],
    ratios: Mapping[str, float],
    is_stable: Callable[[str], bool],
    config: TraversalConfig,
) -> None:
    a_ratio, b_ratio = ratios[a], ratios[b]

    if abs(a_ratio - b_ratio) >= config.support_delta_threshold:
        high, low = (a, b) if a_ratio >= b_ratio else (b, a)
        if is_stable(high):
            roles[low] = ClaimRole.CHALLENGER
        return

    for claim_id in (a, b):
        if is_stable(claim_id) and roles[claim_id] is not ClaimRole.CHALLENGER:
            roles[claim_id] = ClaimRole.ANCHOR
