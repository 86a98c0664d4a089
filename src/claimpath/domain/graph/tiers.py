"""Tier computation over prerequisite dependencies.

A claim's tier is its depth in the prerequisite graph: 0 without
prerequisites, otherwise one more than its deepest prerequisite.

The input graph may contain cycles. Traversal uses an explicit stack with
three-colour marking instead of recursion, so depth is bounded only by memory.
When the walk reaches a claim that is still in progress, the sub-path from
that claim's first occurrence to the repeat is reported as a cycle and every
claim on it resolves to tier 0. The function is total: every claim gets a
finite, non-negative tier and cycles are returned, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

Cycle: TypeAlias = tuple[str, ...]


class _Mark(Enum):
    UNVISITED = 0
    IN_PROGRESS = 1
    DONE = 2


@dataclass(frozen=True, slots=True)
class TierResult:
    tiers: dict[str, int]
    cycles: tuple[Cycle, ...]

    @property
    def max_tier(self) -> int:
        return max(self.tiers.values(), default=0)

    def tier_of(self, claim_id: str) -> int:
        return self.tiers.get(claim_id, 0)


def compute_tiers(
    claim_ids: Iterable[str],
    prerequisites: Mapping[str, Iterable[str]],
) -> TierResult:
    """Assign a tier to every claim in ``claim_ids``.

    ``prerequisites`` maps a claim to the claims it depends on. Unknown ids in
    the mapping are ignored. Roots and dependencies are visited in lexical id
    order so cycle reports are stable across runs.
    """

    known = set(claim_ids)
    deps_by_claim: dict[str, tuple[str, ...]] = {
        claim_id: tuple(sorted({dep for dep in prerequisites.get(claim_id, ()) if dep in known}))
        for claim_id in known
    }

    marks = dict.fromkeys(known, _Mark.UNVISITED)
    tiers: dict[str, int] = {}
    cycles: list[Cycle] = []
    on_cycle: set[str] = set()

    for root in sorted(known):
        if marks[root] is not _Mark.UNVISITED:
            continue

        path: list[str] = [root]
        stack: list[tuple[str, Iterator[str]]] = [(root, iter(deps_by_claim[root]))]
        marks[root] = _Mark.IN_PROGRESS

        while stack:
            claim_id, deps = stack[-1]
            dep = next(deps, None)

            if dep is None:
                stack.pop()
                path.pop()
                marks[claim_id] = _Mark.DONE
                tiers[claim_id] = _finished_tier(
                    claim_id, deps_by_claim=deps_by_claim, tiers=tiers, on_cycle=on_cycle
                )
                continue

            mark = marks[dep]
            if mark is _Mark.UNVISITED:
                marks[dep] = _Mark.IN_PROGRESS
                path.append(dep)
                stack.append((dep, iter(deps_by_claim[dep])))
            elif mark is _Mark.IN_PROGRESS:
                start = path.index(dep)
                cycle = (*path[start:], dep)
                cycles.append(cycle)
                on_cycle.update(cycle)

    return TierResult(tiers=tiers, cycles=tuple(cycles))


def _finished_tier(
    claim_id: str,
    *,
    deps_by_claim: Mapping[str, tuple[str, ...]],
    tiers: Mapping[str, int],
    on_cycle: set[str],
) -> int:
    if claim_id in on_cycle:
        return 0
    # back edges point at claims still in progress and have no tier yet
    dep_tiers = [tiers[dep] for dep in deps_by_claim[claim_id] if dep in tiers]
    if not dep_tiers:
        return 0
    return 1 + max(dep_tiers)
