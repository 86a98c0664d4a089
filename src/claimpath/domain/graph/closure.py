"""Reachability helpers over claim adjacency maps."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


def reachable_from(
    seeds: Iterable[str],
    adjacency: Mapping[str, Iterable[str]],
) -> tuple[str, ...]:
    """Return every claim reachable from ``seeds`` in breadth-first order.

    Seeds are only part of the result when some other seed (or a cycle) leads
    back to them.
    """

    seeds = tuple(seeds)
    queue = deque(seeds)
    expanded: set[str] = set()
    reached: dict[str, None] = {}

    while queue:
        claim_id = queue.popleft()
        if claim_id in expanded:
            continue
        expanded.add(claim_id)
        for neighbour in adjacency.get(claim_id, ()):
            if neighbour not in reached:
                reached[neighbour] = None
            queue.append(neighbour)

    return tuple(reached)
