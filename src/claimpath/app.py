"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from claimpath.adapters.json_graph import (
    TraversalSnapshotPayload,
    parse_claim_graph_payload,
    restore_session,
    snapshot_session,
    translate_claim_graph,
)
from claimpath.config import get_traversal_config
from claimpath.domain.traversal import TraversalSession

if TYPE_CHECKING:
    from collections.abc import Iterable

    from claimpath.config import TraversalConfig
    from claimpath.domain.graph import ClaimGraph


log = getLogger(__name__)


def load_claim_graph(path: Path | str, *, config: TraversalConfig | None = None) -> ClaimGraph:
    """Read an assembler payload from ``path`` and build its claim graph."""

    effective_config = config or get_traversal_config()
    payload = parse_claim_graph_payload(Path(path).read_bytes())
    graph = translate_claim_graph(payload, config=effective_config)
    log.info(
        "Loaded claim graph from %s: claims=%s, tensions=%s, gates=%s, cycles=%s",
        path,
        len(graph.claims),
        len(graph.tensions),
        len(graph.gates),
        len(graph.cycles),
    )
    return graph


def start_traversal(
    path: Path | str,
    *,
    turn_id: str,
    config: TraversalConfig | None = None,
    snapshot_path: Path | str | None = None,
) -> TraversalSession:
    """Start a traversal for the graph at ``path``, resuming from a snapshot if given."""

    graph = load_claim_graph(path, config=config)
    if snapshot_path is None:
        return TraversalSession.start(graph, turn_id=turn_id)

    snapshot = TraversalSnapshotPayload.model_validate_json(Path(snapshot_path).read_bytes())
    log.info("Resuming turn %s from %s", snapshot.turn_id, snapshot_path)
    return restore_session(snapshot, graph)


def apply_answers(
    session: TraversalSession,
    answers: Iterable[tuple[str, str]],
) -> TraversalSession:
    """Replay ``(forcing_point_id, answer)`` pairs in order."""

    for forcing_point_id, value in answers:
        session.answer(forcing_point_id, value)
        log.info("Applied answer %s=%s", forcing_point_id, value)
    return session


def write_snapshot(session: TraversalSession, path: Path | str) -> Path:
    target = Path(path)
    target.write_text(snapshot_session(session).model_dump_json(indent=2), encoding="utf-8")
    log.info("Wrote snapshot for turn %s to %s", session.turn_id, target)
    return target
