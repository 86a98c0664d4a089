# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from claimpath import __version__
from claimpath.app import apply_answers, load_claim_graph, start_traversal, write_snapshot
from claimpath.config import ConfigurationError, configure_logging, get_traversal_config
from claimpath.domain.model import ForcingPointKind
from claimpath.domain.traversal import (
    TraversalContractError,
    build_path_summary,
    extract_forcing_points,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from claimpath.domain.graph import ClaimGraph
    from claimpath.domain.traversal import ForcingPoint, TraversalSession

log = logging.getLogger(__name__)

DEFAULT_TURN_ID = "turn-0"


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Walk a claim decision graph")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging (overrides CLAIMPATH_LOG_LEVEL)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    inspect = subparsers.add_parser(
        "inspect",
        help="Show tiers, cycles, diagnostics and the ordered forcing points",
    )
    inspect.add_argument("graph", type=Path, help="Claim graph JSON payload")

    walk = subparsers.add_parser("walk", help="Apply answers and report the next question")
    walk.add_argument("graph", type=Path, help="Claim graph JSON payload")
    walk.add_argument(
        "--answer",
        action="append",
        default=[],
        metavar="FORCING_POINT=VALUE",
        help=(
            "Answer to apply: yes/no/uncertain for conditionals, "
            "a claim id for conflicts (repeatable)"
        ),
    )
    walk.add_argument(
        "--turn-id",
        type=str,
        default=DEFAULT_TURN_ID,
        help="Turn identifier stored with snapshots (default: %(default)s)",
    )
    walk.add_argument(
        "--snapshot-in",
        type=Path,
        help="Resume from a previously written snapshot",
    )
    walk.add_argument(
        "--snapshot-out",
        type=Path,
        help="Write the resulting traversal state to this path",
    )

    return parser.parse_args(list(argv))


def _parse_answer(value: str) -> tuple[str, str]:
    forcing_point_id, sep, answer = value.partition("=")
    if not sep or not forcing_point_id.strip() or not answer.strip():
        raise ValueError(f"Invalid answer {value!r}; expected FORCING_POINT=VALUE")
    return forcing_point_id.strip(), answer.strip()


def _describe_point(point: ForcingPoint) -> list[str]:
    lines = [f"{point.id} [{point.kind}, tier {point.tier}] {point.question}"]
    if point.kind is ForcingPointKind.CONDITIONAL:
        lines.append(f"    condition: {point.condition}")
        lines.append(f"    affects: {', '.join(point.affected_claims)}")
    else:
        for option in point.options:
            lines.append(f"    option {option.claim_id}: {option.label}")
    if point.blocked_by:
        lines.append(f"    after: {', '.join(point.blocked_by)}")
    return lines


def _print_inspection(graph: ClaimGraph) -> None:
    print(f"Claims: {len(graph.claims)} (max tier {graph.max_tier})")
    for claim in graph.claims:
        print(
            f"  [{claim.tier}] {claim.id} {claim.label} "
            f"({claim.role}, {claim.claim_type}, support {claim.support_ratio:.2f})"
        )

    for cycle in graph.cycles:
        print(f"Cycle: {' -> '.join(cycle)}")
    for diagnostic in graph.diagnostics.entries:
        print(f"Diagnostic ({diagnostic.kind}): {diagnostic.message}")

    points = extract_forcing_points(graph)
    print(f"Forcing points: {len(points)}")
    for index, point in enumerate(points, start=1):
        first, *rest = _describe_point(point)
        print(f"  {index}. {first}")
        for line in rest:
            print(f"  {line}")


def _print_progress(session: TraversalSession) -> None:
    print("Path:")
    print(build_path_summary(session.state))

    next_point = session.next_forcing_point()
    if next_point is None:
        outcome = session.outcome()
        print("Traversal complete.")
        print(f"Active claims: {', '.join(claim.id for claim in outcome.active_claims) or '-'}")
        print(f"Pruned claims: {', '.join(claim.id for claim in outcome.pruned_claims) or '-'}")
        print(f"Selected claims: {', '.join(outcome.selected_claim_ids) or '-'}")
        print(f"Evidence: {', '.join(outcome.collected_provenance) or '-'}")
        return

    print(f"Live forcing points: {len(session.live_forcing_points())}")
    print("Next:")
    for line in _describe_point(next_point):
        print(f"  {line}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    try:
        configure_logging(verbose=parsed_args.verbose)
        config = get_traversal_config()
        if parsed_args.command == "inspect":
            _print_inspection(load_claim_graph(parsed_args.graph, config=config))
        elif parsed_args.command == "walk":
            answers = [_parse_answer(value) for value in parsed_args.answer]
            session = start_traversal(
                parsed_args.graph,
                turn_id=parsed_args.turn_id,
                config=config,
                snapshot_path=parsed_args.snapshot_in,
            )
            apply_answers(session, answers)
            _print_progress(session)
            if parsed_args.snapshot_out is not None:
                write_snapshot(session, parsed_args.snapshot_out)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except TraversalContractError:
        log.exception("Traversal contract violation")
        sys.exit(1)
    except (ConfigurationError, ValueError, OSError):
        log.exception("Invalid input")
        sys.exit(2)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
