"""Human-readable audit trail of applied decisions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from claimpath.domain.model import GateAnswer

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .state import TraversalState

NO_CONSTRAINTS_SUMMARY: Final[str] = "No constraints applied."

SATISFIED_MARKER: Final[str] = "✓"
REJECTED_MARKER: Final[str] = "✗"
UNCERTAIN_MARKER: Final[str] = "?"
CHOICE_MARKER: Final[str] = "→"


def render_conditional_step(
    condition: str,
    *,
    answer: GateAnswer,
    user_input: str | None = None,
    pruned_count: int = 0,
) -> str:
    if answer is GateAnswer.YES:
        suffix = f" — {user_input}" if user_input else ""
        return f'{SATISFIED_MARKER} "{condition}"{suffix}'
    if answer is GateAnswer.UNCERTAIN:
        return f'{UNCERTAIN_MARKER} "{condition}" — {user_input or "uncertain"}'
    return f'{REJECTED_MARKER} "{condition}" — {pruned_count} claim(s) pruned'


def render_conflict_step(selected_label: str, rejected_labels: Iterable[str]) -> str:
    return f'{CHOICE_MARKER} Chose "{selected_label}" over "{", ".join(rejected_labels)}"'


def build_path_summary(state: TraversalState) -> str:
    if not state.path_steps:
        return NO_CONSTRAINTS_SUMMARY
    return "\n".join(state.path_steps)
