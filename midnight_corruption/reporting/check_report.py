"""
Plain-text reports of corruption results for the GM.
"""

from typing import Any, Optional

from midnight_corruption.corruption.corruption_engine import CheckOutcome, MajorMutationRoll
from midnight_corruption.data_models import CorruptionState, NO_DIE_LABEL


def format_check_report(
    subject_name: str,
    outcome: CheckOutcome,
    reason: str = "",
    notes: str = "",
) -> str:
    """
    Summarize a corruption check.

    Args:
        subject_name: Display name of the subject
        outcome: Result from CorruptionEngine.roll_check
        reason: Why the check was called for
        notes: Free-form GM notes

    Returns:
        Multi-line report text
    """
    if outcome.terminal_already:
        return f"{subject_name} has already succumbed to Midnight Corruption."

    lines = [f"Midnight Corruption – {subject_name}"]
    if reason:
        lines.append(f"Reason: {reason}")
    if notes:
        lines.append(f"Notes: {notes}")
    lines.append(f"Current Corruption Die: {outcome.die}")
    lines.append(f"Roll Result: {outcome.roll_total}")

    if outcome.level_changed:
        lines.append("")
        lines.append(f"Corruption Level increased to: {outcome.new_state.level}")
        lines.append(f"New Corruption Die: {outcome.new_state.die or NO_DIE_LABEL}")
        if outcome.mutation_event is not None:
            lines.append(outcome.mutation_event.prompt)

    return "\n".join(lines)


def format_major_mutation(subject_name: str, rolled: MajorMutationRoll) -> str:
    """Summarize a major mutation table roll."""
    return "\n".join([
        f"Major Mutation – {subject_name}",
        f"Roll: d12 → {rolled.table_id}",
        rolled.name,
        rolled.description,
    ])


def format_state(subject_name: str, state: CorruptionState) -> str:
    """Full corruption sheet for one subject."""
    lines = [
        f"{subject_name}: level {state.level}, die {state.die or NO_DIE_LABEL}",
    ]
    if state.minor_mutations:
        lines.append("Minor mutations:")
        lines.extend(f"  - {text}" for text in state.minor_mutations)
    if state.major_mutations:
        lines.append("Major mutations:")
        for mutation in state.major_mutations:
            line = f"  - [{mutation.table_id}] {mutation.name}"
            if mutation.notes:
                line += f": {mutation.notes}"
            lines.append(line)
    return "\n".join(lines)


def format_tracker_table(rows: list[dict[str, Any]], title: Optional[str] = None) -> str:
    """Render tracker rows as a fixed-width table."""
    if not rows:
        return "No tracked subjects."

    width = max(len("Subject"), *(len(str(r["subject_id"])) for r in rows))
    lines = []
    if title:
        lines.append(title)
    lines.append(f"{'Subject':<{width}}  Level  Die")
    for row in rows:
        lines.append(f"{row['subject_id']:<{width}}  {row['level']:>5}  {row['die']}")
    return "\n".join(lines)
