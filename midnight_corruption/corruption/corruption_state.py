"""
Corruption state transitions.

Pure functions over CorruptionState values: defaulting, leveling, manual
adjustment, and mutation bookkeeping. Nothing here rolls dice or touches
storage.
"""

from dataclasses import replace
from typing import Optional, Protocol

from midnight_corruption.data_models import (
    CorruptionState,
    LEVEL_DIE_TABLE,
    MAX_CORRUPTION_LEVEL,
    MajorMutation,
)


class ValidationError(Exception):
    """Raised when mutation input is rejected."""
    pass


class InvalidSubject(Exception):
    """Raised when an operation needs a subject and none was supplied."""
    pass


class MutationTableEntry(Protocol):
    """Anything carrying a d12 table id and a mutation name."""
    table_id: int
    name: str


def default_state() -> CorruptionState:
    """The state of a subject that has never been checked."""
    return CorruptionState(level=0)


def level_to_die(level: int) -> Optional[str]:
    """Die for a corruption level; None at level 5 or outside the table."""
    return LEVEL_DIE_TABLE.get(level)


def upgrade(state: CorruptionState) -> CorruptionState:
    """
    Advance one corruption level.

    This is the only automatic advancement path. A Warped subject is
    returned unchanged.
    """
    if state.level >= MAX_CORRUPTION_LEVEL:
        return state
    new_level = state.level + 1
    return replace(state, level=new_level)


def adjust(state: CorruptionState, delta: int) -> CorruptionState:
    """
    Manually shift the corruption level by delta, clamped to [0, 5].

    Used for cures and retcons. Mutation lists are left alone and no
    mutation events are raised.
    """
    new_level = max(0, min(state.level + delta, MAX_CORRUPTION_LEVEL))
    return replace(state, level=new_level)


def add_minor_mutation(state: CorruptionState, text: Optional[str]) -> CorruptionState:
    """Append a cosmetic mutation; the text is trimmed and must not be blank."""
    cleaned = (text or "").strip()
    if not cleaned:
        raise ValidationError("Minor mutation text must not be empty")
    return replace(state, minor_mutations=state.minor_mutations + (cleaned,))


def add_major_mutation(
    state: CorruptionState,
    entry: MutationTableEntry,
    notes: Optional[str] = None,
) -> CorruptionState:
    """Append a table-rolled major mutation with the GM's notes."""
    mutation = MajorMutation(
        table_id=entry.table_id,
        name=entry.name,
        notes=notes or "",
    )
    return replace(state, major_mutations=state.major_mutations + (mutation,))


class CorruptionStateStore:
    """Namespace for the state-transition primitives."""

    default_state = staticmethod(default_state)
    level_to_die = staticmethod(level_to_die)
    upgrade = staticmethod(upgrade)
    adjust = staticmethod(adjust)
    add_minor_mutation = staticmethod(add_minor_mutation)
    add_major_mutation = staticmethod(add_major_mutation)
