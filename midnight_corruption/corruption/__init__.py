"""
Corruption core: state transitions, the corruption check engine, and the
tracker service that persists results per subject.
"""

from midnight_corruption.corruption.corruption_state import (
    CorruptionStateStore,
    InvalidSubject,
    ValidationError,
    add_major_mutation,
    add_minor_mutation,
    adjust,
    default_state,
    level_to_die,
    upgrade,
)
from midnight_corruption.corruption.corruption_engine import (
    CheckOutcome,
    CorruptionEngine,
    MajorMutationRoll,
    MUTATION_EVENTS_BY_LEVEL,
)
from midnight_corruption.corruption.dice_rng_adapter import DiceRngAdapter, DiceSource
from midnight_corruption.corruption.corruption_tracker import CorruptionTracker, StateChange

__all__ = [
    # State
    "CorruptionStateStore",
    "InvalidSubject",
    "ValidationError",
    "add_major_mutation",
    "add_minor_mutation",
    "adjust",
    "default_state",
    "level_to_die",
    "upgrade",
    # Engine
    "CheckOutcome",
    "CorruptionEngine",
    "MajorMutationRoll",
    "MUTATION_EVENTS_BY_LEVEL",
    "DiceRngAdapter",
    "DiceSource",
    # Service
    "CorruptionTracker",
    "StateChange",
]
