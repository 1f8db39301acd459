"""
Test helpers for the Midnight Corruption test suite.

Provides a scripted dice source so corruption checks can be driven to exact
outcomes without touching the shared DiceRoller.
"""

from typing import Iterable

from midnight_corruption.data_models import CorruptionState


class ScriptedDice:
    """
    Dice source that returns pre-arranged results in order.

    Usage:
        dice = ScriptedDice([1, 1, 4])
        engine = CorruptionEngine(rng=dice, run_log=RunLog())

    Every draw is recorded in `calls` as (sides, reason).
    """

    def __init__(self, results: Iterable[int] = ()):
        self._results = list(results)
        self.calls: list[tuple[int, str]] = []

    def push(self, *results: int) -> None:
        """Queue more results."""
        self._results.extend(results)

    def roll_die(self, sides: int, reason: str = "") -> int:
        self.calls.append((sides, reason))
        if not self._results:
            raise AssertionError(f"Unexpected d{sides} roll ({reason})")
        return self._results.pop(0)

    @property
    def draw_count(self) -> int:
        return len(self.calls)


def state_at_level(level: int, **kwargs) -> CorruptionState:
    """A consistent CorruptionState at the given level."""
    return CorruptionState(level=level, **kwargs)
