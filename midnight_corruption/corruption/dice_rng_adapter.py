"""
RNG source for corruption checks.

The engine draws every roll through an object with a roll_die(sides, reason)
method. DiceRngAdapter is the default, routing draws through the project's
DiceRoller so they are seedable and land in the roll log. Tests substitute
a scripted source with the same method.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from midnight_corruption.data_models import DiceRoller


class DiceSource(Protocol):
    """Anything that can roll a single die."""

    def roll_die(self, sides: int, reason: str = "") -> int:
        ...


class DiceRngAdapter:
    """
    Adapter that feeds DiceRoller results to the corruption engine.

    Usage:
        from midnight_corruption.corruption.dice_rng_adapter import DiceRngAdapter
        from midnight_corruption.corruption.corruption_engine import CorruptionEngine

        engine = CorruptionEngine(rng=DiceRngAdapter(reason_prefix="Corruption"))
    """

    def __init__(
        self,
        reason_prefix: str = "Corruption",
        dice_roller: Optional["DiceRoller"] = None,
    ):
        """
        Initialize the adapter.

        Args:
            reason_prefix: Prefix for roll reason logging
            dice_roller: Optional DiceRoller instance. If None, uses singleton.
        """
        self._reason_prefix = reason_prefix
        self._dice_roller = dice_roller
        self._roll_count = 0

    def _get_dice_roller(self) -> "DiceRoller":
        if self._dice_roller is not None:
            return self._dice_roller
        from midnight_corruption.data_models import DiceRoller
        return DiceRoller()

    def _make_reason(self, context: str) -> str:
        self._roll_count += 1
        return f"{self._reason_prefix}: {context} (roll #{self._roll_count})"

    def roll_die(self, sides: int, reason: str = "") -> int:
        """
        Roll one die with the given number of sides.

        Args:
            sides: Number of faces, at least 1
            reason: What the roll is for

        Returns:
            Uniform integer in [1, sides]
        """
        if sides < 1:
            raise ValueError(f"Cannot roll a die with {sides} sides")
        dice = self._get_dice_roller()
        result = dice.roll(f"1d{sides}", self._make_reason(reason or f"d{sides}"))
        return result.total

    @property
    def roll_count(self) -> int:
        """Get the number of rolls made through this adapter."""
        return self._roll_count

    def reset_count(self) -> None:
        """Reset the roll counter."""
        self._roll_count = 0
