"""
Shared data structures for the Midnight Corruption tracker.

Corruption state records are immutable values: every transition returns a
new record, and stores persist the serialized form keyed by subject id.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional
import random


# =============================================================================
# CONSTANTS
# =============================================================================


MAX_CORRUPTION_LEVEL = 5

# Shown wherever a Warped subject's die would be
NO_DIE_LABEL = "—"

# Die rolled for a corruption check at each level. Level 5 has no die.
LEVEL_DIE_TABLE: dict[int, str] = {
    0: "d4",
    1: "d6",
    2: "d8",
    3: "d10",
    4: "d20",
}


# =============================================================================
# ENUMS
# =============================================================================


class MutationEventKind(str, Enum):
    """Mutation bookkeeping due after a corruption level increase."""

    MINOR_MUTATION = "minor_mutation"  # Level 2
    MAJOR_MUTATION_AND_QUIRK = "major_mutation_and_quirk"  # Level 3
    ADDITIONAL_MAJOR_MUTATION = "additional_major_mutation"  # Level 4
    TERMINAL = "terminal"  # Level 5, Warped

    @property
    def prompt(self) -> str:
        return MUTATION_EVENT_PROMPTS[self]


MUTATION_EVENT_PROMPTS: dict[MutationEventKind, str] = {
    MutationEventKind.MINOR_MUTATION: "Minor mutation triggered (cosmetic).",
    MutationEventKind.MAJOR_MUTATION_AND_QUIRK: "Major mutation + mental quirk triggered.",
    MutationEventKind.ADDITIONAL_MAJOR_MUTATION: "Additional major mutation; mental state worsens.",
    MutationEventKind.TERMINAL: (
        "Subject succumbs to Midnight Corruption and becomes Warped (dead)."
    ),
}


# =============================================================================
# DICE AND RANDOMIZATION
# =============================================================================


class DiceRoller:
    """
    Centralized randomization interface.
    All dice rolls must go through this class for reproducibility and logging.
    """

    _instance = None
    _seed: Optional[int] = None
    _rng: random.Random = random.Random()
    _roll_log: list = []

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def set_seed(cls, seed: int) -> None:
        """Set random seed for reproducibility."""
        cls._seed = seed
        cls._rng.seed(seed)

    @classmethod
    def roll(cls, dice: str, reason: str = "") -> "DiceResult":
        """
        Roll dice using standard notation (e.g., '2d6', '1d20+5', 'd8').

        Args:
            dice: Dice notation string
            reason: Why this roll is being made (for logging)

        Returns:
            DiceResult with individual rolls and total
        """
        modifier = 0
        if '+' in dice:
            dice_part, mod_part = dice.split('+')
            modifier = int(mod_part)
        elif '-' in dice:
            dice_part, mod_part = dice.split('-')
            modifier = -int(mod_part)
        else:
            dice_part = dice

        num_dice, die_size = dice_part.lower().split('d')
        num_dice = int(num_dice) if num_dice else 1
        die_size = int(die_size)

        rolls = [cls._rng.randint(1, die_size) for _ in range(num_dice)]
        total = sum(rolls) + modifier

        result = DiceResult(
            notation=dice,
            rolls=rolls,
            modifier=modifier,
            total=total,
            reason=reason
        )

        cls._roll_log.append(result)
        return result

    @classmethod
    def roll_d12(cls, reason: str = "") -> "DiceResult":
        """Convenience method for d12 mutation table rolls."""
        return cls.roll("1d12", reason)

    @classmethod
    def get_roll_log(cls) -> list:
        """Get the complete roll log for the session."""
        return cls._roll_log.copy()

    @classmethod
    def clear_roll_log(cls) -> None:
        """Clear the roll log."""
        cls._roll_log = []


@dataclass
class DiceResult:
    """Result of a dice roll with full information."""
    notation: str
    rolls: list[int]
    modifier: int
    total: int
    reason: str
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        if self.modifier > 0:
            return f"{self.notation}: {self.rolls} + {self.modifier} = {self.total}"
        elif self.modifier < 0:
            return f"{self.notation}: {self.rolls} - {abs(self.modifier)} = {self.total}"
        return f"{self.notation}: {self.rolls} = {self.total}"


def die_sides(die: str) -> int:
    """Number of faces for a die identifier such as 'd10'."""
    return int(die.lower().split("d")[-1])


# =============================================================================
# CORRUPTION STATE
# =============================================================================


@dataclass(frozen=True)
class MajorMutation:
    """A table-resolved major mutation with GM-authored notes."""
    table_id: int
    name: str
    notes: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "table_id": self.table_id,
            "name": self.name,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MajorMutation":
        # Older records stored the d12 result under "id"
        table_id = data.get("table_id", data.get("id", 0))
        return cls(
            table_id=int(table_id),
            name=data.get("name", ""),
            notes=data.get("notes") or "",
        )


@dataclass(frozen=True)
class CorruptionState:
    """
    Corruption progression for one subject.

    Attributes:
        level: Corruption level, 0 (unafflicted) to 5 (Warped)
        die: Die rolled for corruption checks at this level, None at level 5.
            Always derived from level; it cannot be passed in.
        minor_mutations: Cosmetic free-text mutations, in the order gained
        major_mutations: Table-rolled mutations, in the order gained
    """

    level: int = 0
    die: Optional[str] = field(init=False, default=None)
    minor_mutations: tuple[str, ...] = ()
    major_mutations: tuple[MajorMutation, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "die", LEVEL_DIE_TABLE.get(self.level))

    @property
    def is_terminal(self) -> bool:
        """Warped subjects have no die and take no further checks."""
        return self.level >= MAX_CORRUPTION_LEVEL or self.die is None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "level": self.level,
            "die": self.die,
            "minor_mutations": list(self.minor_mutations),
            "major_mutations": [m.to_dict() for m in self.major_mutations],
        }

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "CorruptionState":
        """
        Deserialize from dictionary.

        Partially populated records are filled with defaults; a level that
        cannot be read as an integer is treated as 0. The die is always
        derived from the level.
        """
        data = data or {}
        try:
            level = int(data.get("level", 0))
        except (TypeError, ValueError):
            level = 0
        level = max(0, min(level, MAX_CORRUPTION_LEVEL))
        return cls(
            level=level,
            minor_mutations=tuple(data.get("minor_mutations") or ()),
            major_mutations=tuple(
                MajorMutation.from_dict(m) for m in data.get("major_mutations") or ()
            ),
        )
