"""
Corruption Engine.

Runs one corruption check: roll the die for the subject's current level,
advance on a 1, and classify which mutation bookkeeping is now due. The
engine never decides mutation content; it returns a MutationEventKind for
the caller to act on.
"""

from dataclasses import dataclass
from typing import Optional
import logging

from midnight_corruption.data_models import (
    CorruptionState,
    MutationEventKind,
    die_sides,
)
from midnight_corruption.corruption.corruption_state import level_to_die, upgrade
from midnight_corruption.corruption.dice_rng_adapter import DiceRngAdapter, DiceSource
from midnight_corruption.observability.run_log import RunLog, get_run_log
from midnight_corruption.tables.mutation_tables import (
    MAJOR_MUTATION_DIE,
    MutationTable,
)

logger = logging.getLogger(__name__)


# Roll result that advances corruption
ADVANCE_ON_ROLL = 1

MUTATION_EVENTS_BY_LEVEL: dict[int, MutationEventKind] = {
    2: MutationEventKind.MINOR_MUTATION,
    3: MutationEventKind.MAJOR_MUTATION_AND_QUIRK,
    4: MutationEventKind.ADDITIONAL_MAJOR_MUTATION,
    5: MutationEventKind.TERMINAL,
}


@dataclass(frozen=True)
class CheckOutcome:
    """
    Result of a corruption check.

    A refused check on a Warped subject has terminal_already=True and no
    roll; every other field is then left at its default.
    """
    terminal_already: bool = False
    roll_total: Optional[int] = None
    die: Optional[str] = None
    previous_state: Optional[CorruptionState] = None
    new_state: Optional[CorruptionState] = None
    level_changed: bool = False
    mutation_event: Optional[MutationEventKind] = None


@dataclass(frozen=True)
class MajorMutationRoll:
    """A d12 major mutation draw waiting for the GM's notes."""
    table_id: int
    name: str
    description: str


class CorruptionEngine:
    """
    Corruption check and mutation table roller.

    Args:
        rng: Dice source with roll_die(sides, reason). Defaults to a
            DiceRngAdapter over the shared DiceRoller.
        run_log: Where rolls and transitions are recorded. Defaults to the
            shared RunLog.
    """

    def __init__(
        self,
        rng: Optional[DiceSource] = None,
        run_log: Optional[RunLog] = None,
    ):
        self.rng = rng or DiceRngAdapter(reason_prefix="Corruption")
        self.run_log = run_log or get_run_log()

    def roll_check(self, state: CorruptionState) -> CheckOutcome:
        """
        Perform one corruption check.

        Args:
            state: The subject's current corruption state

        Returns:
            CheckOutcome; terminal_already=True without any roll when the
            subject is already Warped
        """
        die = level_to_die(state.level)
        if state.is_terminal or die is None:
            logger.debug("Corruption check refused: subject already Warped")
            return CheckOutcome(terminal_already=True)

        total = self.rng.roll_die(die_sides(die), "corruption check")
        self.run_log.log_roll(die, total, "Corruption check", {"level": state.level})
        logger.debug(f"Corruption check on {die}: rolled {total}")

        if total != ADVANCE_ON_ROLL:
            return CheckOutcome(
                roll_total=total,
                die=die,
                previous_state=state,
                new_state=state,
            )

        new_state = upgrade(state)
        level_changed = new_state.level != state.level
        mutation_event = None
        if level_changed:
            mutation_event = MUTATION_EVENTS_BY_LEVEL.get(new_state.level)
            self.run_log.log_transition(
                state.level,
                new_state.level,
                f"rolled {total} on {die}",
                {"mutation_event": mutation_event.value if mutation_event else None},
            )
            logger.info(f"Corruption level increased {state.level} -> {new_state.level}")

        return CheckOutcome(
            roll_total=total,
            die=die,
            previous_state=state,
            new_state=new_state,
            level_changed=level_changed,
            mutation_event=mutation_event,
        )

    def roll_major_mutation(self) -> MajorMutationRoll:
        """
        Roll on the d12 major mutation table.

        The result is not recorded on any subject; pass it to
        add_major_mutation along with the GM's notes.
        """
        table_id = self.rng.roll_die(die_sides(MAJOR_MUTATION_DIE), "major mutation")
        entry = MutationTable.resolve(table_id)
        self.run_log.log_table_lookup(
            "major_mutation",
            "Major Mutation",
            table_id,
            entry.name,
        )
        return MajorMutationRoll(
            table_id=table_id,
            name=entry.name,
            description=entry.description,
        )
