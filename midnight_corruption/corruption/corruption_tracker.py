"""
Corruption Tracker service.

Drives corruption for tracked subjects end to end: load a subject's state,
apply one engine or state-store operation, save the result, and notify
listeners. Each call runs to completion for one subject; callers must not
interleave operations on the same subject.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional
import logging

from midnight_corruption.data_models import CorruptionState, NO_DIE_LABEL
from midnight_corruption.corruption import corruption_state
from midnight_corruption.corruption.corruption_engine import (
    CheckOutcome,
    CorruptionEngine,
    MajorMutationRoll,
)
from midnight_corruption.corruption.corruption_state import InvalidSubject
from midnight_corruption.observability.run_log import RunLog, get_run_log
from midnight_corruption.persistence.state_store import (
    InMemoryStateStore,
    StateStore,
    TrackedSubjectRegistry,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateChange:
    """Notification sent to listeners after a subject's state is saved."""
    subject_id: str
    change: str  # "level_up", "adjust", "minor_mutation", "major_mutation"
    state: CorruptionState


class CorruptionTracker:
    """
    Service layer over the corruption core.

    Args:
        store: Keyed state persistence
        registry: Tracked-subject list
        engine: Corruption engine; built with the shared dice if omitted
        run_log: Where state writes are recorded
    """

    def __init__(
        self,
        store: Optional[StateStore] = None,
        registry: Optional[TrackedSubjectRegistry] = None,
        engine: Optional[CorruptionEngine] = None,
        run_log: Optional[RunLog] = None,
    ):
        self.store = store if store is not None else InMemoryStateStore()
        self.registry = registry if registry is not None else TrackedSubjectRegistry()
        self.run_log = run_log or get_run_log()
        self.engine = engine or CorruptionEngine(run_log=self.run_log)
        self._listeners: list[Callable[[StateChange], None]] = []

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def subscribe(self, callback: Callable[[StateChange], None]) -> None:
        """Receive a StateChange after every successful save."""
        self._listeners.append(callback)

    def unsubscribe(self, callback: Callable[[StateChange], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _commit(self, subject_id: str, state: CorruptionState, change: str) -> None:
        self.store.save(subject_id, state)
        self.run_log.log_state_change(subject_id, change, state.level)
        notice = StateChange(subject_id=subject_id, change=change, state=state)
        for listener in list(self._listeners):
            try:
                listener(notice)
            except Exception as e:
                logger.warning(f"Corruption listener error for {subject_id}: {e}")

    # -------------------------------------------------------------------------
    # State access
    # -------------------------------------------------------------------------

    @staticmethod
    def _require_subject(subject_id: Optional[str]) -> str:
        if subject_id is None or not str(subject_id).strip():
            raise InvalidSubject("No subject provided")
        return subject_id

    def get_state(self, subject_id: str) -> CorruptionState:
        """Current state, defaulting for subjects never stored."""
        subject_id = self._require_subject(subject_id)
        state = self.store.load(subject_id)
        if state is None:
            return corruption_state.default_state()
        return state

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def roll_for_subject(
        self,
        subject_id: str,
        reason: str = "",
        notes: str = "",
    ) -> CheckOutcome:
        """
        Roll a corruption check for a subject.

        The state is only saved when the level changed. Reason and notes go
        to the log only; they do not affect the roll.
        """
        subject_id = self._require_subject(subject_id)
        state = self.get_state(subject_id)
        outcome = self.engine.roll_check(state)

        if outcome.terminal_already:
            logger.info(f"{subject_id} has already succumbed to Midnight Corruption")
            return outcome

        logger.info(
            f"Corruption check for {subject_id}: {outcome.die} -> {outcome.roll_total}"
            + (f" ({reason})" if reason else "")
        )
        if notes:
            logger.debug(f"Corruption check notes for {subject_id}: {notes}")
        if outcome.level_changed:
            self._commit(subject_id, outcome.new_state, "level_up")
        return outcome

    def adjust_level(self, subject_id: str, delta: int) -> CorruptionState:
        """Manually correct a subject's level; no mutation events are raised."""
        subject_id = self._require_subject(subject_id)
        state = corruption_state.adjust(self.get_state(subject_id), delta)
        self._commit(subject_id, state, "adjust")
        return state

    def add_minor_mutation(self, subject_id: str, text: str) -> CorruptionState:
        """Record a cosmetic mutation. Raises ValidationError for blank text."""
        subject_id = self._require_subject(subject_id)
        state = corruption_state.add_minor_mutation(self.get_state(subject_id), text)
        self._commit(subject_id, state, "minor_mutation")
        return state

    def roll_major_mutation(self, subject_id: str) -> MajorMutationRoll:
        """
        First half of major mutation entry: roll the table.

        Nothing is saved. Follow up with save_major_mutation once the GM's
        notes are in, or drop the roll to cancel.
        """
        self._require_subject(subject_id)
        rolled = self.engine.roll_major_mutation()
        logger.info(f"Major mutation rolled for {subject_id}: {rolled.table_id} {rolled.name}")
        return rolled

    def save_major_mutation(
        self,
        subject_id: str,
        rolled: MajorMutationRoll,
        notes: Optional[str] = "",
    ) -> CorruptionState:
        """Second half of major mutation entry: record the roll with notes."""
        subject_id = self._require_subject(subject_id)
        state = corruption_state.add_major_mutation(self.get_state(subject_id), rolled, notes)
        self._commit(subject_id, state, "major_mutation")
        return state

    # -------------------------------------------------------------------------
    # Tracked subjects
    # -------------------------------------------------------------------------

    def track(self, subject_id: str) -> bool:
        return self.registry.add(self._require_subject(subject_id))

    def untrack(self, subject_id: str) -> bool:
        return self.registry.remove(self._require_subject(subject_id))

    def tracked_subjects(self) -> list[str]:
        return self.registry.list()

    def tracker_rows(self) -> list[dict[str, Any]]:
        """Level and die for each tracked subject, for the GM's list."""
        rows = []
        for subject_id in self.registry.list():
            state = self.get_state(subject_id)
            rows.append({
                "subject_id": subject_id,
                "level": state.level,
                "die": state.die or NO_DIE_LABEL,
            })
        return rows
