"""
Run Log for corruption event tracking.

Captures corruption rolls, mutation table lookups, level transitions and
state changes so a session can be audited and replayed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Callable
import json
import logging

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Types of events that can be logged."""

    ROLL = "roll"  # Corruption die roll
    TRANSITION = "transition"  # Corruption level change
    TABLE_LOOKUP = "table_lookup"  # Mutation table roll
    STATE_CHANGE = "state_change"  # Persisted state write
    CUSTOM = "custom"


@dataclass
class LogEvent:
    """Base class for all logged events."""

    # Subclasses set the correct value in __post_init__
    event_type: EventType = EventType.CUSTOM
    timestamp: datetime = field(default_factory=datetime.now)
    sequence_number: int = 0
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "event_type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(),
            "sequence_number": self.sequence_number,
            "context": self.context,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogEvent":
        """Create from dictionary."""
        return cls(
            event_type=EventType(data["event_type"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            sequence_number=data.get("sequence_number", 0),
            context=data.get("context", {}),
        )


@dataclass
class RollEvent(LogEvent):
    """A corruption die roll."""

    die: str = ""
    total: int = 0
    reason: str = ""

    def __post_init__(self):
        self.event_type = EventType.ROLL

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update({"die": self.die, "total": self.total, "reason": self.reason})
        return base

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RollEvent":
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            sequence_number=data.get("sequence_number", 0),
            context=data.get("context", {}),
            die=data.get("die", ""),
            total=data.get("total", 0),
            reason=data.get("reason", ""),
        )

    def __str__(self) -> str:
        return f"[{self.sequence_number}] ROLL {self.die}: {self.total} ({self.reason})"


@dataclass
class TransitionEvent(LogEvent):
    """A corruption level change."""

    from_level: int = 0
    to_level: int = 0
    trigger: str = ""

    def __post_init__(self):
        self.event_type = EventType.TRANSITION

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "from_level": self.from_level,
                "to_level": self.to_level,
                "trigger": self.trigger,
            }
        )
        return base

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TransitionEvent":
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            sequence_number=data.get("sequence_number", 0),
            context=data.get("context", {}),
            from_level=data.get("from_level", 0),
            to_level=data.get("to_level", 0),
            trigger=data.get("trigger", ""),
        )

    def __str__(self) -> str:
        return (
            f"[{self.sequence_number}] TRANSITION level {self.from_level} -> "
            f"{self.to_level} (trigger: {self.trigger})"
        )


@dataclass
class TableLookupEvent(LogEvent):
    """A mutation table roll."""

    table_id: str = ""
    table_name: str = ""
    roll_total: int = 0
    result_text: str = ""

    def __post_init__(self):
        self.event_type = EventType.TABLE_LOOKUP

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "table_id": self.table_id,
                "table_name": self.table_name,
                "roll_total": self.roll_total,
                "result_text": self.result_text,
            }
        )
        return base

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TableLookupEvent":
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            sequence_number=data.get("sequence_number", 0),
            context=data.get("context", {}),
            table_id=data.get("table_id", ""),
            table_name=data.get("table_name", ""),
            roll_total=data.get("roll_total", 0),
            result_text=data.get("result_text", ""),
        )

    def __str__(self) -> str:
        return f"[{self.sequence_number}] TABLE {self.table_name} [{self.roll_total}]: {self.result_text}"


@dataclass
class StateChangeEvent(LogEvent):
    """A subject's corruption state was written."""

    subject_id: str = ""
    change: str = ""
    level: int = 0

    def __post_init__(self):
        self.event_type = EventType.STATE_CHANGE

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "subject_id": self.subject_id,
                "change": self.change,
                "level": self.level,
            }
        )
        return base

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StateChangeEvent":
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            sequence_number=data.get("sequence_number", 0),
            context=data.get("context", {}),
            subject_id=data.get("subject_id", ""),
            change=data.get("change", ""),
            level=data.get("level", 0),
        )

    def __str__(self) -> str:
        return f"[{self.sequence_number}] STATE {self.subject_id}: {self.change} (level {self.level})"


_EVENT_CLASSES: dict[EventType, type[LogEvent]] = {
    EventType.ROLL: RollEvent,
    EventType.TRANSITION: TransitionEvent,
    EventType.TABLE_LOOKUP: TableLookupEvent,
    EventType.STATE_CHANGE: StateChangeEvent,
}


class RunLog:
    """
    Ordered record of corruption events with subscriber notification.

    Use get_run_log() for the shared default instance, or construct one and
    inject it where isolation is needed.
    """

    def __init__(self):
        self._events: list[LogEvent] = []
        self._sequence: int = 0
        self._session_start: datetime = datetime.now()
        self._subscribers: list[Callable[[LogEvent], None]] = []
        self._paused: bool = False

    def reset(self) -> None:
        """Reset the log for a new session."""
        self._events = []
        self._sequence = 0
        self._session_start = datetime.now()
        logger.info("RunLog reset")

    def pause(self) -> None:
        """Pause logging (e.g., during replay)."""
        self._paused = True

    def resume(self) -> None:
        """Resume logging."""
        self._paused = False

    def is_paused(self) -> bool:
        return self._paused

    def subscribe(self, callback: Callable[[LogEvent], None]) -> None:
        """Subscribe to receive events as they are logged."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[LogEvent], None]) -> None:
        """Unsubscribe from events."""
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _log_event(self, event: LogEvent) -> None:
        if self._paused:
            return

        self._sequence += 1
        event.sequence_number = self._sequence
        self._events.append(event)

        for subscriber in self._subscribers:
            try:
                subscriber(event)
            except Exception as e:
                logger.warning(f"Subscriber error: {e}")

    def log_roll(
        self,
        die: str,
        total: int,
        reason: str = "",
        context: Optional[dict[str, Any]] = None,
    ) -> RollEvent:
        """Log a corruption die roll."""
        event = RollEvent(die=die, total=total, reason=reason, context=context or {})
        self._log_event(event)
        return event

    def log_transition(
        self,
        from_level: int,
        to_level: int,
        trigger: str,
        context: Optional[dict[str, Any]] = None,
    ) -> TransitionEvent:
        """Log a corruption level change."""
        event = TransitionEvent(
            from_level=from_level,
            to_level=to_level,
            trigger=trigger,
            context=context or {},
        )
        self._log_event(event)
        return event

    def log_table_lookup(
        self,
        table_id: str,
        table_name: str,
        roll_total: int,
        result_text: str,
        context: Optional[dict[str, Any]] = None,
    ) -> TableLookupEvent:
        """Log a mutation table lookup."""
        event = TableLookupEvent(
            table_id=table_id,
            table_name=table_name,
            roll_total=roll_total,
            result_text=result_text,
            context=context or {},
        )
        self._log_event(event)
        return event

    def log_state_change(
        self,
        subject_id: str,
        change: str,
        level: int,
        context: Optional[dict[str, Any]] = None,
    ) -> StateChangeEvent:
        """Log a persisted state write."""
        event = StateChangeEvent(
            subject_id=subject_id,
            change=change,
            level=level,
            context=context or {},
        )
        self._log_event(event)
        return event

    def get_events(
        self,
        event_type: Optional[EventType] = None,
        since_sequence: int = 0,
    ) -> list[LogEvent]:
        """
        Get logged events.

        Args:
            event_type: Filter by event type (None = all)
            since_sequence: Only events after this sequence number
        """
        events = [e for e in self._events if e.sequence_number > since_sequence]
        if event_type:
            events = [e for e in events if e.event_type == event_type]
        return events

    def get_rolls(self) -> list[RollEvent]:
        return [e for e in self._events if isinstance(e, RollEvent)]

    def get_transitions(self) -> list[TransitionEvent]:
        return [e for e in self._events if isinstance(e, TransitionEvent)]

    def get_table_lookups(self) -> list[TableLookupEvent]:
        return [e for e in self._events if isinstance(e, TableLookupEvent)]

    def get_state_changes(self) -> list[StateChangeEvent]:
        return [e for e in self._events if isinstance(e, StateChangeEvent)]

    def get_event_count(self) -> int:
        return len(self._events)

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of the run log."""
        return {
            "session_start": self._session_start.isoformat(),
            "total_events": len(self._events),
            "rolls": len(self.get_rolls()),
            "transitions": len(self.get_transitions()),
            "table_lookups": len(self.get_table_lookups()),
            "state_changes": len(self.get_state_changes()),
            "last_sequence": self._sequence,
        }

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entire log to a dictionary."""
        return {
            "session_start": self._session_start.isoformat(),
            "sequence": self._sequence,
            "events": [e.to_dict() for e in self._events],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def save(self, filepath: str) -> None:
        """Save the log to a file."""
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(self.to_json())
        logger.info(f"RunLog saved to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "RunLog":
        """Load a log from a file into a new RunLog."""
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)

        log = cls()
        log._session_start = datetime.fromisoformat(data["session_start"])
        log._sequence = data.get("sequence", 0)

        for event_data in data.get("events", []):
            event_class = _EVENT_CLASSES.get(EventType(event_data["event_type"]), LogEvent)
            log._events.append(event_class.from_dict(event_data))

        logger.info(f"RunLog loaded from {filepath}: {len(log._events)} events")
        return log

    def format_log(
        self,
        event_types: Optional[list[EventType]] = None,
        max_events: Optional[int] = None,
    ) -> str:
        """Format the log as a human-readable string."""
        lines = [
            "=== Run Log ===",
            f"Session: {self._session_start.isoformat()}",
            f"Total Events: {len(self._events)}",
            "",
        ]

        events = self._events
        if event_types:
            events = [e for e in events if e.event_type in event_types]
        if max_events:
            events = events[-max_events:]

        for event in events:
            lines.append(str(event))

        return "\n".join(lines)


_run_log: Optional[RunLog] = None


def get_run_log() -> RunLog:
    """Get the default RunLog instance."""
    global _run_log
    if _run_log is None:
        _run_log = RunLog()
    return _run_log


def reset_run_log() -> RunLog:
    """Reset and return the default RunLog instance."""
    log = get_run_log()
    log.reset()
    return log
