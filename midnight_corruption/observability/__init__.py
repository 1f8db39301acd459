"""
Observability for the Midnight Corruption tracker.

Records corruption rolls, mutation table lookups, level transitions and
state writes.
"""

from midnight_corruption.observability.run_log import (
    RunLog,
    LogEvent,
    EventType,
    RollEvent,
    TransitionEvent,
    TableLookupEvent,
    StateChangeEvent,
    get_run_log,
    reset_run_log,
)

__all__ = [
    "RunLog",
    "LogEvent",
    "EventType",
    "RollEvent",
    "TransitionEvent",
    "TableLookupEvent",
    "StateChangeEvent",
    "get_run_log",
    "reset_run_log",
]
