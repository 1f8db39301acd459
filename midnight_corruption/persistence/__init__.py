"""State and tracked-subject storage."""

from midnight_corruption.persistence.state_store import (
    InMemoryStateStore,
    JsonFileStateStore,
    StateStore,
    TrackedSubjectRegistry,
)

__all__ = [
    "InMemoryStateStore",
    "JsonFileStateStore",
    "StateStore",
    "TrackedSubjectRegistry",
]
