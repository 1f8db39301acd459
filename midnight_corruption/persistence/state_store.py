"""
Storage for corruption states and the tracked-subject list.

Stores are keyed by subject id and last-write-wins. States are kept in their
serialized dictionary form so every load goes through CorruptionState.from_dict.
"""

from pathlib import Path
from typing import Any, Optional, Protocol
import json
import logging

from midnight_corruption.data_models import CorruptionState

logger = logging.getLogger(__name__)


STORE_FORMAT_VERSION = 1


class StateStore(Protocol):
    """Keyed persistence for corruption states."""

    def load(self, subject_id: str) -> Optional[CorruptionState]:
        ...

    def save(self, subject_id: str, state: CorruptionState) -> None:
        ...


class InMemoryStateStore:
    """Dictionary-backed state store."""

    def __init__(self):
        self._records: dict[str, dict[str, Any]] = {}
        self._tracked: list[str] = []

    def load(self, subject_id: str) -> Optional[CorruptionState]:
        record = self._records.get(subject_id)
        if record is None:
            return None
        return CorruptionState.from_dict(record)

    def save(self, subject_id: str, state: CorruptionState) -> None:
        self._records[subject_id] = state.to_dict()

    def subject_ids(self) -> list[str]:
        return list(self._records)

    def load_tracked(self) -> list[str]:
        return list(self._tracked)

    def save_tracked(self, subject_ids: list[str]) -> None:
        self._tracked = list(subject_ids)


class JsonFileStateStore:
    """
    State store persisted to a single JSON file.

    File layout:
        {"version": 1, "subjects": {id: state_dict}, "tracked": [id, ...]}

    The whole file is rewritten on each save.
    """

    def __init__(self, filepath: Path | str):
        self.filepath = Path(filepath)

    def _read(self) -> dict[str, Any]:
        if not self.filepath.exists():
            return {"version": STORE_FORMAT_VERSION, "subjects": {}, "tracked": []}
        try:
            with open(self.filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Corrupt corruption store {self.filepath}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(
                f"Corrupt corruption store {self.filepath}: expected a JSON object"
            )
        data.setdefault("subjects", {})
        data.setdefault("tracked", [])
        if not isinstance(data["subjects"], dict) or not isinstance(data["tracked"], list):
            raise ValueError(f"Corrupt corruption store {self.filepath}: bad layout")
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        data["version"] = STORE_FORMAT_VERSION
        with open(self.filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def load(self, subject_id: str) -> Optional[CorruptionState]:
        record = self._read()["subjects"].get(subject_id)
        if record is None:
            return None
        return CorruptionState.from_dict(record)

    def save(self, subject_id: str, state: CorruptionState) -> None:
        data = self._read()
        data["subjects"][subject_id] = state.to_dict()
        self._write(data)
        logger.info(f"Saved corruption state for {subject_id} to {self.filepath}")

    def subject_ids(self) -> list[str]:
        return list(self._read()["subjects"])

    def load_tracked(self) -> list[str]:
        return list(self._read()["tracked"])

    def save_tracked(self, subject_ids: list[str]) -> None:
        data = self._read()
        data["tracked"] = list(subject_ids)
        self._write(data)


class TrackedSubjectRegistry:
    """
    The set of subjects shown on the GM's tracker.

    Independent of corruption state: untracking a subject keeps its state.
    When a backing store is given the list is persisted through its
    load_tracked/save_tracked methods.
    """

    def __init__(self, backing: Optional[InMemoryStateStore | JsonFileStateStore] = None):
        self._backing = backing
        self._ids: list[str] = backing.load_tracked() if backing is not None else []

    def list(self) -> list[str]:
        """Tracked subject ids in the order they were added."""
        return list(self._ids)

    def __contains__(self, subject_id: str) -> bool:
        return subject_id in self._ids

    def add(self, subject_id: str) -> bool:
        """Track a subject. Returns False if it was already tracked."""
        if subject_id in self._ids:
            return False
        self._ids.append(subject_id)
        self._persist()
        return True

    def remove(self, subject_id: str) -> bool:
        """Stop tracking a subject. Returns False if it was not tracked."""
        if subject_id not in self._ids:
            return False
        self._ids = [i for i in self._ids if i != subject_id]
        self._persist()
        return True

    def _persist(self) -> None:
        if self._backing is not None:
            self._backing.save_tracked(self._ids)
