"""
Pytest fixtures for the Midnight Corruption test suite.

Provides dice, run log, engine, store and tracker fixtures.
"""

import pytest

from midnight_corruption.data_models import DiceRoller
from midnight_corruption.corruption.corruption_engine import CorruptionEngine
from midnight_corruption.corruption.corruption_tracker import CorruptionTracker
from midnight_corruption.observability.run_log import RunLog
from midnight_corruption.persistence.state_store import (
    InMemoryStateStore,
    JsonFileStateStore,
    TrackedSubjectRegistry,
)
from tests.helpers import ScriptedDice


# =============================================================================
# DICE FIXTURES
# =============================================================================


@pytest.fixture
def seeded_dice():
    """Provide a seeded DiceRoller for reproducible tests."""
    DiceRoller.clear_roll_log()
    DiceRoller.set_seed(42)
    yield DiceRoller()
    DiceRoller.clear_roll_log()


@pytest.fixture
def clean_dice():
    """Provide a clean DiceRoller without seed."""
    DiceRoller.clear_roll_log()
    yield DiceRoller()
    DiceRoller.clear_roll_log()


@pytest.fixture
def scripted_dice():
    """Scripted dice source; queue results with push()."""
    return ScriptedDice()


# =============================================================================
# CORE FIXTURES
# =============================================================================


@pytest.fixture
def run_log():
    """An isolated run log."""
    return RunLog()


@pytest.fixture
def engine(scripted_dice, run_log):
    """CorruptionEngine driven by scripted dice."""
    return CorruptionEngine(rng=scripted_dice, run_log=run_log)


@pytest.fixture
def memory_store():
    return InMemoryStateStore()


@pytest.fixture
def json_store(tmp_path):
    """JSON file store in a temporary directory."""
    return JsonFileStateStore(tmp_path / "corruption.json")


@pytest.fixture
def tracker(memory_store, engine, run_log):
    """CorruptionTracker over an in-memory store and scripted dice."""
    return CorruptionTracker(
        store=memory_store,
        registry=TrackedSubjectRegistry(backing=memory_store),
        engine=engine,
        run_log=run_log,
    )
