"""
Tests for the corruption check engine.

Checks are driven with scripted dice so every advancement path can be hit
exactly.
"""

import pytest

from midnight_corruption.data_models import CorruptionState, MutationEventKind
from midnight_corruption.corruption.corruption_engine import (
    CheckOutcome,
    CorruptionEngine,
    MajorMutationRoll,
)
from midnight_corruption.observability.run_log import RunLog
from tests.helpers import ScriptedDice, state_at_level


class TestTerminalRefusal:

    def test_warped_subject_is_refused(self, engine, scripted_dice):
        outcome = engine.roll_check(CorruptionState(level=5))
        assert outcome == CheckOutcome(terminal_already=True)
        assert scripted_dice.draw_count == 0

    def test_refusal_logs_nothing(self, engine, run_log):
        engine.roll_check(state_at_level(5))
        assert run_log.get_event_count() == 0


class TestRollCheck:

    def test_first_advance(self, engine, scripted_dice):
        scripted_dice.push(1)
        outcome = engine.roll_check(CorruptionState(level=0))

        assert outcome.roll_total == 1
        assert outcome.level_changed
        assert outcome.new_state.level == 1
        assert outcome.new_state.die == "d6"
        assert outcome.mutation_event is None
        assert not outcome.terminal_already

    def test_rolls_die_of_current_level(self, engine, scripted_dice):
        scripted_dice.push(1, 1, 1, 1, 1)
        state = CorruptionState()
        sides_rolled = []
        for _ in range(5):
            outcome = engine.roll_check(state)
            sides_rolled.append(scripted_dice.calls[-1][0])
            state = outcome.new_state
        assert sides_rolled == [4, 6, 8, 10, 20]

    def test_state_built_from_level_rolls_matching_die(self, engine, scripted_dice):
        scripted_dice.push(3)
        outcome = engine.roll_check(CorruptionState(level=2))
        assert scripted_dice.calls[-1][0] == 8
        assert outcome.die == "d8"
        assert outcome.new_state.die == "d8"

    def test_mutation_event_sequence(self, engine, scripted_dice):
        scripted_dice.push(1, 1, 1, 1)
        state = state_at_level(1)
        events = []
        for _ in range(3):
            outcome = engine.roll_check(state)
            events.append(outcome.mutation_event)
            state = outcome.new_state

        assert events == [
            MutationEventKind.MINOR_MUTATION,
            MutationEventKind.MAJOR_MUTATION_AND_QUIRK,
            MutationEventKind.ADDITIONAL_MAJOR_MUTATION,
        ]
        assert state.level == 4

        final = engine.roll_check(state)
        assert final.mutation_event == MutationEventKind.TERMINAL
        assert final.new_state.level == 5
        assert final.new_state.die is None

    @pytest.mark.parametrize("roll", [2, 3, 4])
    def test_non_one_roll_changes_nothing(self, engine, scripted_dice, roll):
        state = CorruptionState(level=0, minor_mutations=("glows faintly",))
        scripted_dice.push(roll)
        outcome = engine.roll_check(state)

        assert outcome.roll_total == roll
        assert not outcome.level_changed
        assert outcome.new_state == state
        assert outcome.mutation_event is None

    def test_high_roll_on_d20(self, engine, scripted_dice):
        scripted_dice.push(20)
        outcome = engine.roll_check(state_at_level(4))
        assert outcome.die == "d20"
        assert outcome.new_state.level == 4

    def test_one_draw_per_check(self, engine, scripted_dice):
        scripted_dice.push(1)
        engine.roll_check(state_at_level(2))
        assert scripted_dice.draw_count == 1

    def test_previous_state_reported(self, engine, scripted_dice):
        state = state_at_level(2)
        scripted_dice.push(1)
        outcome = engine.roll_check(state)
        assert outcome.previous_state == state
        assert outcome.new_state.level == 3

    def test_mutations_survive_advance(self, engine, scripted_dice):
        state = state_at_level(2, minor_mutations=("glows faintly",))
        scripted_dice.push(1)
        outcome = engine.roll_check(state)
        assert outcome.new_state.minor_mutations == ("glows faintly",)


class TestRollCheckLogging:

    def test_roll_is_logged(self, engine, scripted_dice, run_log):
        scripted_dice.push(3)
        engine.roll_check(state_at_level(1))
        rolls = run_log.get_rolls()
        assert len(rolls) == 1
        assert rolls[0].die == "d6"
        assert rolls[0].total == 3
        assert run_log.get_transitions() == []

    def test_level_change_is_logged(self, engine, scripted_dice, run_log):
        scripted_dice.push(1)
        engine.roll_check(state_at_level(2))
        transitions = run_log.get_transitions()
        assert len(transitions) == 1
        assert transitions[0].from_level == 2
        assert transitions[0].to_level == 3
        assert transitions[0].context["mutation_event"] == "major_mutation_and_quirk"


class TestRollMajorMutation:

    def test_resolves_table(self, engine, scripted_dice):
        scripted_dice.push(7)
        rolled = engine.roll_major_mutation()
        assert rolled == MajorMutationRoll(
            table_id=7,
            name="Echoed Voice",
            description="The voice fractures into layered tones, echoing with subtle Nebula resonance.",
        )

    def test_rolls_d12(self, engine, scripted_dice):
        scripted_dice.push(12)
        engine.roll_major_mutation()
        assert scripted_dice.calls[0][0] == 12

    def test_table_lookup_logged(self, engine, scripted_dice, run_log):
        scripted_dice.push(1)
        engine.roll_major_mutation()
        lookups = run_log.get_table_lookups()
        assert len(lookups) == 1
        assert lookups[0].roll_total == 1
        assert lookups[0].result_text == "Crystalline Armor"


class TestDefaultDice:

    def test_engine_with_seeded_dice(self, seeded_dice):
        engine = CorruptionEngine(run_log=RunLog())
        outcome = engine.roll_check(CorruptionState())
        assert 1 <= outcome.roll_total <= 4
        assert outcome.level_changed == (outcome.roll_total == 1)
        assert len(seeded_dice.get_roll_log()) == 1

    def test_major_mutation_in_table_range(self, seeded_dice):
        engine = CorruptionEngine(run_log=RunLog())
        for _ in range(30):
            assert 1 <= engine.roll_major_mutation().table_id <= 12

    def test_scripted_source_is_injectable(self):
        dice = ScriptedDice([1])
        engine = CorruptionEngine(rng=dice, run_log=RunLog())
        assert engine.rng is dice
        assert engine.roll_check(CorruptionState()).level_changed
