"""
Tests for the plain-text corruption reports.
"""

from midnight_corruption.data_models import CorruptionState, MajorMutation
from midnight_corruption.corruption.corruption_engine import CheckOutcome, MajorMutationRoll
from midnight_corruption.reporting.check_report import (
    format_check_report,
    format_major_mutation,
    format_state,
    format_tracker_table,
)
from tests.helpers import state_at_level


class TestCheckReport:

    def test_terminal_refusal(self):
        report = format_check_report("Wren", CheckOutcome(terminal_already=True))
        assert report == "Wren has already succumbed to Midnight Corruption."

    def test_no_change(self, engine, scripted_dice):
        scripted_dice.push(3)
        outcome = engine.roll_check(state_at_level(0))
        report = format_check_report("Wren", outcome, reason="Manual trigger")

        assert report.splitlines() == [
            "Midnight Corruption – Wren",
            "Reason: Manual trigger",
            "Current Corruption Die: d4",
            "Roll Result: 3",
        ]

    def test_level_change_with_prompt(self, engine, scripted_dice):
        scripted_dice.push(1)
        outcome = engine.roll_check(state_at_level(1))
        report = format_check_report("Wren", outcome, notes="Touched the shard")

        assert "Notes: Touched the shard" in report
        assert "Corruption Level increased to: 2" in report
        assert "New Corruption Die: d8" in report
        assert "Minor mutation triggered (cosmetic)." in report

    def test_warped_report(self, engine, scripted_dice):
        scripted_dice.push(1)
        outcome = engine.roll_check(state_at_level(4))
        report = format_check_report("Wren", outcome)

        assert "New Corruption Die: —" in report
        assert "becomes Warped (dead)" in report


class TestOtherReports:

    def test_major_mutation(self):
        rolled = MajorMutationRoll(table_id=5, name="Nebula Pulse", description="Pulses.")
        report = format_major_mutation("Wren", rolled)
        assert report.splitlines() == [
            "Major Mutation – Wren",
            "Roll: d12 → 5",
            "Nebula Pulse",
            "Pulses.",
        ]

    def test_state_sheet(self):
        state = CorruptionState(
            level=3,
            minor_mutations=("glows faintly",),
            major_mutations=(MajorMutation(table_id=7, name="Echoed Voice", notes="chorus"),),
        )
        report = format_state("Wren", state)
        assert report.splitlines() == [
            "Wren: level 3, die d10",
            "Minor mutations:",
            "  - glows faintly",
            "Major mutations:",
            "  - [7] Echoed Voice: chorus",
        ]

    def test_tracker_table(self):
        table = format_tracker_table([
            {"subject_id": "wren", "level": 2, "die": "d8"},
            {"subject_id": "bram", "level": 5, "die": "—"},
        ])
        lines = table.splitlines()
        assert lines[0].startswith("Subject")
        assert "wren" in lines[1] and "d8" in lines[1]
        assert "bram" in lines[2] and "—" in lines[2]

    def test_empty_tracker_table(self):
        assert format_tracker_table([]) == "No tracked subjects."
