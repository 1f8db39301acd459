"""
Midnight Corruption - Command Line Entry Point

A GM-facing tracker for Midnight Corruption: track subjects, roll corruption
checks, correct levels, and record minor and major mutations.

State is kept in a single JSON file between invocations.
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from midnight_corruption import __version__
from midnight_corruption.data_models import DiceRoller
from midnight_corruption.corruption import (
    CorruptionEngine,
    CorruptionTracker,
    DiceRngAdapter,
    InvalidSubject,
    ValidationError,
)
from midnight_corruption.observability import get_run_log
from midnight_corruption.persistence import JsonFileStateStore, TrackedSubjectRegistry
from midnight_corruption.reporting import (
    format_check_report,
    format_major_mutation,
    format_state,
    format_tracker_table,
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class TrackerConfig:
    """Configuration for a tracker run."""

    data_file: Path = field(default_factory=lambda: Path("data/midnight_corruption.json"))

    # Print the tracker table after every command
    auto_open_tracker: bool = True

    # Fixed dice seed for reproducible sessions
    seed: Optional[int] = None

    verbose: bool = False

    def __post_init__(self):
        """Ensure paths are Path objects."""
        if isinstance(self.data_file, str):
            self.data_file = Path(self.data_file)


def build_tracker(config: TrackerConfig) -> CorruptionTracker:
    """Wire a CorruptionTracker to the configured JSON store."""
    if config.seed is not None:
        DiceRoller.set_seed(config.seed)

    store = JsonFileStateStore(config.data_file)
    run_log = get_run_log()
    return CorruptionTracker(
        store=store,
        registry=TrackedSubjectRegistry(backing=store),
        engine=CorruptionEngine(rng=DiceRngAdapter(), run_log=run_log),
        run_log=run_log,
    )


# =============================================================================
# ARGUMENT PARSING
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="midnight-corruption",
        description="Midnight Corruption - corruption and mutation tracker for the GM",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  midnight-corruption track wren                  # Add Wren to the tracker
  midnight-corruption roll wren --reason "Slept in the ruins"
  midnight-corruption minor wren "Eyes glint violet in darkness"
  midnight-corruption major wren --notes "-1 to stealth"
  midnight-corruption adjust wren -1              # Cure one level
        """
    )

    parser.add_argument(
        "--data-file",
        type=Path,
        default=Path("data/midnight_corruption.json"),
        help="JSON file holding corruption state (default: data/midnight_corruption.json)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed the dice for a reproducible session",
    )
    parser.add_argument(
        "--no-tracker",
        action="store_true",
        help="Do not print the tracker table after the command",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    track = commands.add_parser("track", help="Add a subject to the tracker")
    track.add_argument("subject")

    untrack = commands.add_parser("untrack", help="Remove a subject from the tracker")
    untrack.add_argument("subject")

    commands.add_parser("list", help="Show tracked subjects")

    show = commands.add_parser("show", help="Show a subject's corruption and mutations")
    show.add_argument("subject")

    roll = commands.add_parser("roll", help="Roll a corruption check")
    roll.add_argument("subject")
    roll.add_argument("--reason", default="", help="Why the check was called for")
    roll.add_argument("--notes", default="", help="Notes to include in the report")

    adjust = commands.add_parser("adjust", help="Manually raise or lower a level")
    adjust.add_argument("subject")
    adjust.add_argument("delta", type=int)

    minor = commands.add_parser("minor", help="Record a cosmetic minor mutation")
    minor.add_argument("subject")
    minor.add_argument("text")

    major = commands.add_parser("major", help="Roll and record a major mutation")
    major.add_argument("subject")
    major.add_argument("--notes", default="", help="GM notes (mechanical effects, etc.)")

    return parser


def create_config_from_args(args: argparse.Namespace) -> TrackerConfig:
    """Create TrackerConfig from parsed arguments."""
    return TrackerConfig(
        data_file=args.data_file,
        auto_open_tracker=not args.no_tracker,
        seed=args.seed,
        verbose=args.verbose,
    )


# =============================================================================
# COMMANDS
# =============================================================================

def run_command(tracker: CorruptionTracker, args: argparse.Namespace) -> str:
    """Execute one parsed command and return the text to print."""
    command = args.command

    if command == "track":
        added = tracker.track(args.subject)
        return f"Tracking {args.subject}." if added else f"{args.subject} is already tracked."

    if command == "untrack":
        removed = tracker.untrack(args.subject)
        return f"Stopped tracking {args.subject}." if removed else f"{args.subject} was not tracked."

    if command == "show":
        return format_state(args.subject, tracker.get_state(args.subject))

    if command == "roll":
        outcome = tracker.roll_for_subject(args.subject, reason=args.reason, notes=args.notes)
        return format_check_report(args.subject, outcome, reason=args.reason, notes=args.notes)

    if command == "adjust":
        state = tracker.adjust_level(args.subject, args.delta)
        return format_state(args.subject, state)

    if command == "minor":
        state = tracker.add_minor_mutation(args.subject, args.text)
        return format_state(args.subject, state)

    if command == "major":
        rolled = tracker.roll_major_mutation(args.subject)
        tracker.save_major_mutation(args.subject, rolled, args.notes)
        return format_major_mutation(args.subject, rolled)

    # "list" and no command both fall through to the tracker table
    return ""


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI usage."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    config = create_config_from_args(args)
    try:
        tracker = build_tracker(config)
        output = run_command(tracker, args)
    except (InvalidSubject, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if output:
        print(output)

    if config.auto_open_tracker or args.command in (None, "list"):
        if output:
            print()
        print(format_tracker_table(tracker.tracker_rows(), title="Midnight Corruption"))

    return 0


if __name__ == "__main__":
    sys.exit(main())
