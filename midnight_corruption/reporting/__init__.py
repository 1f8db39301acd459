"""Text reports for corruption results."""

from midnight_corruption.reporting.check_report import (
    format_check_report,
    format_major_mutation,
    format_state,
    format_tracker_table,
)

__all__ = [
    "format_check_report",
    "format_major_mutation",
    "format_state",
    "format_tracker_table",
]
