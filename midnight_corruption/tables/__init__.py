"""Roll tables for Midnight Corruption."""

from midnight_corruption.tables.mutation_tables import (
    FALLBACK_MUTATION,
    MAJOR_MUTATIONS,
    MutationEntry,
    MutationTable,
)

__all__ = [
    "FALLBACK_MUTATION",
    "MAJOR_MUTATIONS",
    "MutationEntry",
    "MutationTable",
]
