"""
Major mutation table for Midnight Corruption.

A fixed d12 table of named mutations. Lookups are total: anything that is
not a table id from 1 to 12 resolves to a fallback entry instead of raising.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MutationEntry:
    """A named major mutation and its flavour description."""
    name: str
    description: str


MAJOR_MUTATION_DIE = "d12"

MAJOR_MUTATIONS: dict[int, MutationEntry] = {
    1: MutationEntry(
        "Crystalline Armor",
        "Parts of the body are encrusted in violet crystal, hardening the flesh.",
    ),
    2: MutationEntry(
        "Nebula Lash",
        "A limb or growth becomes a lash-like appendage, suggestive of unnatural reach.",
    ),
    3: MutationEntry(
        "Extra Eyes / Sensory Nodes",
        "Additional eyes or crystalline sensory nodes emerge along the skin.",
    ),
    4: MutationEntry(
        "Warped Locomotion",
        "The way the body moves changes: reversed joints, extra limbs, or partial hovering.",
    ),
    5: MutationEntry(
        "Nebula Pulse",
        "The body emits faint, periodic pulses of violet energy that disturb the air.",
    ),
    6: MutationEntry(
        "Voracious Maw",
        "A secondary mouth, mandibles, or maw opens where there was none before.",
    ),
    7: MutationEntry(
        "Echoed Voice",
        "The voice fractures into layered tones, echoing with subtle Nebula resonance.",
    ),
    8: MutationEntry(
        "Phase-Shifted Flesh",
        "Portions of the body flicker between solidity and an insubstantial state.",
    ),
    9: MutationEntry(
        "Living Crystal Growth",
        "Clusters of Starshard-like crystals sprout, pulsing as though breathing.",
    ),
    10: MutationEntry(
        "Nebula-Thickened Blood",
        "Blood becomes viscous and faintly luminous, resisting normal flow.",
    ),
    11: MutationEntry(
        "Reality Glitch Aura",
        "Subtle spatial and visual distortions manifest around the afflicted.",
    ),
    12: MutationEntry(
        "Warped Mind Manifest",
        "The mind’s corruption takes on a visible form: third eye, halo, or shifting shadow.",
    ),
}

FALLBACK_MUTATION = MutationEntry(
    "Indescribable Mutation",
    "A mutation beyond easy description manifests upon the subject.",
)


class MutationTable:
    """Lookup over the d12 major mutation table."""

    @staticmethod
    def resolve(table_id) -> MutationEntry:
        """
        Resolve a d12 result to its mutation.

        Args:
            table_id: The d12 result

        Returns:
            The matching MutationEntry, or FALLBACK_MUTATION for anything
            that is not an integer from 1 to 12
        """
        # bool is an int subclass but never a valid roll
        if isinstance(table_id, bool) or not isinstance(table_id, int):
            return FALLBACK_MUTATION
        return MAJOR_MUTATIONS.get(table_id, FALLBACK_MUTATION)

    @staticmethod
    def entries() -> list[tuple[int, MutationEntry]]:
        """All table rows in roll order."""
        return sorted(MAJOR_MUTATIONS.items())
