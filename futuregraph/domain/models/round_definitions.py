"""Definitions of the ten FutureGraph rounds.

Each round number has a fixed analytical focus. Rounds 1-6 are the
diagnostic layers, rounds 7-10 are the treatment rounds that may only run
once every diagnostic product is resolved.
"""

from __future__ import annotations

from dataclasses import dataclass

TOTAL_ROUNDS = 10

FIRST_ROUND = 1

# Rounds 1-6 produce the diagnostic products
DIAGNOSTIC_ROUNDS: tuple[int, ...] = (1, 2, 3, 4, 5, 6)

# Rounds 7-10 build treatment on top of the diagnostic products
TREATMENT_ROUNDS: tuple[int, ...] = (7, 8, 9, 10)

# Rounds feeding specific report sections
VISIBLE_LAYER_ROUND = 1
ROOT_LAYER_ROUND = 6
VOICE_DIALOGUE_ROUND = 7
MASK_ANALYSIS_ROUND = 8
INTEGRATION_ROUND = 9
TREATMENT_ROUND = 10


@dataclass(frozen=True)
class RoundDefinition:
    """Fixed meaning of one round number.

    Attributes:
        number: Round number (1..10).
        name: English round name, used as the report section label.
        focus: English description of what the round analyzes.
    """

    number: int
    name: str
    focus: str

    @property
    def is_treatment(self) -> bool:
        """True for rounds 7-10."""
        return self.number in TREATMENT_ROUNDS


ROUND_DEFINITIONS: dict[int, RoundDefinition] = {
    definition.number: definition
    for definition in (
        RoundDefinition(
            1, "Visible Layer", "Initial impressions, obvious patterns in handwriting"
        ),
        RoundDefinition(
            2, "Conscious Layer", "Surface patterns, conscious behaviors and choices"
        ),
        RoundDefinition(
            3, "Subconscious Layer", "Deeper motivations, hidden desires and drives"
        ),
        RoundDefinition(
            4, "Hidden Layer", "Core dynamics, repressed content and conflicts"
        ),
        RoundDefinition(
            5,
            "Shadow Layer",
            "Unconscious patterns, shadow elements and projections",
        ),
        RoundDefinition(6, "Root Layer", "Fundamental identity, core self and essence"),
        RoundDefinition(
            7, "Voice Dialogue", "Internal voices, sub-personalities and parts work"
        ),
        RoundDefinition(
            8,
            "Mask Analysis",
            "Defense mechanisms, personas and protective strategies",
        ),
        RoundDefinition(
            9, "Integration", "Synthesis of all layers into coherent understanding"
        ),
        RoundDefinition(
            10,
            "Treatment Recommendations",
            "Therapeutic interventions and treatment planning",
        ),
    )
}


def is_valid_round_number(round_number: int) -> bool:
    """Check whether a number names one of the ten rounds."""
    return FIRST_ROUND <= round_number <= TOTAL_ROUNDS


def get_round_definition(round_number: int) -> RoundDefinition:
    """Look up the definition of a round.

    Args:
        round_number: Round number (1..10).

    Returns:
        The RoundDefinition for that number.

    Raises:
        ValueError: If the number is outside 1..10.
    """
    if not is_valid_round_number(round_number):
        raise ValueError(
            f"round_number must be between {FIRST_ROUND} and {TOTAL_ROUNDS}, "
            f"got {round_number}"
        )
    return ROUND_DEFINITIONS[round_number]
