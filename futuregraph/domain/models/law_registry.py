"""Law Registry: static catalog of FutureGraph validation rules.

Laws are declarative descriptors. Each one names its kind (which
validator evaluates it) and, for enforceable laws, a rule shape that
selects the generic check the validator dispatches to. Parameters are
plain data, so a new law of an existing shape is added here without
touching validator control flow.

The registry is loaded once at import time and never mutated.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from futuregraph.domain.models.round_definitions import (
    DIAGNOSTIC_ROUNDS,
    MASK_ANALYSIS_ROUND,
    TREATMENT_ROUNDS,
    VOICE_DIALOGUE_ROUND,
)


class LawKind(str, Enum):
    """Which part of the workflow evaluates a law.

    Kinds:
        ROUND_CONTENT: QA validator, over one round's analysis
        ROUND_ORDERING: Progression validator, before the AI call
        GUIDANCE: Descriptive only, included in analysis prompts
    """

    ROUND_CONTENT = "round_content"
    ROUND_ORDERING = "round_ordering"
    GUIDANCE = "guidance"


class RuleShape(str, Enum):
    """Generic check a law is evaluated with."""

    REQUIRED_FIELDS = "required_fields"
    LAYER_DISTANCE = "layer_distance"
    DISJOINT_IDENTIFIERS = "disjoint_identifiers"
    PREREQUISITES_PRESENT = "prerequisites_present"
    PREREQUISITES_RESOLVED = "prerequisites_resolved"


class FindingSeverity(str, Enum):
    """Whether a content finding fails QA or only informs it."""

    VIOLATION = "violation"
    WARNING = "warning"


CONTENT_SHAPES: frozenset[RuleShape] = frozenset(
    {
        RuleShape.REQUIRED_FIELDS,
        RuleShape.LAYER_DISTANCE,
        RuleShape.DISJOINT_IDENTIFIERS,
    }
)

ORDERING_SHAPES: frozenset[RuleShape] = frozenset(
    {
        RuleShape.PREREQUISITES_PRESENT,
        RuleShape.PREREQUISITES_RESOLVED,
    }
)


@dataclass(frozen=True)
class Law:
    """A named, parameterized rule.

    Attributes:
        id: Stable snake_case identifier.
        name: English display name (localized names live in the phrasebook).
        description: English description.
        kind: Which validator evaluates the law.
        shape: Generic check used for enforceable laws, None for guidance.
        severity: How content findings are recorded.
        applies_to_rounds: Round numbers the law is evaluated for,
            None meaning every round.
        params: Shape-specific parameters (read-only).
    """

    id: str
    name: str
    description: str
    kind: LawKind
    shape: RuleShape | None = None
    severity: FindingSeverity = FindingSeverity.VIOLATION
    applies_to_rounds: frozenset[int] | None = None
    params: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        """Validate that kind and shape agree."""
        if self.kind == LawKind.GUIDANCE:
            if self.shape is not None:
                raise ValueError(f"guidance law {self.id} cannot declare a rule shape")
        elif self.kind == LawKind.ROUND_CONTENT:
            if self.shape not in CONTENT_SHAPES:
                raise ValueError(
                    f"content law {self.id} needs a content shape, got {self.shape}"
                )
        elif self.shape not in ORDERING_SHAPES:
            raise ValueError(
                f"ordering law {self.id} needs an ordering shape, got {self.shape}"
            )
        if not isinstance(self.params, MappingProxyType):
            object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @property
    def is_enforced(self) -> bool:
        """True if a validator evaluates this law."""
        return self.kind != LawKind.GUIDANCE

    def applies_to(self, round_number: int) -> bool:
        """Check whether the law is evaluated for a round."""
        return self.applies_to_rounds is None or round_number in self.applies_to_rounds


def _params(**values: Any) -> Mapping[str, Any]:
    return MappingProxyType(values)


LAW_REGISTRY: tuple[Law, ...] = (
    Law(
        id="controlled_flexibility",
        name="Controlled Flexibility Law",
        description=(
            "Allows controlled inclusion of secondary graphological signs "
            "beyond core indicators"
        ),
        kind=LawKind.GUIDANCE,
    ),
    Law(
        id="bi_directional_time",
        name="Bi-Directional Time Law",
        description="Establishes influence between early and later findings",
        kind=LawKind.GUIDANCE,
        params=_params(max_layer_difference=1),
    ),
    Law(
        id="one_layer_influence",
        name="One-Layer Influence Constraint",
        description="Insights may retroactively affect only one earlier layer",
        kind=LawKind.ROUND_CONTENT,
        shape=RuleShape.LAYER_DISTANCE,
        params=_params(
            collection="retroactive_influences",
            max_layer_difference=1,
            exception_tags=frozenset(
                {"consistentMarker", "alignedVoice", "crossValidation"}
            ),
            message_key="one_layer_violation",
        ),
    ),
    Law(
        id="layer_synchronization",
        name="Layer Synchronization Law",
        description="Deep interpretation must echo from visible layer",
        kind=LawKind.GUIDANCE,
    ),
    Law(
        id="dynamic_identity_anchor",
        name="Dynamic Identity Anchor",
        description="Client's central identity updated each round",
        kind=LawKind.GUIDANCE,
    ),
    Law(
        id="voice_not_mask",
        name="Voice ≠ Mask Principle",
        description="Voice = Internal contradiction, Mask = Defense against external",
        kind=LawKind.ROUND_CONTENT,
        shape=RuleShape.DISJOINT_IDENTIFIERS,
        applies_to_rounds=frozenset({VOICE_DIALOGUE_ROUND, MASK_ANALYSIS_ROUND}),
        params=_params(
            left="voices",
            right="masks",
            message_key="voice_mask_violation",
        ),
    ),
    Law(
        id="sign_flexibility",
        name="Sign Flexibility Principle",
        description="Permits inclusion of signs if emotionally/narratively consistent",
        kind=LawKind.ROUND_CONTENT,
        shape=RuleShape.REQUIRED_FIELDS,
        severity=FindingSeverity.WARNING,
        params=_params(
            collection="graphological_signs",
            fields=("justification", "therapeutic_relevance"),
            message_key="missing_justification",
        ),
    ),
    Law(
        id="sync_before_treatment",
        name="Sync Products Before Treatment Law",
        description="All diagnostic products must be completed before rounds 7-10",
        kind=LawKind.ROUND_ORDERING,
        shape=RuleShape.PREREQUISITES_RESOLVED,
        applies_to_rounds=frozenset(TREATMENT_ROUNDS),
        params=_params(prerequisite_rounds=DIAGNOSTIC_ROUNDS),
    ),
    Law(
        id="secured_voice_dialogue",
        name="Secured Voice Dialogue Law",
        description=(
            "Voice valid only if rooted in mask, trauma, or therapeutic contract"
        ),
        kind=LawKind.GUIDANCE,
    ),
    Law(
        id="inter_round_pause",
        name="Inter-Round Pause Law",
        description="No automatic transition between rounds",
        kind=LawKind.ROUND_ORDERING,
        shape=RuleShape.PREREQUISITES_PRESENT,
    ),
    Law(
        id="round_control",
        name="Round Control Table",
        description="Evaluate conflicts, consistency, emotional load, and validity",
        kind=LawKind.GUIDANCE,
    ),
)

LAWS_BY_ID: Mapping[str, Law] = MappingProxyType({law.id: law for law in LAW_REGISTRY})


def get_law(law_id: str) -> Law:
    """Look up a law by id.

    Raises:
        KeyError: If no law has that id.
    """
    try:
        return LAWS_BY_ID[law_id]
    except KeyError:
        raise KeyError(f"unknown law: {law_id}") from None


def laws_of_kind(kind: LawKind, laws: tuple[Law, ...] = LAW_REGISTRY) -> tuple[Law, ...]:
    """Laws of one kind, in registry order."""
    return tuple(law for law in laws if law.kind == kind)
