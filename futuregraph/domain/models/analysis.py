"""Structured analysis payload produced by the AI gateway for one round.

The gateway hands back loosely-typed JSON. This module is the single
place where that JSON is checked against the expected shape. A shape
mismatch raises AnalysisParseError; a well-formed payload that breaks a
law is left for the QA validator to report.

Keys are accepted in the provider's camelCase ("graphologicalSigns") or
in snake_case. Unknown keys are kept as opaque extras so nothing the
provider returned is lost from the stored round.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from futuregraph.domain.errors.analysis import AnalysisParseError
from futuregraph.domain.models.round_definitions import FIRST_ROUND, TOTAL_ROUNDS


class _PayloadModel(BaseModel):
    """Shared configuration for payload models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Dump with the provider's camelCase keys, extras included."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class GraphologicalSign(_PayloadModel):
    """One graphological sign and its reading.

    Attributes:
        sign: The observed feature of the handwriting.
        interpretation: What the sign is read to mean.
        justification: Why the sign is included.
        therapeutic_relevance: Why the sign matters for treatment.
    """

    sign: str | None = None
    interpretation: str | None = None
    justification: str | None = None
    therapeutic_relevance: str | None = None


class RetroactiveInfluence(_PayloadModel):
    """A claim that this round reinterprets an earlier round.

    Attributes:
        target_round: The earlier round being reinterpreted.
        description: Free-text account of the reinterpretation.
        validation: Exception tags justifying a reach deeper than one layer.
    """

    target_round: int = Field(ge=FIRST_ROUND, le=TOTAL_ROUNDS)
    description: str | None = None
    validation: tuple[str, ...] = ()

    @field_validator("validation", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> Any:
        """Accept a single tag string as well as a list of tags."""
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value


class _IdentifiedItem(_PayloadModel):
    """A voice or mask, compared across classifications by its id."""

    id: str = Field(min_length=1)
    name: str | None = None
    description: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        # Providers occasionally emit numeric ids
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class Voice(_IdentifiedItem):
    """An internal contradiction surfaced in rounds 7-9."""


class Mask(_IdentifiedItem):
    """An external defense or persona surfaced in rounds 8-9."""


class AnalysisPayload(_PayloadModel):
    """Schema-validated analysis for one round.

    Every section is optional because each round only fills the sections
    relevant to its focus (voices in round 7, masks in round 8, ...).

    Attributes:
        round_number: Round the provider believes it analyzed, if stated.
        graphological_signs: Signs and their readings.
        emotional_indicators: Opaque emotional indicators, kept verbatim.
        identity_anchors: Statements of the client's central identity.
        therapeutic_insights: Insights, or recommendations in round 10.
        retroactive_influences: Reinterpretations of earlier rounds.
        voices: Internal voices (rounds 7-9).
        masks: Defense masks (rounds 8-9).
    """

    round_number: int | None = None
    graphological_signs: tuple[GraphologicalSign, ...] = ()
    emotional_indicators: tuple[Any, ...] = ()
    identity_anchors: tuple[str, ...] = ()
    therapeutic_insights: tuple[str, ...] = ()
    retroactive_influences: tuple[RetroactiveInfluence, ...] = ()
    voices: tuple[Voice, ...] = ()
    masks: tuple[Mask, ...] = ()

    @field_validator(
        "graphological_signs",
        "emotional_indicators",
        "identity_anchors",
        "therapeutic_insights",
        "retroactive_influences",
        "voices",
        "masks",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("emotional_indicators", mode="before")
    @classmethod
    def _wrap_single_indicator(cls, value: Any) -> Any:
        # Some providers return one indicator object instead of a list
        if isinstance(value, (Mapping, str)):
            return (value,)
        return value


def _describe_error(error: Mapping[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())) or "payload"
    return f"{location}: {error.get('msg', 'invalid value')}"


def parse_analysis(raw: object, round_number: int) -> AnalysisPayload:
    """Parse raw gateway output into an AnalysisPayload.

    Args:
        raw: Decoded JSON returned by the AI gateway.
        round_number: The round that was requested.

    Returns:
        The validated, immutable payload.

    Raises:
        AnalysisParseError: If the content does not have the expected shape,
            or states a different round number than the one requested.
    """
    if not isinstance(raw, Mapping):
        raise AnalysisParseError(
            round_number, [f"payload: expected an object, got {type(raw).__name__}"]
        )
    try:
        payload = AnalysisPayload.model_validate(dict(raw))
    except ValidationError as exc:
        raise AnalysisParseError(
            round_number, [_describe_error(error) for error in exc.errors()]
        ) from exc

    if payload.round_number is not None and payload.round_number != round_number:
        raise AnalysisParseError(
            round_number,
            [
                f"roundNumber: analysis states round {payload.round_number}, "
                f"expected {round_number}"
            ],
        )
    return payload
