"""QA / law validator.

Scores one round's parsed analysis against the content laws of the
registry and returns a ValidationResult. Pure: no I/O, no clock, no
mutation of its inputs. The same payload and round number always yield
an identical result.

Content laws are dispatched on their rule shape:
- layer_distance: each entry of a collection reaching back more than
  `max_layer_difference` rounds must carry one of `exception_tags`.
- required_fields: each entry of a collection must have every listed
  field present and non-blank.
- disjoint_identifiers: no id may appear in both the `left` and `right`
  collections.

Findings are emitted in registry order, then in entry order. Each law
records at its declared severity; only violations fail the verdict.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from futuregraph.domain.models.analysis import AnalysisPayload
from futuregraph.domain.models.language import DEFAULT_LANGUAGE, SupportedLanguage
from futuregraph.domain.models.law_registry import (
    LAW_REGISTRY,
    FindingSeverity,
    Law,
    LawKind,
    RuleShape,
)
from futuregraph.domain.models.phrasebook import phrase
from futuregraph.domain.models.validation_result import ValidationResult

ContentCheck = Callable[[AnalysisPayload, Law, int, SupportedLanguage], list[str]]


def _collection(analysis: AnalysisPayload, name: str) -> tuple[Any, ...]:
    return tuple(getattr(analysis, name, ()) or ())


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _check_layer_distance(
    analysis: AnalysisPayload,
    law: Law,
    round_number: int,
    language: SupportedLanguage,
) -> list[str]:
    max_difference = law.params.get("max_layer_difference", 1)
    exception_tags = law.params.get("exception_tags", frozenset())
    findings = []
    for influence in _collection(analysis, law.params["collection"]):
        layer_difference = round_number - influence.target_round
        if layer_difference <= max_difference:
            continue
        if any(tag in exception_tags for tag in influence.validation):
            continue
        findings.append(
            phrase(
                law.params["message_key"],
                language,
                source_round=round_number,
                target_round=influence.target_round,
            )
        )
    return findings


def _check_required_fields(
    analysis: AnalysisPayload,
    law: Law,
    round_number: int,
    language: SupportedLanguage,
) -> list[str]:
    fields = law.params["fields"]
    return [
        phrase(law.params["message_key"], language, position=position)
        for position, entry in enumerate(
            _collection(analysis, law.params["collection"]), start=1
        )
        if any(_is_blank(getattr(entry, name, None)) for name in fields)
    ]


def _check_disjoint_identifiers(
    analysis: AnalysisPayload,
    law: Law,
    round_number: int,
    language: SupportedLanguage,
) -> list[str]:
    right_ids = {item.id for item in _collection(analysis, law.params["right"])}
    shared: list[str] = []
    for item in _collection(analysis, law.params["left"]):
        if item.id in right_ids and item.id not in shared:
            shared.append(item.id)
    return [
        phrase(law.params["message_key"], language, identifier=identifier)
        for identifier in shared
    ]


_CONTENT_CHECKS: dict[RuleShape, ContentCheck] = {
    RuleShape.LAYER_DISTANCE: _check_layer_distance,
    RuleShape.REQUIRED_FIELDS: _check_required_fields,
    RuleShape.DISJOINT_IDENTIFIERS: _check_disjoint_identifiers,
}


def validate_analysis(
    analysis: AnalysisPayload,
    round_number: int,
    language: SupportedLanguage = DEFAULT_LANGUAGE,
    laws: Iterable[Law] = LAW_REGISTRY,
) -> ValidationResult:
    """Run every applicable content law over one analysis.

    Args:
        analysis: Parsed analysis for the round.
        round_number: The round the analysis belongs to.
        language: Language for finding messages.
        laws: Law catalog to evaluate (defaults to the registry).

    Returns:
        ValidationResult with violations and warnings in registry order.
    """
    violations: list[str] = []
    warnings: list[str] = []
    for law in laws:
        if law.kind != LawKind.ROUND_CONTENT or not law.applies_to(round_number):
            continue
        check = _CONTENT_CHECKS.get(law.shape)  # type: ignore[arg-type]
        if check is None:
            raise ValueError(f"no content check for rule shape {law.shape}")
        findings = check(analysis, law, round_number, language)
        if law.severity == FindingSeverity.WARNING:
            warnings.extend(findings)
        else:
            violations.extend(findings)
    return ValidationResult.from_findings(violations=violations, warnings=warnings)
