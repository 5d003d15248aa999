"""Round progression validator.

Decides whether round n may be processed now, given the session's round
history. Runs before the AI gateway is called, so a rejected request has
no side effects.

Ordering laws are evaluated in registry order by one dispatcher keyed on
the law's rule shape:
- prerequisites_present: every listed prerequisite has a stored round.
  Without an explicit list, the prerequisites of n are rounds 1..n-1.
- prerequisites_resolved: every listed prerequisite is stored, passed QA
  and is not flagged for reprocessing.

An existing entry for n itself never counts against n, so a round can be
reprocessed any number of times.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from futuregraph.domain.errors.progression import ProgressionError
from futuregraph.domain.models.law_registry import (
    LAW_REGISTRY,
    Law,
    LawKind,
    RuleShape,
)
from futuregraph.domain.models.round_definitions import (
    FIRST_ROUND,
    get_round_definition,
)
from futuregraph.domain.models.session import Session

REASON_MISSING = "missing"
REASON_QA_FAILED = "qa_failed"
REASON_REQUIRES_REPROCESSING = "requires_reprocessing"


def _prerequisites(law: Law, round_number: int) -> tuple[int, ...]:
    declared = law.params.get("prerequisite_rounds")
    if declared is None:
        return tuple(range(FIRST_ROUND, round_number))
    return tuple(r for r in declared if r != round_number)


def _check_present(session: Session, law: Law, round_number: int) -> None:
    for prerequisite in _prerequisites(law, round_number):
        if not session.has_round(prerequisite):
            raise ProgressionError(
                round_number=round_number,
                law_id=law.id,
                blocking_round=prerequisite,
                reason=REASON_MISSING,
            )


def _check_resolved(session: Session, law: Law, round_number: int) -> None:
    for prerequisite in _prerequisites(law, round_number):
        stored = session.get_round(prerequisite)
        if stored is not None and stored.is_resolved:
            continue
        if stored is None:
            reason = REASON_MISSING
        elif not stored.qa_validation.passed:
            reason = REASON_QA_FAILED
        else:
            reason = REASON_REQUIRES_REPROCESSING
        raise ProgressionError(
            round_number=round_number,
            law_id=law.id,
            blocking_round=prerequisite,
            reason=reason,
        )


_ORDERING_CHECKS: dict[RuleShape, Callable[[Session, Law, int], None]] = {
    RuleShape.PREREQUISITES_PRESENT: _check_present,
    RuleShape.PREREQUISITES_RESOLVED: _check_resolved,
}


def validate_round_progression(
    session: Session,
    round_number: int,
    laws: Iterable[Law] = LAW_REGISTRY,
) -> None:
    """Check every ordering law for a round request.

    Args:
        session: Current session state.
        round_number: The round the caller wants to process.
        laws: Law catalog to evaluate (defaults to the registry).

    Raises:
        ValueError: If round_number is not one of the ten rounds.
        ProgressionError: On the first ordering law that blocks the
            request, naming the blocking prerequisite round.
    """
    get_round_definition(round_number)
    for law in laws:
        if law.kind != LawKind.ROUND_ORDERING or not law.applies_to(round_number):
            continue
        check = _ORDERING_CHECKS.get(law.shape)  # type: ignore[arg-type]
        if check is None:
            raise ValueError(f"no ordering check for rule shape {law.shape}")
        check(session, law, round_number)
