"""Approval gate: therapist accept/reject decisions per round.

The only place a stored round changes outside of reprocessing. A
rejection flags the round for reprocessing without rolling back
current_round; the progression validator then refuses treatment rounds
until the flagged diagnostic round is reprocessed.
"""

from __future__ import annotations

from datetime import datetime

from futuregraph.domain.errors.session import RoundNotFoundError
from futuregraph.domain.models.language import SupportedLanguage
from futuregraph.domain.models.phrasebook import phrase
from futuregraph.domain.models.session import Session


def apply_feedback(
    session: Session,
    round_number: int,
    feedback: str | None,
    approved: bool,
    decided_at: datetime,
) -> Session:
    """Record a therapist decision on a stored round.

    Args:
        session: Current session state.
        round_number: Round the decision is about.
        feedback: Free-text therapist feedback.
        approved: True to accept the round, False to request reprocessing.
        decided_at: Decision time.

    Returns:
        A new Session with the decision applied.

    Raises:
        RoundNotFoundError: If the session has no such round.
    """
    stored = session.get_round(round_number)
    if stored is None:
        raise RoundNotFoundError(session.session_id, round_number)
    return session.with_updated_round(
        stored.with_decision(feedback=feedback, approved=approved, decided_at=decided_at)
    )


def feedback_message(approved: bool, language: SupportedLanguage) -> str:
    """Confirmation text returned to the caller after a decision."""
    return phrase("feedback_approved" if approved else "feedback_rejected", language)
