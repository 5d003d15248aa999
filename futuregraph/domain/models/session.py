"""Session aggregate: one diagnostic run and the rounds it owns.

The aggregate is immutable. Every change produces a new Session through
one of the `with_*` methods, and persistence compares `version` on save,
so a half-updated session can never be observed or stored.

Invariants (checked in __post_init__):
- Round numbers are unique within a session.
- No stored round number exceeds current_round.
- current_round stays within 0..10.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any

from futuregraph.domain.models.analysis import AnalysisPayload
from futuregraph.domain.models.language import DEFAULT_LANGUAGE, SupportedLanguage
from futuregraph.domain.models.round_definitions import (
    TOTAL_ROUNDS,
    is_valid_round_number,
)
from futuregraph.domain.models.validation_result import ValidationResult


class SessionStatus(str, Enum):
    """Lifecycle status of a session.

    States:
        ACTIVE: Rounds are being processed and reviewed
        COMPLETED: The final report has been generated
        FAILED: The run was abandoned
    """

    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class Round:
    """Outcome of one diagnostic stage.

    Attributes:
        round_number: 1..10, fixed meaning per number.
        analysis: Parsed AI output for the round.
        qa_validation: Law validator verdict over `analysis`.
        timestamp: When the analysis was (re)produced.
        additional_context: Extra context the therapist supplied.
        therapist_approved: Latest therapist decision, False until given.
        therapist_feedback: Free-text therapist feedback.
        requires_reprocessing: Set when the therapist rejects the round,
            cleared only when the round is reprocessed.
        approval_timestamp: When the latest decision was recorded.
    """

    round_number: int
    analysis: AnalysisPayload
    qa_validation: ValidationResult
    timestamp: datetime
    additional_context: Mapping[str, Any] | None = None
    therapist_approved: bool = False
    therapist_feedback: str | None = None
    requires_reprocessing: bool = False
    approval_timestamp: datetime | None = None

    def __post_init__(self) -> None:
        """Validate round data."""
        if not is_valid_round_number(self.round_number):
            raise ValueError(
                f"round_number must be between 1 and {TOTAL_ROUNDS}, "
                f"got {self.round_number}"
            )

    @property
    def is_resolved(self) -> bool:
        """True if the round passed QA and is not awaiting reprocessing."""
        return self.qa_validation.passed and not self.requires_reprocessing

    def with_decision(
        self,
        feedback: str | None,
        approved: bool,
        decided_at: datetime,
    ) -> Round:
        """Record a therapist decision.

        A rejection flags the round for reprocessing. An approval leaves
        the flag as it is; only storing a fresh analysis clears it.
        """
        return replace(
            self,
            therapist_feedback=feedback,
            therapist_approved=approved,
            approval_timestamp=decided_at,
            requires_reprocessing=self.requires_reprocessing or not approved,
        )


@dataclass(frozen=True)
class Session:
    """One diagnostic run.

    Attributes:
        session_id: Opaque unique identifier.
        user_id: Therapist who owns the session.
        client_id: Client whose handwriting is analyzed.
        image_ref: Reference to (or base64 of) the handwriting image.
        start_time: When the session was created.
        client_context: Structured metadata about the client.
        language: Output language for prompts, QA messages and the report.
        status: Lifecycle status.
        current_round: Highest round processed at least once (0..10).
        rounds: Rounds in processing order; reprocessing replaces in place.
        version: Optimistic concurrency token, bumped by every save.
        completed_at: When the final report was first generated.
    """

    session_id: str
    user_id: str
    client_id: str
    image_ref: str
    start_time: datetime
    client_context: Mapping[str, Any] = field(default_factory=dict)
    language: SupportedLanguage = DEFAULT_LANGUAGE
    status: SessionStatus = SessionStatus.ACTIVE
    current_round: int = 0
    rounds: tuple[Round, ...] = ()
    version: int = 0
    completed_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate aggregate invariants."""
        if not 0 <= self.current_round <= TOTAL_ROUNDS:
            raise ValueError(
                f"current_round must be between 0 and {TOTAL_ROUNDS}, "
                f"got {self.current_round}"
            )
        numbers = [r.round_number for r in self.rounds]
        if len(numbers) != len(set(numbers)):
            raise ValueError(f"duplicate round numbers in session: {numbers}")
        if numbers and max(numbers) > self.current_round:
            raise ValueError(
                f"round {max(numbers)} stored beyond current_round {self.current_round}"
            )
        if self.version < 0:
            raise ValueError(f"version must be non-negative, got {self.version}")

    @property
    def round_numbers(self) -> frozenset[int]:
        """Round numbers present in the session."""
        return frozenset(r.round_number for r in self.rounds)

    @property
    def approved_round_count(self) -> int:
        """Number of rounds whose latest therapist decision is an approval."""
        return sum(1 for r in self.rounds if r.therapist_approved)

    @property
    def is_complete(self) -> bool:
        """True once all ten rounds are approved."""
        return self.approved_round_count == TOTAL_ROUNDS

    def get_round(self, round_number: int) -> Round | None:
        """Get the stored round with the given number, if any."""
        for existing in self.rounds:
            if existing.round_number == round_number:
                return existing
        return None

    def has_round(self, round_number: int) -> bool:
        """Check whether a round has been processed at least once."""
        return self.get_round(round_number) is not None

    def with_round(self, new_round: Round) -> Session:
        """Store a freshly processed round.

        A first-time round is appended. A reprocessed round replaces the
        previous entry at the same position, which resets the therapist
        decision and the reprocessing flag. current_round never decreases.
        """
        if self.has_round(new_round.round_number):
            rounds = tuple(
                new_round if r.round_number == new_round.round_number else r
                for r in self.rounds
            )
        else:
            rounds = self.rounds + (new_round,)
        return replace(
            self,
            rounds=rounds,
            current_round=max(self.current_round, new_round.round_number),
        )

    def with_updated_round(self, updated: Round) -> Session:
        """Replace an existing round (e.g. after a therapist decision).

        Raises:
            KeyError: If the round does not exist in this session.
        """
        if not self.has_round(updated.round_number):
            raise KeyError(f"round {updated.round_number} not in session")
        return replace(
            self,
            rounds=tuple(
                updated if r.round_number == updated.round_number else r
                for r in self.rounds
            ),
        )

    def with_language(self, language: SupportedLanguage) -> Session:
        """Switch the output language for subsequent work."""
        if language == self.language:
            return self
        return replace(self, language=language)

    def with_version(self, version: int) -> Session:
        """Return a copy carrying a new concurrency token."""
        return replace(self, version=version)

    def mark_completed(self, completed_at: datetime) -> Session:
        """Mark the session completed; the first completion time is kept."""
        if self.status == SessionStatus.COMPLETED:
            return self
        return replace(
            self,
            status=SessionStatus.COMPLETED,
            completed_at=completed_at,
        )
