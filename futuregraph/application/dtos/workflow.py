"""Workflow DTOs for the application layer.

Returned by FuturegraphWorkflowService and mapped to API Pydantic models
by the routes. The application layer keeps its own DTOs so it stays
independent from the API layer.
"""

from dataclasses import dataclass, field
from datetime import datetime

from futuregraph.domain.models.analysis import AnalysisPayload
from futuregraph.domain.models.round_definitions import TOTAL_ROUNDS
from futuregraph.domain.models.validation_result import ValidationResult


@dataclass(frozen=True)
class RoundProcessingResult:
    """Outcome of processing one round.

    Attributes:
        session_id: Session the round belongs to.
        round_number: The processed round.
        analysis: Parsed analysis, as stored.
        validation: QA verdict over the analysis.
        requires_approval: Always True; every round awaits a therapist decision.
        reprocessed: True if an earlier entry for the round was replaced.
    """

    session_id: str
    round_number: int
    analysis: AnalysisPayload
    validation: ValidationResult
    requires_approval: bool = True
    reprocessed: bool = False


@dataclass(frozen=True)
class FeedbackResult:
    """Acknowledgement of a therapist decision."""

    success: bool
    message: str
    round_number: int
    requires_reprocessing: bool


@dataclass(frozen=True)
class RoundStatusView:
    """Per-round line of a status view.

    Attributes:
        number: Round number.
        completed: True if the latest therapist decision is an approval.
        requires_reprocessing: True if the therapist rejected the round.
        qa_passed: QA verdict of the stored analysis.
        timestamp: When the stored analysis was produced.
    """

    number: int
    completed: bool
    requires_reprocessing: bool
    qa_passed: bool
    timestamp: datetime


@dataclass(frozen=True)
class SessionStatusView:
    """Progress snapshot of a session.

    Attributes:
        session_id: The session.
        status: Lifecycle status value.
        current_round: Highest round processed at least once.
        completed_rounds: Number of approved rounds.
        total_rounds: Always 10.
        is_complete: True once all ten rounds are approved.
        language: Current output language.
        rounds: Per-round lines, in processing order.
    """

    session_id: str
    status: str
    current_round: int
    completed_rounds: int
    is_complete: bool
    language: str
    total_rounds: int = TOTAL_ROUNDS
    rounds: tuple[RoundStatusView, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SessionSummary:
    """Lightweight listing entry for a client's sessions."""

    session_id: str
    client_id: str
    status: str
    current_round: int
    completed_rounds: int
    language: str
    start_time: datetime
    completed_at: datetime | None = None


@dataclass(frozen=True)
class LawDescription:
    """Localized view of one law for display and prompts."""

    id: str
    name: str
    description: str
    kind: str
    enforced: bool
