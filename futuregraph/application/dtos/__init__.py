"""Application DTOs for FutureGraph."""

from futuregraph.application.dtos.workflow import (
    FeedbackResult,
    LawDescription,
    RoundProcessingResult,
    RoundStatusView,
    SessionStatusView,
    SessionSummary,
)

__all__: list[str] = [
    "FeedbackResult",
    "LawDescription",
    "RoundProcessingResult",
    "RoundStatusView",
    "SessionStatusView",
    "SessionSummary",
]
