"""Session and round lookup errors, and the report completeness gate."""

from __future__ import annotations

from futuregraph.domain.exceptions import FuturegraphError


class SessionNotFoundError(FuturegraphError):
    """Raised when a session identifier does not resolve.

    Attributes:
        session_id: The identifier that was not found.
    """

    def __init__(self, session_id: str, message: str | None = None) -> None:
        self.session_id = session_id
        super().__init__(message or f"Session not found: {session_id}")


class RoundNotFoundError(FuturegraphError):
    """Raised when feedback targets a round that was never processed.

    Attributes:
        session_id: The session that was searched.
        round_number: The round that does not exist in the session.
    """

    def __init__(
        self,
        session_id: str,
        round_number: int,
        message: str | None = None,
    ) -> None:
        self.session_id = session_id
        self.round_number = round_number
        super().__init__(
            message or f"Round {round_number} not found in session {session_id}"
        )


class IncompleteSessionError(FuturegraphError):
    """Raised when a report is requested before every round is approved.

    Recoverable by completing and approving the remaining rounds.

    Attributes:
        completed_rounds: Number of therapist-approved rounds.
        total_rounds: Number of rounds required.
    """

    def __init__(
        self,
        completed_rounds: int,
        total_rounds: int = 10,
        message: str | None = None,
    ) -> None:
        self.completed_rounds = completed_rounds
        self.total_rounds = total_rounds
        super().__init__(
            message
            or (
                "All rounds must be approved before generating the report. "
                f"Completed: {completed_rounds}/{total_rounds}"
            )
        )
