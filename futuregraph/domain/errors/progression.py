"""Round progression errors.

Raised by the progression validator when a round is requested out of
order. These are always caller errors: the request is rejected before the
AI gateway is invoked, so no state has changed and nothing is retried.
"""

from __future__ import annotations

from futuregraph.domain.exceptions import FuturegraphError


class ProgressionError(FuturegraphError):
    """Raised when a round may not be processed yet.

    Recoverable by the caller: process (or reprocess) the named
    prerequisite round first.

    Attributes:
        round_number: The round that was requested.
        law_id: Identifier of the ordering law that blocked the request.
        blocking_round: The prerequisite round that is missing or unresolved.
        reason: Short machine-readable reason ("missing", "qa_failed",
            "requires_reprocessing").
    """

    def __init__(
        self,
        round_number: int,
        law_id: str,
        blocking_round: int,
        reason: str,
        message: str | None = None,
    ) -> None:
        """Initialize with the blocked request and its blocking prerequisite.

        Args:
            round_number: The round that was requested.
            law_id: Identifier of the ordering law that blocked the request.
            blocking_round: The prerequisite round that blocks progression.
            reason: Machine-readable reason for the block.
            message: Optional custom error message.
        """
        self.round_number = round_number
        self.law_id = law_id
        self.blocking_round = blocking_round
        self.reason = reason
        super().__init__(
            message
            or (
                f"Round {round_number} cannot be processed: round {blocking_round} "
                f"is {reason.replace('_', ' ')} ({law_id})"
            )
        )
