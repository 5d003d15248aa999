"""AI analysis gateway errors.

All gateway failures are transient from the engine's point of view. The
workflow service never retries them itself; it surfaces them so the caller
can retry, back off, or abort. None of them leaves a partial round behind.
"""

from __future__ import annotations

from futuregraph.domain.exceptions import FuturegraphError


class GatewayError(FuturegraphError):
    """Base error for AI analysis gateway failures.

    Attributes:
        round_number: The round being analyzed when the gateway failed.
    """

    def __init__(self, round_number: int, message: str | None = None) -> None:
        """Initialize with the round being analyzed.

        Args:
            round_number: The round being analyzed.
            message: Optional custom error message.
        """
        self.round_number = round_number
        super().__init__(
            message or f"AI analysis gateway failed for round {round_number}"
        )


class GatewayTimeoutError(GatewayError):
    """Raised when the gateway call exceeds its time budget.

    Attributes:
        timeout_seconds: The budget that was exceeded.
    """

    def __init__(
        self,
        round_number: int,
        timeout_seconds: float,
        message: str | None = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(
            round_number,
            message
            or f"AI analysis for round {round_number} timed out after {timeout_seconds}s",
        )


class GatewayRateLimitedError(GatewayError):
    """Raised when the AI provider rejects the call with a rate limit.

    Attributes:
        retry_after_seconds: Provider's suggested wait, when it sent one.
    """

    def __init__(
        self,
        round_number: int,
        retry_after_seconds: int | None = None,
        message: str | None = None,
    ) -> None:
        self.retry_after_seconds = retry_after_seconds
        super().__init__(
            round_number,
            message or f"AI provider rate limited the analysis of round {round_number}",
        )


class GatewayUnreachableError(GatewayError):
    """Raised when the AI provider cannot be reached or fails server-side."""


class MalformedGatewayOutputError(GatewayError):
    """Raised when the provider answers with content that is not JSON.

    The workflow service converts this into AnalysisParseError.

    Attributes:
        raw_content: The offending content, truncated for logging.
    """

    def __init__(
        self,
        round_number: int,
        raw_content: str = "",
        message: str | None = None,
    ) -> None:
        self.raw_content = raw_content[:500]
        super().__init__(
            round_number,
            message or f"AI provider returned non-JSON output for round {round_number}",
        )
