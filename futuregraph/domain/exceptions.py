"""Base exception classes for the FutureGraph domain layer."""


class FuturegraphError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class.
    This enables consistent error handling across the application
    (the API layer maps subclasses onto problem-detail responses).

    Subclasses live in futuregraph.domain.errors, grouped by concern:
    - progression: ProgressionError
    - analysis: AnalysisParseError
    - gateway: GatewayError and its transient variants
    - session: SessionNotFoundError, RoundNotFoundError, IncompleteSessionError
    - concurrent_modification: ConcurrentModificationError
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
