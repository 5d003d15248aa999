"""Analysis payload shape errors.

A payload that cannot be parsed into the expected structure is a different
condition from a payload that violates the laws: law violations are data
returned in a ValidationResult, a shape mismatch is this error.
"""

from __future__ import annotations

from collections.abc import Sequence

from futuregraph.domain.exceptions import FuturegraphError


class AnalysisParseError(FuturegraphError):
    """Raised when AI output does not match the analysis payload schema.

    The round attempt is not stored. The caller must retry round
    processing.

    Attributes:
        round_number: The round whose analysis failed to parse.
        problems: Human-readable description of each structural problem.
    """

    def __init__(
        self,
        round_number: int,
        problems: Sequence[str] = (),
        message: str | None = None,
    ) -> None:
        """Initialize with the round and the structural problems found.

        Args:
            round_number: The round whose analysis failed to parse.
            problems: Description of each structural problem.
            message: Optional custom error message.
        """
        self.round_number = round_number
        self.problems = tuple(problems)
        detail = "; ".join(self.problems) if self.problems else "unparseable content"
        super().__init__(
            message or f"Analysis for round {round_number} is malformed: {detail}"
        )
