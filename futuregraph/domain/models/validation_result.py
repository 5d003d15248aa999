"""QA validation verdict for one round's analysis.

Produced fresh on every QA run and never partially updated. Violations
and warnings are data handed to the therapist; they are not errors.

Usage:
    result = ValidationResult.from_findings(
        violations=["One-Layer Influence violated: Round 5 -> Round 2"],
        warnings=[],
    )
    assert result.passed is False
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationResult:
    """Result of running every applicable law over one analysis.

    Attributes:
        passed: False if at least one violation was recorded.
        violations: Ordered hard violations.
        warnings: Ordered warnings. Warnings never affect `passed`.
    """

    passed: bool
    violations: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate verdict consistency."""
        if self.passed and self.violations:
            raise ValueError("a passing ValidationResult cannot carry violations")
        if not self.passed and not self.violations:
            raise ValueError("a failing ValidationResult must carry violations")

    @classmethod
    def from_findings(
        cls,
        violations: Iterable[str],
        warnings: Iterable[str],
    ) -> ValidationResult:
        """Build a verdict whose pass flag is derived from the violations."""
        violation_tuple = tuple(violations)
        return cls(
            passed=not violation_tuple,
            violations=violation_tuple,
            warnings=tuple(warnings),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses and persistence."""
        return {
            "passed": self.passed,
            "violations": list(self.violations),
            "warnings": list(self.warnings),
        }
