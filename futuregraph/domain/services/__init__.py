"""Domain services for FutureGraph.

Pure functions over the session aggregate: round progression, law-based
QA validation, the therapist approval gate and report compilation.
"""

from futuregraph.domain.services.approval_gate import apply_feedback, feedback_message
from futuregraph.domain.services.law_validator import validate_analysis
from futuregraph.domain.services.progression_validator import (
    validate_round_progression,
)
from futuregraph.domain.services.report_compiler import compile_report

__all__: list[str] = [
    "apply_feedback",
    "compile_report",
    "feedback_message",
    "validate_analysis",
    "validate_round_progression",
]
