"""Domain models for FutureGraph.

Contains the session aggregate, the analysis payload schema, the law
registry and the report value objects. These models are immutable and
contain no infrastructure dependencies.
"""

from futuregraph.domain.models.analysis import (
    AnalysisPayload,
    GraphologicalSign,
    Mask,
    RetroactiveInfluence,
    Voice,
    parse_analysis,
)
from futuregraph.domain.models.language import (
    DEFAULT_LANGUAGE,
    SupportedLanguage,
    normalize_language,
)
from futuregraph.domain.models.law_registry import (
    LAW_REGISTRY,
    LAWS_BY_ID,
    FindingSeverity,
    Law,
    LawKind,
    RuleShape,
    get_law,
    laws_of_kind,
)
from futuregraph.domain.models.report import (
    FuturegraphReport,
    IdentityEvolutionEntry,
    RoundFindings,
    TherapeuticContract,
    VoiceMaskSynthesis,
)
from futuregraph.domain.models.round_definitions import (
    DIAGNOSTIC_ROUNDS,
    ROUND_DEFINITIONS,
    TOTAL_ROUNDS,
    TREATMENT_ROUNDS,
    RoundDefinition,
    get_round_definition,
    is_valid_round_number,
)
from futuregraph.domain.models.session import Round, Session, SessionStatus
from futuregraph.domain.models.validation_result import ValidationResult

__all__: list[str] = [
    "DEFAULT_LANGUAGE",
    "DIAGNOSTIC_ROUNDS",
    "LAW_REGISTRY",
    "LAWS_BY_ID",
    "ROUND_DEFINITIONS",
    "TOTAL_ROUNDS",
    "TREATMENT_ROUNDS",
    "AnalysisPayload",
    "FindingSeverity",
    "FuturegraphReport",
    "GraphologicalSign",
    "IdentityEvolutionEntry",
    "Law",
    "LawKind",
    "Mask",
    "RetroactiveInfluence",
    "Round",
    "RoundDefinition",
    "RoundFindings",
    "RuleShape",
    "Session",
    "SessionStatus",
    "SupportedLanguage",
    "TherapeuticContract",
    "ValidationResult",
    "Voice",
    "VoiceMaskSynthesis",
    "get_law",
    "get_round_definition",
    "is_valid_round_number",
    "laws_of_kind",
    "normalize_language",
    "parse_analysis",
]
