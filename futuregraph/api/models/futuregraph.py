"""FutureGraph API request/response models.

Pydantic models for the /v1/futuregraph endpoints. Routes convert
application DTOs and domain values into these models.

Developer Golden Rules:
1. VALIDATE EARLY - Pydantic handles request schema validation
2. FAIL LOUD - Domain errors become RFC 7807 problem details
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, Field, PlainSerializer

from futuregraph.domain.models.language import SupportedLanguage

# ISO 8601 with Z suffix
DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z") if v else None, return_type=str
    ),
]


# =============================================================================
# Requests
# =============================================================================


class StartSessionRequest(BaseModel):
    """Request to open a new analysis session."""

    user_id: str = Field(..., min_length=1, description="Owning therapist")
    client_id: str = Field(..., min_length=1, description="Client being analyzed")
    handwriting_image: str = Field(
        ...,
        min_length=1,
        description="Base64 image data or an image URL",
    )
    client_context: dict[str, Any] = Field(default_factory=dict)
    language: SupportedLanguage | None = Field(
        default=None, description="Output language (en, he); defaults to en"
    )


class ProcessRoundRequest(BaseModel):
    """Request to process (or reprocess) one round."""

    additional_context: dict[str, Any] | None = None
    language: SupportedLanguage | None = None


class SubmitFeedbackRequest(BaseModel):
    """Therapist decision on a processed round."""

    approved: bool
    feedback: str | None = Field(default=None, max_length=10_000)
    language: SupportedLanguage | None = None


# =============================================================================
# Responses
# =============================================================================


class StartSessionResponse(BaseModel):
    session_id: str
    status: str
    language: str
    start_time: DateTimeWithZ


class ValidationModel(BaseModel):
    """QA verdict over one analysis."""

    passed: bool
    violations: list[str]
    warnings: list[str]


class RoundProcessingResponse(BaseModel):
    session_id: str
    round_number: int
    analysis: dict[str, Any]
    validation: ValidationModel
    requires_approval: bool
    reprocessed: bool


class FeedbackResponse(BaseModel):
    success: bool
    message: str
    round_number: int
    requires_reprocessing: bool


class RoundStatusModel(BaseModel):
    number: int
    completed: bool
    requires_reprocessing: bool
    qa_passed: bool
    timestamp: DateTimeWithZ


class SessionStatusResponse(BaseModel):
    session_id: str
    status: str
    current_round: int
    completed_rounds: int
    total_rounds: int
    is_complete: bool
    language: str
    rounds: list[RoundStatusModel]


class SessionSummaryModel(BaseModel):
    session_id: str
    client_id: str
    status: str
    current_round: int
    completed_rounds: int
    language: str
    start_time: DateTimeWithZ
    completed_at: DateTimeWithZ | None = None


class ClientSessionsResponse(BaseModel):
    client_id: str
    sessions: list[SessionSummaryModel]


class LawModel(BaseModel):
    id: str
    name: str
    description: str
    kind: str
    enforced: bool


class LawsResponse(BaseModel):
    language: str
    laws: list[LawModel]


class TherapeuticContractModel(BaseModel):
    goals: list[str]
    approach: str
    timeline: str
    focus_areas: list[str]


class IdentityEvolutionModel(BaseModel):
    round: int
    layer: str
    anchors: list[str]


class VoiceMaskAnalysisModel(BaseModel):
    internal_voices: list[dict[str, Any]]
    defense_mechanisms: list[dict[str, Any]]
    integration: str


class ReportResponse(BaseModel):
    """Final report over ten approved rounds."""

    session_id: str
    client_id: str
    generated_at: DateTimeWithZ
    language: str
    executive_summary: str
    detailed_findings: dict[str, dict[str, Any]]
    treatment_recommendations: list[str]
    therapeutic_contract: TherapeuticContractModel
    identity_evolution: list[IdentityEvolutionModel]
    voice_mask_analysis: VoiceMaskAnalysisModel


class ProblemDetail(BaseModel):
    """RFC 7807 problem details body."""

    type: str
    title: str
    status: int
    detail: str
    instance: str
