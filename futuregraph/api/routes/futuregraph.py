"""FutureGraph API routes.

Thin FastAPI layer over FuturegraphWorkflowService. Domain errors are
mapped to RFC 7807 problem details:

    ProgressionError, IncompleteSessionError   -> 409
    ConcurrentModificationError                -> 409
    AnalysisParseError                         -> 422
    SessionNotFoundError, RoundNotFoundError   -> 404
    GatewayTimeoutError                        -> 504
    GatewayRateLimitedError                    -> 429 (Retry-After)
    other GatewayError                         -> 502
    ValueError (round outside 1..10)           -> 400

Authentication and usage metering sit in front of this router.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from futuregraph.api.dependencies.futuregraph import get_workflow_service
from futuregraph.api.models.futuregraph import (
    ClientSessionsResponse,
    FeedbackResponse,
    IdentityEvolutionModel,
    LawModel,
    LawsResponse,
    ProblemDetail,
    ProcessRoundRequest,
    ReportResponse,
    RoundProcessingResponse,
    RoundStatusModel,
    SessionStatusResponse,
    SessionSummaryModel,
    StartSessionRequest,
    StartSessionResponse,
    SubmitFeedbackRequest,
    TherapeuticContractModel,
    ValidationModel,
    VoiceMaskAnalysisModel,
)
from futuregraph.application.services.futuregraph_workflow_service import (
    FuturegraphWorkflowService,
)
from futuregraph.domain.errors import (
    AnalysisParseError,
    ConcurrentModificationError,
    FuturegraphError,
    GatewayError,
    GatewayRateLimitedError,
    GatewayTimeoutError,
    IncompleteSessionError,
    ProgressionError,
    RoundNotFoundError,
    SessionNotFoundError,
)
from futuregraph.domain.models.language import normalize_language
from futuregraph.domain.models.report import FuturegraphReport

router = APIRouter(prefix="/v1/futuregraph", tags=["futuregraph"])

ERROR_TYPE_BASE = "urn:futuregraph:error"

_ERROR_RESPONSES = {
    404: {"model": ProblemDetail, "description": "Session or round not found"},
    409: {"model": ProblemDetail, "description": "Progression or version conflict"},
}


# =============================================================================
# Error Mapping
# =============================================================================


def _problem(
    request: Request,
    status: int,
    slug: str,
    title: str,
    detail: str,
    headers: dict[str, str] | None = None,
    **extensions: object,
) -> HTTPException:
    return HTTPException(
        status_code=status,
        detail={
            "type": f"{ERROR_TYPE_BASE}:{slug}",
            "title": title,
            "status": status,
            "detail": detail,
            "instance": str(request.url),
            **extensions,
        },
        headers=headers,
    )


def _to_http_exception(exc: Exception, request: Request) -> HTTPException:
    """Map a workflow error to an RFC 7807 HTTPException."""
    detail = str(exc)
    if isinstance(exc, ProgressionError):
        return _problem(
            request,
            409,
            "progression",
            "Round Progression Blocked",
            detail,
            law_id=exc.law_id,
            blocking_round=exc.blocking_round,
            reason=exc.reason,
        )
    if isinstance(exc, IncompleteSessionError):
        return _problem(
            request,
            409,
            "incomplete-session",
            "Session Incomplete",
            detail,
            completed_rounds=exc.completed_rounds,
            total_rounds=exc.total_rounds,
        )
    if isinstance(exc, ConcurrentModificationError):
        return _problem(
            request, 409, "concurrent-modification", "Concurrent Modification", detail
        )
    if isinstance(exc, AnalysisParseError):
        return _problem(
            request,
            422,
            "analysis-parse",
            "Malformed Analysis",
            detail,
            problems=list(exc.problems),
        )
    if isinstance(exc, SessionNotFoundError):
        return _problem(request, 404, "session-not-found", "Session Not Found", detail)
    if isinstance(exc, RoundNotFoundError):
        return _problem(request, 404, "round-not-found", "Round Not Found", detail)
    if isinstance(exc, GatewayTimeoutError):
        return _problem(request, 504, "gateway-timeout", "Analysis Timed Out", detail)
    if isinstance(exc, GatewayRateLimitedError):
        headers = None
        if exc.retry_after_seconds is not None:
            headers = {"Retry-After": str(exc.retry_after_seconds)}
        return _problem(
            request,
            429,
            "gateway-rate-limited",
            "Analysis Rate Limited",
            detail,
            headers=headers,
        )
    if isinstance(exc, GatewayError):
        return _problem(request, 502, "gateway", "Analysis Provider Error", detail)
    return _problem(request, 400, "invalid-request", "Invalid Request", detail)


_HANDLED = (FuturegraphError, ValueError)


def _report_response(report: FuturegraphReport) -> ReportResponse:
    return ReportResponse(
        session_id=report.session_id,
        client_id=report.client_id,
        generated_at=report.generated_at,
        language=report.language,
        executive_summary=report.executive_summary,
        detailed_findings={
            findings.label: findings.to_dict() for findings in report.detailed_findings
        },
        treatment_recommendations=list(report.treatment_recommendations),
        therapeutic_contract=TherapeuticContractModel(
            goals=list(report.therapeutic_contract.goals),
            approach=report.therapeutic_contract.approach,
            timeline=report.therapeutic_contract.timeline,
            focus_areas=list(report.therapeutic_contract.focus_areas),
        ),
        identity_evolution=[
            IdentityEvolutionModel(
                round=entry.round_number,
                layer=entry.layer,
                anchors=list(entry.anchors),
            )
            for entry in report.identity_evolution
        ],
        voice_mask_analysis=VoiceMaskAnalysisModel(
            internal_voices=[v.to_dict() for v in report.voice_mask_analysis.internal_voices],
            defense_mechanisms=[
                m.to_dict() for m in report.voice_mask_analysis.defense_mechanisms
            ],
            integration=report.voice_mask_analysis.integration,
        ),
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.post(
    "/sessions",
    response_model=StartSessionResponse,
    status_code=201,
    summary="Start an analysis session",
)
async def start_session(
    request_data: StartSessionRequest,
    service: FuturegraphWorkflowService = Depends(get_workflow_service),
) -> StartSessionResponse:
    session = await service.start_session(
        user_id=request_data.user_id,
        client_id=request_data.client_id,
        image_ref=request_data.handwriting_image,
        client_context=request_data.client_context,
        language=request_data.language.value if request_data.language else None,
    )
    return StartSessionResponse(
        session_id=session.session_id,
        status=session.status.value,
        language=session.language.value,
        start_time=session.start_time,
    )


@router.post(
    "/sessions/{session_id}/rounds/{round_number}",
    response_model=RoundProcessingResponse,
    responses={
        **_ERROR_RESPONSES,
        422: {"model": ProblemDetail, "description": "Malformed AI analysis"},
        429: {"model": ProblemDetail, "description": "AI provider rate limited"},
        502: {"model": ProblemDetail, "description": "AI provider failure"},
        504: {"model": ProblemDetail, "description": "AI analysis timed out"},
    },
    summary="Process or reprocess one round",
)
async def process_round(
    session_id: str,
    round_number: int,
    request: Request,
    request_data: ProcessRoundRequest | None = None,
    service: FuturegraphWorkflowService = Depends(get_workflow_service),
) -> RoundProcessingResponse:
    """Run the AI analysis for a round and score it against the laws.

    The round is stored pending therapist approval; law violations are
    returned in `validation`, not as errors.
    """
    body = request_data or ProcessRoundRequest()
    try:
        result = await service.process_round(
            session_id=session_id,
            round_number=round_number,
            additional_context=body.additional_context,
            language=body.language.value if body.language else None,
        )
    except _HANDLED as exc:
        raise _to_http_exception(exc, request) from None

    return RoundProcessingResponse(
        session_id=result.session_id,
        round_number=result.round_number,
        analysis=result.analysis.to_dict(),
        validation=ValidationModel(**result.validation.to_dict()),
        requires_approval=result.requires_approval,
        reprocessed=result.reprocessed,
    )


@router.post(
    "/sessions/{session_id}/rounds/{round_number}/feedback",
    response_model=FeedbackResponse,
    responses=_ERROR_RESPONSES,
    summary="Approve or reject a round",
)
async def submit_feedback(
    session_id: str,
    round_number: int,
    request_data: SubmitFeedbackRequest,
    request: Request,
    service: FuturegraphWorkflowService = Depends(get_workflow_service),
) -> FeedbackResponse:
    try:
        result = await service.submit_feedback(
            session_id=session_id,
            round_number=round_number,
            feedback=request_data.feedback,
            approved=request_data.approved,
            language=request_data.language.value if request_data.language else None,
        )
    except _HANDLED as exc:
        raise _to_http_exception(exc, request) from None

    return FeedbackResponse(
        success=result.success,
        message=result.message,
        round_number=result.round_number,
        requires_reprocessing=result.requires_reprocessing,
    )


@router.get(
    "/sessions/{session_id}/status",
    response_model=SessionStatusResponse,
    responses={404: _ERROR_RESPONSES[404]},
    summary="Session progress",
)
async def get_session_status(
    session_id: str,
    request: Request,
    service: FuturegraphWorkflowService = Depends(get_workflow_service),
) -> SessionStatusResponse:
    try:
        status = await service.get_status(session_id)
    except _HANDLED as exc:
        raise _to_http_exception(exc, request) from None

    return SessionStatusResponse(
        session_id=status.session_id,
        status=status.status,
        current_round=status.current_round,
        completed_rounds=status.completed_rounds,
        total_rounds=status.total_rounds,
        is_complete=status.is_complete,
        language=status.language,
        rounds=[
            RoundStatusModel(
                number=r.number,
                completed=r.completed,
                requires_reprocessing=r.requires_reprocessing,
                qa_passed=r.qa_passed,
                timestamp=r.timestamp,
            )
            for r in status.rounds
        ],
    )


@router.get(
    "/sessions/{session_id}/report",
    response_model=ReportResponse,
    responses=_ERROR_RESPONSES,
    summary="Final report over ten approved rounds",
)
async def generate_report(
    session_id: str,
    request: Request,
    service: FuturegraphWorkflowService = Depends(get_workflow_service),
) -> ReportResponse:
    try:
        report = await service.generate_report(session_id)
    except _HANDLED as exc:
        raise _to_http_exception(exc, request) from None
    return _report_response(report)


@router.get(
    "/clients/{client_id}/sessions",
    response_model=ClientSessionsResponse,
    summary="A therapist's sessions for one client",
)
async def list_client_sessions(
    client_id: str,
    user_id: str = Query(..., min_length=1),
    service: FuturegraphWorkflowService = Depends(get_workflow_service),
) -> ClientSessionsResponse:
    summaries = await service.list_client_sessions(client_id, user_id)
    return ClientSessionsResponse(
        client_id=client_id,
        sessions=[
            SessionSummaryModel(
                session_id=s.session_id,
                client_id=s.client_id,
                status=s.status,
                current_round=s.current_round,
                completed_rounds=s.completed_rounds,
                language=s.language,
                start_time=s.start_time,
                completed_at=s.completed_at,
            )
            for s in summaries
        ],
    )


@router.get(
    "/laws",
    response_model=LawsResponse,
    summary="The FutureGraph law catalog",
)
async def list_laws(
    language: str | None = Query(default=None),
    service: FuturegraphWorkflowService = Depends(get_workflow_service),
) -> LawsResponse:
    laws = service.describe_laws(language)
    return LawsResponse(
        language=normalize_language(language).value,
        laws=[
            LawModel(
                id=law.id,
                name=law.name,
                description=law.description,
                kind=law.kind,
                enforced=law.enforced,
            )
            for law in laws
        ],
    )
