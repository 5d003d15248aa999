"""FutureGraph API dependencies.

Module-level singletons wired for FastAPI's Depends(). The AI gateway is
the real OpenAI-compatible adapter when OPENAI_API_KEY is set, and the
scripted stub otherwise. Sessions are held in the in-memory repository
stub; a durable repository plugs in here.
"""

from futuregraph.application.ports.analysis_gateway import AnalysisGatewayProtocol
from futuregraph.application.ports.session_repository import (
    SessionRepositoryProtocol,
)
from futuregraph.application.ports.time_authority import TimeAuthorityProtocol
from futuregraph.application.services.futuregraph_workflow_service import (
    FuturegraphWorkflowService,
)
from futuregraph.application.services.time_authority_service import (
    SystemTimeAuthority,
)
from futuregraph.config.gateway_config import AnalysisGatewayConfig
from futuregraph.config.workflow_config import WorkflowConfig
from futuregraph.infrastructure.adapters.openai_analysis_gateway import (
    OpenAIAnalysisGateway,
)
from futuregraph.infrastructure.stubs.analysis_gateway_stub import AnalysisGatewayStub
from futuregraph.infrastructure.stubs.session_repository_stub import (
    SessionRepositoryStub,
)

_session_repository: SessionRepositoryProtocol | None = None
_analysis_gateway: AnalysisGatewayProtocol | None = None
_time_authority: TimeAuthorityProtocol | None = None
_workflow_service: FuturegraphWorkflowService | None = None


def get_session_repository() -> SessionRepositoryProtocol:
    """Get the session repository singleton."""
    global _session_repository
    if _session_repository is None:
        _session_repository = SessionRepositoryStub()
    return _session_repository


def get_analysis_gateway() -> AnalysisGatewayProtocol:
    """Get the AI analysis gateway singleton.

    Returns OpenAIAnalysisGateway when an API key is configured, otherwise
    AnalysisGatewayStub.
    """
    global _analysis_gateway
    if _analysis_gateway is None:
        config = AnalysisGatewayConfig.from_environment()
        if config.is_configured:
            _analysis_gateway = OpenAIAnalysisGateway(config)
        else:
            _analysis_gateway = AnalysisGatewayStub()
    return _analysis_gateway


def get_time_authority() -> TimeAuthorityProtocol:
    """Get the time authority singleton."""
    global _time_authority
    if _time_authority is None:
        _time_authority = SystemTimeAuthority()
    return _time_authority


def get_workflow_service() -> FuturegraphWorkflowService:
    """Get the workflow service singleton."""
    global _workflow_service
    if _workflow_service is None:
        _workflow_service = FuturegraphWorkflowService(
            repository=get_session_repository(),
            gateway=get_analysis_gateway(),
            time_authority=get_time_authority(),
            config=WorkflowConfig.from_environment(),
        )
    return _workflow_service


def reset_futuregraph_dependencies() -> None:
    """Drop every singleton (test isolation)."""
    global _session_repository, _analysis_gateway, _time_authority, _workflow_service
    _session_repository = None
    _analysis_gateway = None
    _time_authority = None
    _workflow_service = None
