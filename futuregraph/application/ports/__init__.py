"""Application ports (interfaces) for FutureGraph."""

from futuregraph.application.ports.analysis_gateway import (
    AnalysisGatewayProtocol,
    AnalysisRequest,
)
from futuregraph.application.ports.session_repository import (
    SessionRepositoryProtocol,
)
from futuregraph.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "AnalysisGatewayProtocol",
    "AnalysisRequest",
    "SessionRepositoryProtocol",
    "TimeAuthorityProtocol",
]
