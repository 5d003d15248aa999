"""In-memory stubs for development and testing."""

from futuregraph.infrastructure.stubs.analysis_gateway_stub import (
    AnalysisGatewayStub,
    default_payload,
)
from futuregraph.infrastructure.stubs.session_repository_stub import (
    SessionRepositoryStub,
)

__all__: list[str] = [
    "AnalysisGatewayStub",
    "SessionRepositoryStub",
    "default_payload",
]
