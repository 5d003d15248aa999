"""
Pytest configuration and shared fixtures for FutureGraph tests.

Testing Standards:
- Async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for port mocking, in-memory stubs for service flows
- Unit tests go in tests/unit/
"""

import pytest
from prometheus_client import CollectorRegistry

from futuregraph.application.services.futuregraph_workflow_service import (
    FuturegraphWorkflowService,
)
from futuregraph.config.workflow_config import TEST_WORKFLOW_CONFIG
from futuregraph.infrastructure.monitoring.workflow_metrics import (
    WorkflowMetricsCollector,
)
from futuregraph.infrastructure.stubs.analysis_gateway_stub import AnalysisGatewayStub
from futuregraph.infrastructure.stubs.session_repository_stub import (
    SessionRepositoryStub,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Frozen clock at 2026-01-01T00:00:00Z."""
    return FakeTimeAuthority()


@pytest.fixture
def session_repository() -> SessionRepositoryStub:
    return SessionRepositoryStub()


@pytest.fixture
def analysis_gateway() -> AnalysisGatewayStub:
    return AnalysisGatewayStub()


@pytest.fixture
def workflow_metrics() -> WorkflowMetricsCollector:
    """Metrics collector on an isolated registry."""
    return WorkflowMetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def workflow_service(
    session_repository: SessionRepositoryStub,
    analysis_gateway: AnalysisGatewayStub,
    fake_time_authority: FakeTimeAuthority,
    workflow_metrics: WorkflowMetricsCollector,
) -> FuturegraphWorkflowService:
    """Workflow service over in-memory stubs with a short gateway timeout."""
    return FuturegraphWorkflowService(
        repository=session_repository,
        gateway=analysis_gateway,
        time_authority=fake_time_authority,
        config=TEST_WORKFLOW_CONFIG,
        metrics=workflow_metrics,
    )
