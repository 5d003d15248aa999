"""Unit tests for API dependency wiring and startup hooks."""

from collections.abc import Iterator

import pytest
import structlog

from futuregraph.api import startup
from futuregraph.api.dependencies.futuregraph import (
    get_analysis_gateway,
    get_session_repository,
    get_workflow_service,
    reset_futuregraph_dependencies,
)
from futuregraph.infrastructure.adapters.openai_analysis_gateway import (
    OpenAIAnalysisGateway,
)
from futuregraph.infrastructure.stubs.analysis_gateway_stub import AnalysisGatewayStub
from futuregraph.infrastructure.stubs.session_repository_stub import (
    SessionRepositoryStub,
)


@pytest.fixture(autouse=True)
def isolated_dependencies() -> Iterator[None]:
    reset_futuregraph_dependencies()
    yield
    reset_futuregraph_dependencies()
    structlog.reset_defaults()


class TestDependencies:
    """Tests for the singleton getters."""

    def test_stub_gateway_without_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the stub is used when no key is configured."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        assert isinstance(get_analysis_gateway(), AnalysisGatewayStub)

    def test_openai_gateway_with_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the real adapter is used when a key is configured."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

        assert isinstance(get_analysis_gateway(), OpenAIAnalysisGateway)

    def test_singletons(self) -> None:
        """Test that getters return the same instance until reset."""
        service = get_workflow_service()

        assert get_workflow_service() is service
        assert isinstance(get_session_repository(), SessionRepositoryStub)
        reset_futuregraph_dependencies()
        assert get_workflow_service() is not service


class TestStartup:
    """Tests for startup hooks."""

    def test_environment_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the environment defaults to development."""
        monkeypatch.delenv("ENVIRONMENT", raising=False)

        assert startup.get_environment() == "development"

    def test_environment_normalized(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the environment name is normalized."""
        monkeypatch.setenv("ENVIRONMENT", " Production ")

        assert startup.get_environment() == "production"

    def test_configure_logging_uses_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that logging is configured for the current environment."""
        calls: list[str] = []
        monkeypatch.setenv("ENVIRONMENT", "staging")
        monkeypatch.setattr(
            startup, "configure_structlog", lambda environment: calls.append(environment)
        )

        startup.configure_logging()

        assert calls == ["staging"]
