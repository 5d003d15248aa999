"""Unit tests for the FutureGraph API routes.

The workflow service runs over the in-memory stubs and a frozen clock;
only the dependency wiring is overridden.
"""

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from futuregraph.api.dependencies.futuregraph import get_workflow_service
from futuregraph.api.main import create_app
from futuregraph.application.services.futuregraph_workflow_service import (
    FuturegraphWorkflowService,
)
from futuregraph.domain.errors import (
    GatewayRateLimitedError,
    GatewayUnreachableError,
    MalformedGatewayOutputError,
)
from futuregraph.infrastructure.observability import CORRELATION_ID_HEADER
from futuregraph.infrastructure.stubs.analysis_gateway_stub import AnalysisGatewayStub

BASE = "/v1/futuregraph"


@pytest.fixture
def app(workflow_service: FuturegraphWorkflowService) -> Iterator[FastAPI]:
    application = create_app()
    application.dependency_overrides[get_workflow_service] = lambda: workflow_service
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client."""
    return TestClient(app)


def _start(client: TestClient, **overrides) -> str:
    body = {
        "user_id": "therapist-1",
        "client_id": "client-1",
        "handwriting_image": "aGFuZHdyaXRpbmc=",
        "client_context": {"age": 34},
        **overrides,
    }
    response = client.post(f"{BASE}/sessions", json=body)
    assert response.status_code == 201
    return response.json()["session_id"]


def _complete(client: TestClient, session_id: str, upto: int) -> None:
    for number in range(1, upto + 1):
        assert client.post(f"{BASE}/sessions/{session_id}/rounds/{number}").status_code == 200
        response = client.post(
            f"{BASE}/sessions/{session_id}/rounds/{number}/feedback",
            json={"approved": True, "feedback": "ok"},
        )
        assert response.status_code == 200


class TestStartSession:
    """Tests for POST /sessions."""

    def test_creates_session(self, client: TestClient) -> None:
        """Test that a session is created in the requested language."""
        response = client.post(
            f"{BASE}/sessions",
            json={
                "user_id": "therapist-1",
                "client_id": "client-1",
                "handwriting_image": "aGFuZHdyaXRpbmc=",
                "language": "he",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["session_id"].startswith("fg_")
        assert data["status"] == "active"
        assert data["language"] == "he"
        assert data["start_time"] == "2026-01-01T00:00:00Z"

    def test_missing_image_rejected(self, client: TestClient) -> None:
        """Test request validation."""
        response = client.post(
            f"{BASE}/sessions", json={"user_id": "t", "client_id": "c"}
        )

        assert response.status_code == 422

    def test_correlation_id_echoed(self, client: TestClient) -> None:
        """Test that the caller's correlation ID is echoed back."""
        response = client.post(
            f"{BASE}/sessions",
            json={"user_id": "t", "client_id": "c", "handwriting_image": "x"},
            headers={CORRELATION_ID_HEADER: "req-123"},
        )

        assert response.headers[CORRELATION_ID_HEADER] == "req-123"


class TestProcessRound:
    """Tests for POST /sessions/{id}/rounds/{n}."""

    def test_process_first_round(self, client: TestClient) -> None:
        """Test a successful round with its QA verdict."""
        session_id = _start(client)

        response = client.post(
            f"{BASE}/sessions/{session_id}/rounds/1",
            json={"additional_context": {"note": "rushed"}},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["round_number"] == 1
        assert data["requires_approval"] is True
        assert data["validation"] == {"passed": True, "violations": [], "warnings": []}
        assert data["analysis"]["identityAnchors"] == ["Visible Layer anchor"]

    def test_progression_conflict(self, client: TestClient) -> None:
        """Test that skipping ahead returns 409 with the blocking round."""
        session_id = _start(client)

        response = client.post(f"{BASE}/sessions/{session_id}/rounds/3")

        assert response.status_code == 409
        detail = response.json()["detail"]
        assert detail["type"] == "urn:futuregraph:error:progression"
        assert detail["law_id"] == "inter_round_pause"
        assert detail["blocking_round"] == 1
        assert detail["reason"] == "missing"

    def test_invalid_round_number(self, client: TestClient) -> None:
        """Test that round numbers outside 1..10 return 400."""
        session_id = _start(client)

        response = client.post(f"{BASE}/sessions/{session_id}/rounds/11")

        assert response.status_code == 400
        assert response.json()["detail"]["type"] == "urn:futuregraph:error:invalid-request"

    def test_unknown_session(self, client: TestClient) -> None:
        """Test that an unknown session returns 404."""
        response = client.post(f"{BASE}/sessions/fg_missing/rounds/1")

        assert response.status_code == 404

    def test_gateway_timeout(
        self, client: TestClient, analysis_gateway: AnalysisGatewayStub
    ) -> None:
        """Test that a slow provider returns 504."""
        session_id = _start(client)
        analysis_gateway.set_delay(1.0)

        response = client.post(f"{BASE}/sessions/{session_id}/rounds/1")

        assert response.status_code == 504

    def test_rate_limited(
        self, client: TestClient, analysis_gateway: AnalysisGatewayStub
    ) -> None:
        """Test that provider throttling returns 429 with Retry-After."""
        session_id = _start(client)
        analysis_gateway.set_failure(1, GatewayRateLimitedError(1, retry_after_seconds=20))

        response = client.post(f"{BASE}/sessions/{session_id}/rounds/1")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "20"

    def test_provider_failure(
        self, client: TestClient, analysis_gateway: AnalysisGatewayStub
    ) -> None:
        """Test that provider failures return 502."""
        session_id = _start(client)
        analysis_gateway.set_failure(1, GatewayUnreachableError(1))

        response = client.post(f"{BASE}/sessions/{session_id}/rounds/1")

        assert response.status_code == 502

    def test_malformed_analysis(
        self, client: TestClient, analysis_gateway: AnalysisGatewayStub
    ) -> None:
        """Test that unparseable output returns 422 with problems."""
        session_id = _start(client)
        analysis_gateway.set_failure(1, MalformedGatewayOutputError(1, "oops"))

        response = client.post(f"{BASE}/sessions/{session_id}/rounds/1")

        assert response.status_code == 422
        assert response.json()["detail"]["problems"]


class TestFeedbackAndStatus:
    """Tests for feedback and status endpoints."""

    def test_feedback_on_unknown_round(self, client: TestClient) -> None:
        """Test that feedback on an unprocessed round returns 404."""
        session_id = _start(client)

        response = client.post(
            f"{BASE}/sessions/{session_id}/rounds/2/feedback",
            json={"approved": True},
        )

        assert response.status_code == 404
        assert response.json()["detail"]["type"] == "urn:futuregraph:error:round-not-found"

    def test_rejection(self, client: TestClient) -> None:
        """Test that a rejection requests reprocessing."""
        session_id = _start(client)
        client.post(f"{BASE}/sessions/{session_id}/rounds/1")

        response = client.post(
            f"{BASE}/sessions/{session_id}/rounds/1/feedback",
            json={"approved": False, "feedback": "Too generic"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Round marked for reprocessing",
            "round_number": 1,
            "requires_reprocessing": True,
        }

    def test_status(self, client: TestClient) -> None:
        """Test the status snapshot."""
        session_id = _start(client)
        _complete(client, session_id, 2)

        response = client.get(f"{BASE}/sessions/{session_id}/status")

        assert response.status_code == 200
        data = response.json()
        assert data["current_round"] == 2
        assert data["completed_rounds"] == 2
        assert data["total_rounds"] == 10
        assert [r["number"] for r in data["rounds"]] == [1, 2]

    def test_status_unknown_session(self, client: TestClient) -> None:
        """Test that status of an unknown session returns 404."""
        response = client.get(f"{BASE}/sessions/fg_missing/status")

        assert response.status_code == 404


class TestReport:
    """Tests for GET /sessions/{id}/report."""

    def test_incomplete_session(self, client: TestClient) -> None:
        """Test that an incomplete session returns 409."""
        session_id = _start(client)
        _complete(client, session_id, 3)

        response = client.get(f"{BASE}/sessions/{session_id}/report")

        assert response.status_code == 409
        assert response.json()["detail"]["completed_rounds"] == 3

    def test_full_report(self, client: TestClient) -> None:
        """Test the report over ten approved rounds."""
        session_id = _start(client)
        _complete(client, session_id, 10)

        response = client.get(f"{BASE}/sessions/{session_id}/report")

        assert response.status_code == 200
        data = response.json()
        assert data["generated_at"] == "2026-01-01T00:00:00Z"
        assert len(data["detailed_findings"]) == 10
        assert "graphologicalSigns" in data["detailed_findings"]["Round 1: Visible Layer"]
        assert data["therapeutic_contract"]["goals"] == ["Integration insight"]
        assert data["voice_mask_analysis"]["internal_voices"][0]["id"] == "inner_critic"
        status = client.get(f"{BASE}/sessions/{session_id}/status").json()
        assert status["status"] == "completed"


class TestCatalogEndpoints:
    """Tests for listing endpoints."""

    def test_client_sessions(self, client: TestClient) -> None:
        """Test the per-client listing."""
        session_id = _start(client)

        response = client.get(
            f"{BASE}/clients/client-1/sessions", params={"user_id": "therapist-1"}
        )

        assert response.status_code == 200
        assert [s["session_id"] for s in response.json()["sessions"]] == [session_id]

    def test_client_sessions_requires_user(self, client: TestClient) -> None:
        """Test that user_id is required."""
        assert client.get(f"{BASE}/clients/client-1/sessions").status_code == 422

    def test_laws_in_hebrew(self, client: TestClient) -> None:
        """Test the localized law catalog."""
        response = client.get(f"{BASE}/laws", params={"language": "he"})

        assert response.status_code == 200
        data = response.json()
        assert data["language"] == "he"
        assert len(data["laws"]) == 11
        assert data["laws"][9]["id"] == "inter_round_pause"
        assert data["laws"][9]["kind"] == "round_ordering"


class TestMetricsEndpoint:
    """Tests for GET /v1/metrics."""

    def test_prometheus_format(self, client: TestClient) -> None:
        """Test that metrics are served as Prometheus text."""
        response = client.get("/v1/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "futuregraph_reports_generated_total" in response.text
