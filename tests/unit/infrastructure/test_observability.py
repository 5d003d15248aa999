"""Unit tests for structlog configuration and correlation IDs."""

import json
from collections.abc import Iterator

import pytest
import structlog

from futuregraph.infrastructure.observability import (
    configure_structlog,
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)


@pytest.fixture
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


class TestCorrelationId:
    """Tests for the correlation ID context."""

    def test_empty_outside_request(self) -> None:
        """Test that no ID is bound by default."""
        assert get_correlation_id() == ""

    def test_set_and_reset(self) -> None:
        """Test that reset restores the previous value."""
        token = set_correlation_id("req-1")
        assert get_correlation_id() == "req-1"

        reset_correlation_id(token)
        assert get_correlation_id() == ""

    def test_generated_ids_are_unique(self) -> None:
        """Test that generated IDs are UUID4 strings."""
        first = generate_correlation_id()

        assert len(first) == 36
        assert first != generate_correlation_id()


class TestCorrelationIdProcessor:
    """Tests for the structlog processor."""

    def test_adds_context_id(self) -> None:
        """Test that the bound ID is added to the event."""
        token = set_correlation_id("req-2")
        try:
            event = correlation_id_processor(None, "info", {"event": "x"})
        finally:
            reset_correlation_id(token)

        assert event["correlation_id"] == "req-2"

    def test_explicit_id_wins(self) -> None:
        """Test that an ID already on the event is kept."""
        token = set_correlation_id("req-3")
        try:
            event = correlation_id_processor(
                None, "info", {"event": "x", "correlation_id": "explicit"}
            )
        finally:
            reset_correlation_id(token)

        assert event["correlation_id"] == "explicit"

    def test_no_id_outside_request(self) -> None:
        """Test that nothing is added without a bound ID."""
        assert "correlation_id" not in correlation_id_processor(None, "info", {})


class TestConfigureStructlog:
    """Tests for production log output."""

    def test_production_emits_json(
        self, capsys: pytest.CaptureFixture[str], reset_structlog: None
    ) -> None:
        """Test that production logs are JSON lines with the correlation ID."""
        configure_structlog(environment="production")
        token = set_correlation_id("req-4")
        try:
            structlog.get_logger().info("round_stored", round_number=3, note="סבב")
        finally:
            reset_correlation_id(token)

        entry = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert entry["event"] == "round_stored"
        assert entry["level"] == "info"
        assert entry["round_number"] == 3
        assert entry["note"] == "סבב"
        assert entry["correlation_id"] == "req-4"
        assert "timestamp" in entry
