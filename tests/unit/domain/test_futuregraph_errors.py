"""Unit tests for FutureGraph domain errors."""

import pytest

from futuregraph.domain.errors import (
    AnalysisParseError,
    ConcurrentModificationError,
    GatewayError,
    GatewayRateLimitedError,
    GatewayTimeoutError,
    GatewayUnreachableError,
    IncompleteSessionError,
    MalformedGatewayOutputError,
    ProgressionError,
    RoundNotFoundError,
    SessionNotFoundError,
)
from futuregraph.domain.exceptions import FuturegraphError


class TestErrorHierarchy:
    """Every domain error is a FuturegraphError."""

    @pytest.mark.parametrize(
        "error_class",
        [
            AnalysisParseError,
            ConcurrentModificationError,
            GatewayError,
            IncompleteSessionError,
            ProgressionError,
            RoundNotFoundError,
            SessionNotFoundError,
        ],
    )
    def test_inherits_from_futuregraph_error(self, error_class: type) -> None:
        """Test that the error can be caught as FuturegraphError."""
        assert issubclass(error_class, FuturegraphError)

    @pytest.mark.parametrize(
        "error_class",
        [
            GatewayTimeoutError,
            GatewayRateLimitedError,
            GatewayUnreachableError,
            MalformedGatewayOutputError,
        ],
    )
    def test_gateway_errors_share_base(self, error_class: type) -> None:
        """Test that gateway failures share GatewayError."""
        assert issubclass(error_class, GatewayError)


class TestProgressionError:
    """Tests for ProgressionError."""

    def test_carries_blocking_details(self) -> None:
        """Test that the blocked request and its cause are exposed."""
        error = ProgressionError(
            round_number=7,
            law_id="sync_before_treatment",
            blocking_round=3,
            reason="requires_reprocessing",
        )

        assert error.round_number == 7
        assert error.law_id == "sync_before_treatment"
        assert error.blocking_round == 3
        assert error.reason == "requires_reprocessing"
        assert "Round 7" in str(error)
        assert "round 3 is requires reprocessing" in str(error)

    def test_custom_message(self) -> None:
        """Test that a custom message replaces the default."""
        error = ProgressionError(2, "inter_round_pause", 1, "missing", message="nope")

        assert str(error) == "nope"


class TestAnalysisParseError:
    """Tests for AnalysisParseError."""

    def test_problems_are_joined(self) -> None:
        """Test that problems are listed in the message."""
        error = AnalysisParseError(4, ["voices.0.id: too short", "masks: bad"])

        assert error.problems == ("voices.0.id: too short", "masks: bad")
        assert "round 4" in str(error)
        assert "voices.0.id: too short; masks: bad" in str(error)

    def test_without_problems(self) -> None:
        """Test the message when nothing specific is known."""
        error = AnalysisParseError(1)

        assert error.problems == ()
        assert "unparseable content" in str(error)


class TestGatewayErrors:
    """Tests for gateway errors."""

    def test_timeout_records_budget(self) -> None:
        """Test that the exceeded budget is kept."""
        error = GatewayTimeoutError(round_number=5, timeout_seconds=120.0)

        assert error.round_number == 5
        assert error.timeout_seconds == 120.0
        assert "timed out after 120.0s" in str(error)

    def test_rate_limited_retry_after(self) -> None:
        """Test that the provider's retry hint is kept."""
        error = GatewayRateLimitedError(round_number=2, retry_after_seconds=30)

        assert error.retry_after_seconds == 30
        assert GatewayRateLimitedError(2).retry_after_seconds is None

    def test_malformed_output_truncates_content(self) -> None:
        """Test that raw content is truncated for logging."""
        error = MalformedGatewayOutputError(3, raw_content="x" * 2000)

        assert len(error.raw_content) == 500


class TestSessionErrors:
    """Tests for session lookup errors."""

    def test_session_not_found(self) -> None:
        """Test that the missing identifier is named."""
        error = SessionNotFoundError("fg_missing")

        assert error.session_id == "fg_missing"
        assert "fg_missing" in str(error)

    def test_round_not_found(self) -> None:
        """Test that the missing round is named."""
        error = RoundNotFoundError("fg_abc", 4)

        assert error.round_number == 4
        assert str(error) == "Round 4 not found in session fg_abc"

    def test_incomplete_session(self) -> None:
        """Test that progress is reported."""
        error = IncompleteSessionError(9)

        assert error.completed_rounds == 9
        assert error.total_rounds == 10
        assert "Completed: 9/10" in str(error)


class TestConcurrentModificationError:
    """Tests for ConcurrentModificationError."""

    def test_versions_in_message(self) -> None:
        """Test that both versions are reported."""
        error = ConcurrentModificationError("fg_abc", expected_version=2, actual_version=3)

        assert error.expected_version == 2
        assert error.actual_version == 3
        assert error.operation == "save"
        assert "Expected version 2, found 3" in str(error)
