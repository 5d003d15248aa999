"""Workflow metrics for Prometheus exposition.

Operational counters and latencies of the round workflow. Only outcomes
are recorded; no analysis content or client data ever becomes a label.

Labels: service, environment, plus the per-metric labels below.
"""

from __future__ import annotations

import os
import threading

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

# Content type for Prometheus metrics endpoint
METRICS_CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"

# AI calls run for seconds to minutes
GATEWAY_DURATION_BUCKETS = (0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0, 60.0, 120.0, 300.0)

# Thread lock for singleton initialization
_metrics_lock = threading.Lock()


class WorkflowMetricsCollector:
    """Collects FutureGraph workflow metrics.

    Attributes:
        rounds_processed_total: Stored rounds by round number and QA outcome.
        progression_blocked_total: Rejected round requests by blocking law.
        gateway_failures_total: Failed AI calls by error type.
        gateway_duration_seconds: Latency of successful AI calls.
        feedback_total: Therapist decisions by decision.
        reports_generated_total: Compiled reports.
        version_conflicts_total: Lost version races by outcome.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize workflow metrics.

        Args:
            registry: Optional custom registry for testing isolation.
        """
        self._registry = registry or CollectorRegistry()
        self._environment = os.environ.get("ENVIRONMENT", "development")
        self._service_name = os.environ.get("SERVICE_NAME", "futuregraph-api")

        self.rounds_processed_total = Counter(
            name="futuregraph_rounds_processed_total",
            documentation="Rounds analyzed and stored, by QA outcome",
            labelnames=["round_number", "qa_outcome", "service", "environment"],
            registry=self._registry,
        )
        self.progression_blocked_total = Counter(
            name="futuregraph_progression_blocked_total",
            documentation="Round requests rejected by an ordering law",
            labelnames=["law_id", "service", "environment"],
            registry=self._registry,
        )
        self.gateway_failures_total = Counter(
            name="futuregraph_gateway_failures_total",
            documentation="Failed AI analysis calls by error type",
            labelnames=["error_type", "service", "environment"],
            registry=self._registry,
        )
        self.gateway_duration_seconds = Histogram(
            name="futuregraph_gateway_duration_seconds",
            documentation="Duration of successful AI analysis calls",
            labelnames=["service", "environment"],
            buckets=GATEWAY_DURATION_BUCKETS,
            registry=self._registry,
        )
        self.feedback_total = Counter(
            name="futuregraph_feedback_total",
            documentation="Therapist decisions on rounds",
            labelnames=["decision", "service", "environment"],
            registry=self._registry,
        )
        self.reports_generated_total = Counter(
            name="futuregraph_reports_generated_total",
            documentation="Final reports compiled",
            labelnames=["service", "environment"],
            registry=self._registry,
        )
        self.version_conflicts_total = Counter(
            name="futuregraph_version_conflicts_total",
            documentation="Session writes that lost a version race",
            labelnames=["outcome", "service", "environment"],
            registry=self._registry,
        )

    def _labels(self) -> dict[str, str]:
        return {"service": self._service_name, "environment": self._environment}

    def record_round_processed(self, round_number: int, qa_passed: bool) -> None:
        self.rounds_processed_total.labels(
            round_number=str(round_number),
            qa_outcome="passed" if qa_passed else "failed",
            **self._labels(),
        ).inc()

    def record_progression_blocked(self, law_id: str) -> None:
        self.progression_blocked_total.labels(law_id=law_id, **self._labels()).inc()

    def record_gateway_failure(self, error_type: str) -> None:
        self.gateway_failures_total.labels(
            error_type=error_type, **self._labels()
        ).inc()

    def observe_gateway_duration(self, seconds: float) -> None:
        self.gateway_duration_seconds.labels(**self._labels()).observe(seconds)

    def record_feedback(self, approved: bool) -> None:
        self.feedback_total.labels(
            decision="approved" if approved else "rejected", **self._labels()
        ).inc()

    def record_report_generated(self) -> None:
        self.reports_generated_total.labels(**self._labels()).inc()

    def record_version_conflict(self, exhausted: bool) -> None:
        """Record a lost version race.

        Args:
            exhausted: True if the conflict was surfaced to the caller,
                False if the write was retried.
        """
        self.version_conflicts_total.labels(
            outcome="exhausted" if exhausted else "retried", **self._labels()
        ).inc()

    def get_registry(self) -> CollectorRegistry:
        """Get the collector registry."""
        return self._registry

    def generate_metrics(self) -> bytes:
        """Metrics in Prometheus text format."""
        return generate_latest(self._registry)


# Singleton instance
_workflow_metrics_collector: WorkflowMetricsCollector | None = None


def get_workflow_metrics_collector() -> WorkflowMetricsCollector:
    """Get the singleton WorkflowMetricsCollector instance (thread-safe).

    Uses double-checked locking pattern for thread-safe lazy initialization.
    """
    global _workflow_metrics_collector
    if _workflow_metrics_collector is None:
        with _metrics_lock:
            if _workflow_metrics_collector is None:
                _workflow_metrics_collector = WorkflowMetricsCollector()
    return _workflow_metrics_collector


def reset_workflow_metrics_collector() -> None:
    """Reset the singleton collector (for testing only)."""
    global _workflow_metrics_collector
    with _metrics_lock:
        _workflow_metrics_collector = None
