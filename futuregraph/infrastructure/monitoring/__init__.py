"""Prometheus metrics for the FutureGraph workflow."""

from futuregraph.infrastructure.monitoring.workflow_metrics import (
    METRICS_CONTENT_TYPE,
    WorkflowMetricsCollector,
    get_workflow_metrics_collector,
    reset_workflow_metrics_collector,
)

__all__: list[str] = [
    "METRICS_CONTENT_TYPE",
    "WorkflowMetricsCollector",
    "get_workflow_metrics_collector",
    "reset_workflow_metrics_collector",
]
