"""Metrics endpoint for Prometheus scraping.

Exposes workflow metrics (rounds, gateway calls, feedback, reports) in
Prometheus exposition format.
"""

from fastapi import APIRouter, Response

from futuregraph.infrastructure.monitoring.workflow_metrics import (
    METRICS_CONTENT_TYPE,
    get_workflow_metrics_collector,
)

router = APIRouter(prefix="/v1", tags=["metrics"])


@router.get(
    "/metrics",
    summary="Prometheus metrics endpoint",
    response_class=Response,
    responses={
        200: {
            "description": "Metrics in Prometheus format",
            "content": {"text/plain": {}},
        }
    },
)
async def get_metrics() -> Response:
    """Get workflow metrics in Prometheus format."""
    return Response(
        content=get_workflow_metrics_collector().generate_metrics(),
        media_type=METRICS_CONTENT_TYPE,
    )
