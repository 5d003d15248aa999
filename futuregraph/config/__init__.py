"""Configuration for FutureGraph."""

from futuregraph.config.gateway_config import AnalysisGatewayConfig
from futuregraph.config.workflow_config import (
    DEFAULT_WORKFLOW_CONFIG,
    TEST_WORKFLOW_CONFIG,
    WorkflowConfig,
)

__all__: list[str] = [
    "DEFAULT_WORKFLOW_CONFIG",
    "TEST_WORKFLOW_CONFIG",
    "AnalysisGatewayConfig",
    "WorkflowConfig",
]
