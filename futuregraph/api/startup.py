"""Startup hooks for the FutureGraph API.

1. Configure structured logging for the current ENVIRONMENT
2. Log the effective workflow and gateway settings

Usage in FastAPI (see futuregraph.api.main.lifespan):
    configure_logging()
    log_effective_configuration()
"""

import os

from structlog import get_logger

from futuregraph.config.gateway_config import AnalysisGatewayConfig
from futuregraph.config.workflow_config import WorkflowConfig
from futuregraph.infrastructure.observability import configure_structlog

logger = get_logger()

ENVIRONMENT_ENV = "ENVIRONMENT"
DEFAULT_ENVIRONMENT = "development"


def get_environment() -> str:
    """Current deployment environment, lower-cased."""
    return os.getenv(ENVIRONMENT_ENV, DEFAULT_ENVIRONMENT).strip().lower()


def configure_logging() -> None:
    """Configure structlog: JSON in production, console otherwise."""
    environment = get_environment()
    configure_structlog(environment=environment)
    logger.info("logging_configured", environment=environment)


def log_effective_configuration() -> None:
    """Log the clamped configuration the service will run with."""
    workflow = WorkflowConfig.from_environment()
    gateway = AnalysisGatewayConfig.from_environment()
    logger.info(
        "futuregraph_configuration",
        gateway_timeout_seconds=workflow.gateway_timeout_seconds,
        version_conflict_retries=workflow.version_conflict_retries,
        model=gateway.model,
        base_url=gateway.base_url,
        gateway_configured=gateway.is_configured,
    )
    if not gateway.is_configured:
        logger.warning("analysis_gateway_stubbed", reason="OPENAI_API_KEY not set")
