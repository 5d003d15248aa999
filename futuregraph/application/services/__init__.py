"""Application services for FutureGraph."""

from futuregraph.application.services.base import LoggingMixin
from futuregraph.application.services.futuregraph_workflow_service import (
    FuturegraphWorkflowService,
    generate_session_id,
)
from futuregraph.application.services.time_authority_service import (
    SystemTimeAuthority,
)

__all__: list[str] = [
    "FuturegraphWorkflowService",
    "LoggingMixin",
    "SystemTimeAuthority",
    "generate_session_id",
]
