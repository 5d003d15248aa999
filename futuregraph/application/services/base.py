"""Logging mixin shared by application services.

Usage:
    from futuregraph.application.services.base import LoggingMixin

    class MyService(LoggingMixin):
        def __init__(self, repository: SessionRepositoryProtocol) -> None:
            self._repository = repository
            self._init_logger(component="workflow")

        async def do_something(self, session_id: str) -> None:
            log = self._log_operation("do_something", session_id=session_id)
            log.info("operation_started")
"""

import structlog

from futuregraph.infrastructure.observability.correlation import get_correlation_id


class LoggingMixin:
    """Mixin giving services an operation-scoped structlog logger.

    The logger is bound with the service class name and a component.
    Each operation logger additionally carries the operation name, the
    current correlation ID and any extra context.

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "futuregraph") -> None:
        """Bind the service logger. Call from __init__."""
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Create an operation-scoped logger.

        Args:
            operation: Name of the operation being performed.
            **context: Additional context to bind.

        Returns:
            BoundLogger with operation and correlation context.
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )
