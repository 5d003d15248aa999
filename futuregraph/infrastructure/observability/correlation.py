"""Correlation IDs for tracing one request through the workflow.

The ID lives in a ContextVar so it follows the request across awaits,
including the AI gateway call. The HTTP middleware sets it from the
X-Correlation-ID header (or a fresh UUID4) and resets it afterwards.
"""

from contextvars import ContextVar, Token
from typing import Any
from uuid import uuid4

CORRELATION_ID_HEADER = "X-Correlation-ID"

# Empty string means "no request in flight"
_correlation_id: ContextVar[str] = ContextVar("futuregraph_correlation_id", default="")


def generate_correlation_id() -> str:
    """Generate a new correlation ID (UUID4 string)."""
    return str(uuid4())


def get_correlation_id() -> str:
    """Current correlation ID, or an empty string outside a request."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> Token[str]:
    """Bind a correlation ID to the current context.

    Args:
        correlation_id: The ID to bind.

    Returns:
        Token that restores the previous value via reset_correlation_id().
    """
    return _correlation_id.set(correlation_id)


def reset_correlation_id(token: Token[str]) -> None:
    """Restore the correlation ID that was bound before set_correlation_id()."""
    _correlation_id.reset(token)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding the current correlation ID to each entry.

    An ID already bound on the logger wins over the context value.
    """
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
