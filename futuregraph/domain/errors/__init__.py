"""Domain errors for FutureGraph.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from FuturegraphError.
"""

from futuregraph.domain.errors.analysis import AnalysisParseError
from futuregraph.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from futuregraph.domain.errors.gateway import (
    GatewayError,
    GatewayRateLimitedError,
    GatewayTimeoutError,
    GatewayUnreachableError,
    MalformedGatewayOutputError,
)
from futuregraph.domain.errors.progression import ProgressionError
from futuregraph.domain.errors.session import (
    IncompleteSessionError,
    RoundNotFoundError,
    SessionNotFoundError,
)
from futuregraph.domain.exceptions import FuturegraphError

__all__: list[str] = [
    "AnalysisParseError",
    "ConcurrentModificationError",
    "FuturegraphError",
    "GatewayError",
    "GatewayRateLimitedError",
    "GatewayTimeoutError",
    "GatewayUnreachableError",
    "IncompleteSessionError",
    "MalformedGatewayOutputError",
    "ProgressionError",
    "RoundNotFoundError",
    "SessionNotFoundError",
]
