"""Round workflow configuration.

Environment Variables:
- FUTUREGRAPH_GATEWAY_TIMEOUT_SECONDS: Bound on one AI gateway call
  (default: 120, min: 5, max: 600)
- FUTUREGRAPH_VERSION_CONFLICT_RETRIES: Extra read-validate-write attempts
  after a version conflict (default: 1, min: 0, max: 5)
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _get_float_env(key: str, default: float) -> float:
    """Get a float environment variable, falling back on missing or invalid."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_int_env(key: str, default: int) -> int:
    """Get an integer environment variable, falling back on missing or invalid."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


# =============================================================================
# Gateway timeout
# =============================================================================

DEFAULT_GATEWAY_TIMEOUT_SECONDS = 120.0

# Floor accepted by the dataclass; tests use sub-second timeouts
MIN_GATEWAY_TIMEOUT_FLOOR_SECONDS = 0.01

# Floor applied to environment overrides
MIN_GATEWAY_TIMEOUT_SECONDS = 5.0

MAX_GATEWAY_TIMEOUT_SECONDS = 600.0

# =============================================================================
# Version conflict retries
# =============================================================================

DEFAULT_VERSION_CONFLICT_RETRIES = 1

MIN_VERSION_CONFLICT_RETRIES = 0

MAX_VERSION_CONFLICT_RETRIES = 5


@dataclass(frozen=True)
class WorkflowConfig:
    """Configuration for round processing.

    Attributes:
        gateway_timeout_seconds: Upper bound on one AI gateway call.
            Expiry raises GatewayTimeoutError and writes nothing.
        version_conflict_retries: How many times a write that lost a
            version race is re-read, re-validated and re-applied before
            the conflict is surfaced.
    """

    gateway_timeout_seconds: float = DEFAULT_GATEWAY_TIMEOUT_SECONDS
    version_conflict_retries: int = DEFAULT_VERSION_CONFLICT_RETRIES

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if (
            not MIN_GATEWAY_TIMEOUT_FLOOR_SECONDS
            <= self.gateway_timeout_seconds
            <= MAX_GATEWAY_TIMEOUT_SECONDS
        ):
            raise ValueError(
                "gateway_timeout_seconds must be between "
                f"{MIN_GATEWAY_TIMEOUT_FLOOR_SECONDS} and {MAX_GATEWAY_TIMEOUT_SECONDS}, "
                f"got {self.gateway_timeout_seconds}"
            )
        if (
            not MIN_VERSION_CONFLICT_RETRIES
            <= self.version_conflict_retries
            <= MAX_VERSION_CONFLICT_RETRIES
        ):
            raise ValueError(
                "version_conflict_retries must be between "
                f"{MIN_VERSION_CONFLICT_RETRIES} and {MAX_VERSION_CONFLICT_RETRIES}, "
                f"got {self.version_conflict_retries}"
            )

    @property
    def max_write_attempts(self) -> int:
        """Total attempts at a versioned write, the first one included."""
        return self.version_conflict_retries + 1

    @classmethod
    def from_environment(cls) -> WorkflowConfig:
        """Create config from environment variables, clamped to valid ranges."""
        timeout = _get_float_env(
            "FUTUREGRAPH_GATEWAY_TIMEOUT_SECONDS",
            DEFAULT_GATEWAY_TIMEOUT_SECONDS,
        )
        timeout = max(
            MIN_GATEWAY_TIMEOUT_SECONDS,
            min(timeout, MAX_GATEWAY_TIMEOUT_SECONDS),
        )
        retries = _get_int_env(
            "FUTUREGRAPH_VERSION_CONFLICT_RETRIES",
            DEFAULT_VERSION_CONFLICT_RETRIES,
        )
        retries = max(
            MIN_VERSION_CONFLICT_RETRIES,
            min(retries, MAX_VERSION_CONFLICT_RETRIES),
        )
        return cls(gateway_timeout_seconds=timeout, version_conflict_retries=retries)


DEFAULT_WORKFLOW_CONFIG = WorkflowConfig()

# Short timeout and no retries for unit tests
TEST_WORKFLOW_CONFIG = WorkflowConfig(
    gateway_timeout_seconds=0.05,
    version_conflict_retries=MIN_VERSION_CONFLICT_RETRIES,
)
