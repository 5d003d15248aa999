"""AI analysis gateway configuration.

Environment Variables:
- OPENAI_API_KEY: Bearer token for the provider (required for real calls)
- OPENAI_BASE_URL: OpenAI-compatible API root (default: https://api.openai.com/v1)
- FUTUREGRAPH_MODEL: Chat model (default: gpt-4.1-nano)
- FUTUREGRAPH_TEMPERATURE: Sampling temperature (default: 0.7, min: 0, max: 2)
- FUTUREGRAPH_MAX_TOKENS: Completion token cap (default: 4000, min: 256, max: 32000)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _get_int_env(key: str, default: int) -> int:
    """Get an integer environment variable, falling back on missing or invalid."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get a float environment variable, falling back on missing or invalid."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4.1-nano"

DEFAULT_TEMPERATURE = 0.7
MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0

DEFAULT_MAX_TOKENS = 4000
MIN_MAX_TOKENS = 256
MAX_MAX_TOKENS = 32000


@dataclass(frozen=True)
class AnalysisGatewayConfig:
    """Connection and sampling settings for the AI analysis provider.

    Attributes:
        api_key: Provider API key; empty means the gateway is not configured.
        base_url: OpenAI-compatible API root, without trailing slash.
        model: Chat completion model.
        temperature: Sampling temperature.
        max_tokens: Completion token cap.
    """

    api_key: str = field(default="", repr=False)
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if not self.model:
            raise ValueError("model must not be empty")
        if not MIN_TEMPERATURE <= self.temperature <= MAX_TEMPERATURE:
            raise ValueError(
                f"temperature must be between {MIN_TEMPERATURE} and "
                f"{MAX_TEMPERATURE}, got {self.temperature}"
            )
        if not MIN_MAX_TOKENS <= self.max_tokens <= MAX_MAX_TOKENS:
            raise ValueError(
                f"max_tokens must be between {MIN_MAX_TOKENS} and "
                f"{MAX_MAX_TOKENS}, got {self.max_tokens}"
            )
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def is_configured(self) -> bool:
        """True if an API key is available for real calls."""
        return bool(self.api_key)

    @classmethod
    def from_environment(cls) -> AnalysisGatewayConfig:
        """Create config from environment variables, clamped to valid ranges."""
        temperature = _get_float_env("FUTUREGRAPH_TEMPERATURE", DEFAULT_TEMPERATURE)
        temperature = max(MIN_TEMPERATURE, min(temperature, MAX_TEMPERATURE))
        max_tokens = _get_int_env("FUTUREGRAPH_MAX_TOKENS", DEFAULT_MAX_TOKENS)
        max_tokens = max(MIN_MAX_TOKENS, min(max_tokens, MAX_MAX_TOKENS))
        return cls(
            api_key=os.environ.get("OPENAI_API_KEY", ""),
            base_url=os.environ.get("OPENAI_BASE_URL") or DEFAULT_BASE_URL,
            model=os.environ.get("FUTUREGRAPH_MODEL") or DEFAULT_MODEL,
            temperature=temperature,
            max_tokens=max_tokens,
        )
