"""OpenAI-compatible AI analysis gateway over httpx.

Calls the /chat/completions endpoint of any OpenAI-compatible provider
and decodes the JSON analysis from the first choice.

Error mapping:
- HTTP 429 -> GatewayRateLimitedError (Retry-After honored when numeric)
- transport errors, timeouts, HTTP 5xx -> GatewayUnreachableError
- other non-2xx -> GatewayError
- undecodable envelope or content -> MalformedGatewayOutputError

The workflow service bounds the whole call with its own timeout; the
httpx timeout here only guards individual network operations.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import httpx
import structlog

from futuregraph.application.ports.analysis_gateway import (
    AnalysisGatewayProtocol,
    AnalysisRequest,
)
from futuregraph.config.gateway_config import AnalysisGatewayConfig
from futuregraph.domain.errors.gateway import (
    GatewayError,
    GatewayRateLimitedError,
    GatewayUnreachableError,
    MalformedGatewayOutputError,
)
from futuregraph.infrastructure.adapters.analysis_prompts import build_messages

log = structlog.get_logger()

# Per-operation network timeout (connect/read/write), seconds
DEFAULT_HTTP_TIMEOUT_SECONDS = 60.0

_FENCE = "```"


def strip_code_fence(content: str) -> str:
    """Remove a Markdown ```json ... ``` wrapper if present."""
    text = content.strip()
    if text.startswith(_FENCE):
        text = text[len(_FENCE) :]
        if text.lower().startswith("json"):
            text = text[len("json") :]
        text = text.strip()
    if text.endswith(_FENCE):
        text = text[: -len(_FENCE)].strip()
    return text


def _retry_after(response: httpx.Response) -> int | None:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return max(0, int(float(value)))
    except ValueError:
        return None


class OpenAIAnalysisGateway(AnalysisGatewayProtocol):
    """AnalysisGatewayProtocol implementation for OpenAI-compatible APIs.

    Attributes:
        _config: Provider connection and sampling settings.
        _client: Shared httpx client, or None to open one per call.
    """

    def __init__(
        self,
        config: AnalysisGatewayConfig,
        client: httpx.AsyncClient | None = None,
        http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the gateway.

        Args:
            config: Provider settings.
            client: Optional shared client (injected in tests with a
                MockTransport).
            http_timeout_seconds: Per-operation network timeout.
        """
        self._config = config
        self._client = client
        self._http_timeout = http_timeout_seconds

    @property
    def endpoint(self) -> str:
        return f"{self._config.base_url}/chat/completions"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }

    def build_body(self, request: AnalysisRequest) -> dict[str, Any]:
        """Chat completion request body for one round."""
        return {
            "model": self._config.model,
            "messages": build_messages(request),
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
        }

    async def analyze_round(self, request: AnalysisRequest) -> Mapping[str, Any]:
        body = self.build_body(request)
        round_number = request.round_number
        try:
            if self._client is not None:
                response = await self._post(self._client, body)
            else:
                async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                    response = await self._post(client, body)
        except httpx.HTTPError as exc:
            log.warning(
                "analysis_gateway_transport_error",
                round_number=round_number,
                error=str(exc),
            )
            raise GatewayUnreachableError(
                round_number,
                f"AI provider unreachable for round {round_number}: {exc}",
            ) from exc

        self._raise_for_status(response, round_number)
        return self._decode(response, round_number)

    async def _post(
        self, client: httpx.AsyncClient, body: dict[str, Any]
    ) -> httpx.Response:
        return await client.post(
            self.endpoint,
            json=body,
            headers=self._headers(),
            timeout=self._http_timeout,
        )

    def _raise_for_status(self, response: httpx.Response, round_number: int) -> None:
        status = response.status_code
        if status < 300:
            return
        log.warning(
            "analysis_gateway_http_error",
            round_number=round_number,
            status_code=status,
        )
        if status == 429:
            raise GatewayRateLimitedError(round_number, _retry_after(response))
        if status >= 500:
            raise GatewayUnreachableError(
                round_number,
                f"AI provider failed with HTTP {status} for round {round_number}",
            )
        raise GatewayError(
            round_number,
            f"AI provider rejected round {round_number} with HTTP {status}",
        )

    def _decode(self, response: httpx.Response, round_number: int) -> Mapping[str, Any]:
        try:
            envelope = response.json()
            content = envelope["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise MalformedGatewayOutputError(
                round_number,
                response.text,
                f"AI provider response for round {round_number} has no message content",
            ) from exc

        if not isinstance(content, str):
            raise MalformedGatewayOutputError(round_number, repr(content))
        text = strip_code_fence(content)
        try:
            analysis = json.loads(text)
        except ValueError as exc:
            raise MalformedGatewayOutputError(round_number, text) from exc
        if not isinstance(analysis, dict):
            raise MalformedGatewayOutputError(
                round_number,
                text,
                f"AI provider returned a JSON {type(analysis).__name__} "
                f"instead of an object for round {round_number}",
            )
        return analysis
