"""AI analysis gateway port.

The gateway is the only long-latency dependency of the workflow. Given a
round number, the handwriting image, client context and the prior round
history, it returns the provider's raw decoded JSON for the round. The
workflow parses and validates that JSON itself, so adapters stay thin.

Failure modes (all GatewayError subclasses):
- GatewayRateLimitedError: provider throttled the request
- GatewayUnreachableError: transport failure or provider error
- MalformedGatewayOutputError: content was not decodable JSON
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from futuregraph.domain.models.language import DEFAULT_LANGUAGE, SupportedLanguage
from futuregraph.domain.models.session import Round


@dataclass(frozen=True)
class AnalysisRequest:
    """Everything the gateway needs to analyze one round.

    Attributes:
        round_number: Round to analyze (1..10).
        image_ref: Handwriting image reference or base64 payload.
        client_context: Structured metadata about the client.
        additional_context: Therapist-supplied context for this round.
        prior_rounds: Rounds already stored, excluding the requested one.
        language: Output language for the analysis.
    """

    round_number: int
    image_ref: str
    client_context: Mapping[str, Any] = field(default_factory=dict)
    additional_context: Mapping[str, Any] | None = None
    prior_rounds: tuple[Round, ...] = ()
    language: SupportedLanguage = DEFAULT_LANGUAGE


class AnalysisGatewayProtocol(Protocol):
    """Protocol for AI analysis providers."""

    async def analyze_round(self, request: AnalysisRequest) -> Mapping[str, Any]:
        """Analyze one round.

        Args:
            request: The round and its inputs.

        Returns:
            The provider's decoded JSON object for the round.

        Raises:
            GatewayRateLimitedError: If the provider throttled the call.
            GatewayUnreachableError: If the provider could not be reached
                or answered with a server error.
            MalformedGatewayOutputError: If the provider's content could
                not be decoded as JSON.
        """
        ...
