"""Scripted AI analysis gateway stub.

Returns canned payloads per round for development and tests, and can be
told to fail or stall so timeout and error paths can be exercised
without a real provider.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from futuregraph.application.ports.analysis_gateway import (
    AnalysisGatewayProtocol,
    AnalysisRequest,
)
from futuregraph.domain.models.round_definitions import (
    MASK_ANALYSIS_ROUND,
    VOICE_DIALOGUE_ROUND,
    get_round_definition,
)


def default_payload(round_number: int) -> dict[str, Any]:
    """A well-formed, law-abiding payload for a round."""
    definition = get_round_definition(round_number)
    payload: dict[str, Any] = {
        "roundNumber": round_number,
        "graphologicalSigns": [
            {
                "sign": f"{definition.name} marker",
                "interpretation": f"{definition.focus.lower()}",
                "justification": "Consistent across the sample",
                "therapeuticRelevance": f"Informs {definition.name.lower()} work",
            }
        ],
        "emotionalIndicators": [],
        "identityAnchors": [f"{definition.name} anchor"],
        "therapeuticInsights": [f"{definition.name} insight"],
        "retroactiveInfluences": [],
    }
    if round_number == VOICE_DIALOGUE_ROUND:
        payload["voices"] = [{"id": "inner_critic", "name": "Inner critic"}]
    if round_number == MASK_ANALYSIS_ROUND:
        payload["masks"] = [{"id": "performer", "name": "Performer"}]
    return payload


class AnalysisGatewayStub(AnalysisGatewayProtocol):
    """In-memory stub implementation of AnalysisGatewayProtocol.

    Attributes:
        requests: Every request received, in order (test aid).
    """

    def __init__(self, delay_seconds: float = 0.0) -> None:
        """Initialize the stub.

        Args:
            delay_seconds: Artificial latency applied to every call.
        """
        self._delay_seconds = delay_seconds
        self._payloads: dict[int, Any] = {}
        self._failures: dict[int, Exception] = {}
        self.requests: list[AnalysisRequest] = []

    def set_payload(self, round_number: int, payload: Any) -> None:
        """Script the raw output for a round (any JSON-like value)."""
        self._payloads[round_number] = payload

    def set_failure(self, round_number: int, error: Exception) -> None:
        """Script an exception for a round."""
        self._failures[round_number] = error

    def set_delay(self, delay_seconds: float) -> None:
        """Change the artificial latency."""
        self._delay_seconds = delay_seconds

    def clear(self) -> None:
        """Drop scripted payloads, failures and recorded requests."""
        self._payloads.clear()
        self._failures.clear()
        self.requests.clear()

    async def analyze_round(self, request: AnalysisRequest) -> Mapping[str, Any]:
        self.requests.append(request)
        if self._delay_seconds:
            await asyncio.sleep(self._delay_seconds)
        failure = self._failures.get(request.round_number)
        if failure is not None:
            raise failure
        return self._payloads.get(
            request.round_number, default_payload(request.round_number)
        )
