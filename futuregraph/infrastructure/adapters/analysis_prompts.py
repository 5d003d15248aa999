"""Prompt construction for the AI analysis gateway.

Builds the system and user messages for one round from the phrasebook
and the law registry. Prior rounds contribute their identity anchors and
therapeutic insights so the provider can respect layer synchronization
and the one-layer influence constraint.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from futuregraph.application.ports.analysis_gateway import AnalysisRequest
from futuregraph.domain.models.law_registry import LAW_REGISTRY
from futuregraph.domain.models.phrasebook import (
    law_description,
    law_name,
    phrase,
    round_focus,
    round_name,
)
from futuregraph.domain.models.round_definitions import (
    MASK_ANALYSIS_ROUND,
    VOICE_DIALOGUE_ROUND,
)

_BASE_STRUCTURE: dict[str, Any] = {
    "roundNumber": 0,
    "graphologicalSigns": [
        {
            "sign": "string",
            "interpretation": "string",
            "justification": "string",
            "therapeuticRelevance": "string",
        }
    ],
    "emotionalIndicators": [],
    "identityAnchors": ["string"],
    "therapeuticInsights": ["string"],
    "retroactiveInfluences": [
        {"targetRound": 0, "description": "string", "validation": ["string"]}
    ],
}


def expected_structure(round_number: int) -> dict[str, Any]:
    """JSON skeleton the provider is asked to fill for a round."""
    structure = dict(_BASE_STRUCTURE, roundNumber=round_number)
    if round_number >= VOICE_DIALOGUE_ROUND:
        structure["voices"] = [{"id": "string", "name": "string", "description": "string"}]
    if round_number >= MASK_ANALYSIS_ROUND:
        structure["masks"] = [{"id": "string", "name": "string", "description": "string"}]
    return structure


def build_system_prompt(request: AnalysisRequest) -> str:
    """System message: methodology, laws, round focus and output shape."""
    language = request.language
    laws = "\n".join(
        f"- {law_name(law.id, language)}: {law_description(law.id, language)}"
        for law in LAW_REGISTRY
    )
    parts = [
        phrase("system_intro", language),
        phrase("laws_heading", language),
        laws,
        phrase("analysis_structure", language),
        f"{round_name(request.round_number, language)}: "
        f"{round_focus(request.round_number, language)}",
        phrase("provide_json", language),
        json.dumps(expected_structure(request.round_number), indent=2),
    ]
    return "\n\n".join(parts)


def _prior_findings(request: AnalysisRequest) -> str:
    findings = [
        {
            "round": prior.round_number,
            "layer": round_name(prior.round_number, request.language),
            "identityAnchors": list(prior.analysis.identity_anchors),
            "therapeuticInsights": list(prior.analysis.therapeutic_insights),
        }
        for prior in sorted(request.prior_rounds, key=lambda r: r.round_number)
    ]
    return json.dumps(findings, ensure_ascii=False, indent=2)


def _context(value: Mapping[str, Any] | None) -> str:
    return json.dumps(dict(value or {}), ensure_ascii=False, default=str)


def build_user_prompt(request: AnalysisRequest) -> str:
    """User message text: the ask, client context and prior findings."""
    language = request.language
    name = round_name(request.round_number, language)
    lines = [
        phrase("analyze_prompt", language, number=request.round_number, name=name),
        f"{phrase('client_context', language)}: {_context(request.client_context)}",
        f"{phrase('additional_context', language)}: "
        f"{_context(request.additional_context)}",
    ]
    if request.prior_rounds:
        lines.append("")
        lines.append(phrase("previous_findings", language))
        lines.append(_prior_findings(request))
    lines.append("")
    lines.append(phrase("apply_laws", language, name=name))
    respond = phrase("respond_in_language", language)
    if respond:
        lines.append(respond)
    return "\n".join(lines)


def image_url(image_ref: str) -> str:
    """URL for the image content part.

    References that already are URLs (http(s) or data:) pass through;
    anything else is treated as base64 JPEG data.
    """
    if image_ref.startswith(("data:", "http://", "https://")):
        return image_ref
    return f"data:image/jpeg;base64,{image_ref}"


def build_messages(request: AnalysisRequest) -> list[dict[str, Any]]:
    """Chat messages for one round's analysis."""
    return [
        {"role": "system", "content": build_system_prompt(request)},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": build_user_prompt(request)},
                {"type": "image_url", "image_url": {"url": image_url(request.image_ref)}},
            ],
        },
    ]
