"""Final FutureGraph report compiled from ten approved rounds."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from futuregraph.domain.models.analysis import (
    GraphologicalSign,
    Mask,
    RetroactiveInfluence,
    Voice,
)


def _dump(items: tuple[Any, ...]) -> list[Any]:
    return [item.to_dict() if hasattr(item, "to_dict") else item for item in items]


@dataclass(frozen=True)
class RoundFindings:
    """Verbatim findings of one round, keyed in the report by round label."""

    round_number: int
    label: str
    graphological_signs: tuple[GraphologicalSign, ...]
    emotional_indicators: tuple[Any, ...]
    therapeutic_insights: tuple[str, ...]
    retroactive_influences: tuple[RetroactiveInfluence, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "graphologicalSigns": _dump(self.graphological_signs),
            "emotionalIndicators": list(self.emotional_indicators),
            "therapeuticInsights": list(self.therapeutic_insights),
            "retroactiveInfluences": _dump(self.retroactive_influences),
        }


@dataclass(frozen=True)
class TherapeuticContract:
    """Goals, approach, timeline and focus areas proposed to the client."""

    goals: tuple[str, ...]
    approach: str
    timeline: str
    focus_areas: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "goals": list(self.goals),
            "approach": self.approach,
            "timeline": self.timeline,
            "focusAreas": list(self.focus_areas),
        }


@dataclass(frozen=True)
class IdentityEvolutionEntry:
    """Identity anchors reported by one round."""

    round_number: int
    layer: str
    anchors: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "round": self.round_number,
            "layer": self.layer,
            "anchors": list(self.anchors),
        }


@dataclass(frozen=True)
class VoiceMaskSynthesis:
    """Round 7 voices next to round 8 masks."""

    internal_voices: tuple[Voice, ...]
    defense_mechanisms: tuple[Mask, ...]
    integration: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "internalVoices": _dump(self.internal_voices),
            "defenseMechanisms": _dump(self.defense_mechanisms),
            "integration": self.integration,
        }


@dataclass(frozen=True)
class FuturegraphReport:
    """Structured report over a completed session.

    Attributes:
        session_id: Session the report was compiled from.
        client_id: Client the session belongs to.
        generated_at: Compilation time.
        language: Language of the fixed labels.
        executive_summary: One templated sentence.
        detailed_findings: Per-round findings in round order.
        treatment_recommendations: Round 10 insights plus fixed additions.
        therapeutic_contract: Contract skeleton.
        identity_evolution: Rounds with identity anchors, in round order.
        voice_mask_analysis: Voice/mask synthesis.
    """

    session_id: str
    client_id: str
    generated_at: datetime
    language: str
    executive_summary: str
    detailed_findings: tuple[RoundFindings, ...]
    treatment_recommendations: tuple[str, ...]
    therapeutic_contract: TherapeuticContract
    identity_evolution: tuple[IdentityEvolutionEntry, ...]
    voice_mask_analysis: VoiceMaskSynthesis

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {
            "sessionId": self.session_id,
            "clientId": self.client_id,
            "generatedAt": self.generated_at.isoformat(),
            "language": self.language,
            "executiveSummary": self.executive_summary,
            "detailedFindings": {
                findings.label: findings.to_dict()
                for findings in self.detailed_findings
            },
            "treatmentRecommendations": list(self.treatment_recommendations),
            "therapeuticContract": self.therapeutic_contract.to_dict(),
            "identityEvolution": [e.to_dict() for e in self.identity_evolution],
            "voiceMaskAnalysis": self.voice_mask_analysis.to_dict(),
        }
