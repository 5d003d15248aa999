"""Report compiler.

Folds the ten approved rounds of a session into a FuturegraphReport.
Every section is a pure function of the round list; the only inputs
beyond the rounds are the session language (for fixed labels) and the
generation time supplied by the caller.

Section sources:
- executive summary: round 1 first sign interpretation, round 6 first
  identity anchor, round 10 first therapeutic insight
- detailed findings: every round, verbatim
- treatment recommendations: round 10 insights, plus voice dialogue work
  if round 7 reported voices and defense exploration if round 8
  reported masks
- therapeutic contract: goals from round 9 insights, focus areas from
  round 6 identity anchors
- identity evolution: every round with identity anchors, in round order
- voice/mask synthesis: round 7 voices and round 8 masks
"""

from __future__ import annotations

from datetime import datetime

from futuregraph.domain.errors.session import IncompleteSessionError
from futuregraph.domain.models.analysis import AnalysisPayload
from futuregraph.domain.models.language import SupportedLanguage
from futuregraph.domain.models.phrasebook import phrase, round_label, round_name
from futuregraph.domain.models.report import (
    FuturegraphReport,
    IdentityEvolutionEntry,
    RoundFindings,
    TherapeuticContract,
    VoiceMaskSynthesis,
)
from futuregraph.domain.models.round_definitions import (
    INTEGRATION_ROUND,
    MASK_ANALYSIS_ROUND,
    ROOT_LAYER_ROUND,
    TOTAL_ROUNDS,
    TREATMENT_ROUND,
    VISIBLE_LAYER_ROUND,
    VOICE_DIALOGUE_ROUND,
)
from futuregraph.domain.models.session import Round, Session


def _analysis_of(session: Session, round_number: int) -> AnalysisPayload:
    stored = session.get_round(round_number)
    if stored is None:
        raise IncompleteSessionError(session.approved_round_count, TOTAL_ROUNDS)
    return stored.analysis


def _ordered_rounds(session: Session) -> list[Round]:
    return sorted(session.rounds, key=lambda r: r.round_number)


def build_executive_summary(session: Session, language: SupportedLanguage) -> str:
    """Compose the one-sentence summary from rounds 1, 6 and 10."""
    visible = _analysis_of(session, VISIBLE_LAYER_ROUND)
    root = _analysis_of(session, ROOT_LAYER_ROUND)
    treatment = _analysis_of(session, TREATMENT_ROUND)

    leading_interpretation = next(
        (sign.interpretation for sign in visible.graphological_signs[:1]), None
    )
    leading_anchor = next(iter(root.identity_anchors), None)
    leading_insight = next(iter(treatment.therapeutic_insights), None)
    return phrase(
        "executive_summary",
        language,
        visible=leading_interpretation or phrase("complex_patterns", language),
        root=leading_anchor or phrase("deep_seated_identity", language),
        treatment=leading_insight or phrase("targeted_interventions", language),
    )


def build_detailed_findings(
    session: Session, language: SupportedLanguage
) -> tuple[RoundFindings, ...]:
    """Per-round findings, verbatim, in round order."""
    return tuple(
        RoundFindings(
            round_number=stored.round_number,
            label=round_label(stored.round_number, language),
            graphological_signs=stored.analysis.graphological_signs,
            emotional_indicators=stored.analysis.emotional_indicators,
            therapeutic_insights=stored.analysis.therapeutic_insights,
            retroactive_influences=stored.analysis.retroactive_influences,
        )
        for stored in _ordered_rounds(session)
    )


def build_treatment_recommendations(
    session: Session, language: SupportedLanguage
) -> tuple[str, ...]:
    """Round 10 insights augmented by the voice/mask recommendations."""
    recommendations = list(_analysis_of(session, TREATMENT_ROUND).therapeutic_insights)
    if _analysis_of(session, VOICE_DIALOGUE_ROUND).voices:
        recommendations.append(phrase("voice_dialogue_recommendation", language))
    if _analysis_of(session, MASK_ANALYSIS_ROUND).masks:
        recommendations.append(phrase("defense_exploration_recommendation", language))
    return tuple(recommendations)


def build_therapeutic_contract(
    session: Session, language: SupportedLanguage
) -> TherapeuticContract:
    """Contract skeleton from the integration and root rounds."""
    goals = _analysis_of(session, INTEGRATION_ROUND).therapeutic_insights
    return TherapeuticContract(
        goals=goals or (phrase("contract_goals_placeholder", language),),
        approach=phrase("contract_approach", language),
        timeline=phrase("contract_timeline", language),
        focus_areas=_analysis_of(session, ROOT_LAYER_ROUND).identity_anchors,
    )


def build_identity_evolution(
    session: Session, language: SupportedLanguage
) -> tuple[IdentityEvolutionEntry, ...]:
    """One entry per round that reported identity anchors."""
    return tuple(
        IdentityEvolutionEntry(
            round_number=stored.round_number,
            layer=round_name(stored.round_number, language),
            anchors=stored.analysis.identity_anchors,
        )
        for stored in _ordered_rounds(session)
        if stored.analysis.identity_anchors
    )


def build_voice_mask_synthesis(
    session: Session, language: SupportedLanguage
) -> VoiceMaskSynthesis:
    """Round 7 voices next to round 8 masks."""
    return VoiceMaskSynthesis(
        internal_voices=_analysis_of(session, VOICE_DIALOGUE_ROUND).voices,
        defense_mechanisms=_analysis_of(session, MASK_ANALYSIS_ROUND).masks,
        integration=phrase("voice_mask_integration", language),
    )


def compile_report(session: Session, generated_at: datetime) -> FuturegraphReport:
    """Compile the final report of a session.

    Args:
        session: Session whose ten rounds are all approved.
        generated_at: Compilation time.

    Returns:
        The compiled report, with fixed labels in the session language.

    Raises:
        IncompleteSessionError: If fewer than ten rounds are approved.
    """
    approved = session.approved_round_count
    if approved < TOTAL_ROUNDS or len(session.round_numbers) < TOTAL_ROUNDS:
        raise IncompleteSessionError(approved, TOTAL_ROUNDS)

    language = session.language
    return FuturegraphReport(
        session_id=session.session_id,
        client_id=session.client_id,
        generated_at=generated_at,
        language=language.value,
        executive_summary=build_executive_summary(session, language),
        detailed_findings=build_detailed_findings(session, language),
        treatment_recommendations=build_treatment_recommendations(session, language),
        therapeutic_contract=build_therapeutic_contract(session, language),
        identity_evolution=build_identity_evolution(session, language),
        voice_mask_analysis=build_voice_mask_synthesis(session, language),
    )
