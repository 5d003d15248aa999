"""Unit tests for the report compiler."""

from datetime import datetime, timezone

import pytest

from futuregraph.domain.errors import IncompleteSessionError
from futuregraph.domain.models.language import SupportedLanguage
from futuregraph.domain.services.report_compiler import (
    build_executive_summary,
    build_therapeutic_contract,
    build_treatment_recommendations,
    compile_report,
)
from tests.helpers.analysis_factory import (
    make_analysis,
    make_round,
    make_session,
    session_with_rounds,
)

GENERATED_AT = datetime(2026, 2, 1, 12, 0, tzinfo=timezone.utc)


def _approved_session(overrides: dict[int, dict] | None = None, **kwargs):
    overrides = overrides or {}
    return make_session(
        tuple(
            make_round(
                n,
                approved=True,
                analysis=make_analysis(n, **overrides.get(n, {})),
            )
            for n in range(1, 11)
        ),
        **kwargs,
    )


class TestCompletenessGate:
    """Tests for the all-rounds-approved requirement."""

    def test_nine_approved_rounds_rejected(self) -> None:
        """Test that a single unapproved round blocks the report."""
        rounds = tuple(make_round(n, approved=(n != 10)) for n in range(1, 11))

        with pytest.raises(IncompleteSessionError) as exc_info:
            compile_report(make_session(rounds), GENERATED_AT)

        assert exc_info.value.completed_rounds == 9
        assert exc_info.value.total_rounds == 10

    def test_missing_rounds_rejected(self) -> None:
        """Test that a partial session cannot be reported."""
        with pytest.raises(IncompleteSessionError) as exc_info:
            compile_report(session_with_rounds(6, approved=True), GENERATED_AT)

        assert exc_info.value.completed_rounds == 6


class TestCompileReport:
    """Tests for a complete report."""

    def test_all_sections_present(self) -> None:
        """Test the report assembled from default analyses."""
        report = compile_report(_approved_session(), GENERATED_AT)

        assert report.session_id == "fg_test"
        assert report.client_id == "client-1"
        assert report.generated_at == GENERATED_AT
        assert report.language == "en"
        assert len(report.detailed_findings) == 10
        assert report.detailed_findings[0].label == "Round 1: Visible Layer"
        assert report.treatment_recommendations == (
            "Treatment Recommendations insight",
            "Voice dialogue work to integrate internal parts",
            "Exploration of defense mechanisms and authentic self",
        )
        assert report.therapeutic_contract.goals == ("Integration insight",)
        assert report.therapeutic_contract.focus_areas == ("Root Layer anchor",)
        assert [e.round_number for e in report.identity_evolution] == list(range(1, 11))
        assert report.voice_mask_analysis.internal_voices[0].id == "inner_critic"
        assert report.voice_mask_analysis.defense_mechanisms[0].id == "performer"

    def test_executive_summary(self) -> None:
        """Test the summary drawn from rounds 1, 6 and 10."""
        summary = build_executive_summary(_approved_session(), SupportedLanguage.EN)

        assert summary == (
            "Based on comprehensive FutureGraph™ Pro+ analysis across 10 diagnostic "
            "rounds, the client presents with initial impressions, obvious patterns "
            "in handwriting evolving to Root Layer anchor. Primary treatment "
            "recommendations include Treatment Recommendations insight."
        )

    def test_executive_summary_fallbacks(self) -> None:
        """Test the fixed phrases used when source sections are empty."""
        session = _approved_session(
            {
                1: {"graphologicalSigns": []},
                6: {"identityAnchors": []},
                10: {"therapeuticInsights": []},
            }
        )

        summary = build_executive_summary(session, SupportedLanguage.EN)

        assert "presents with complex patterns evolving to" in summary
        assert "deep-seated identity structures" in summary
        assert "include targeted interventions." in summary

    def test_recommendations_without_voices_or_masks(self) -> None:
        """Test that voice/mask additions depend on rounds 7 and 8."""
        session = _approved_session({7: {"voices": []}, 8: {"masks": []}})

        assert build_treatment_recommendations(session, SupportedLanguage.EN) == (
            "Treatment Recommendations insight",
        )

    def test_contract_goals_placeholder(self) -> None:
        """Test the goals placeholder when round 9 has no insights."""
        session = _approved_session({9: {"therapeuticInsights": []}})

        contract = build_therapeutic_contract(session, SupportedLanguage.EN)

        assert contract.goals == ("To be determined in collaboration with client",)
        assert "12-16 sessions" in contract.timeline

    def test_identity_evolution_skips_rounds_without_anchors(self) -> None:
        """Test that only rounds with anchors are listed."""
        session = _approved_session({3: {"identityAnchors": []}})

        report = compile_report(session, GENERATED_AT)

        assert 3 not in [e.round_number for e in report.identity_evolution]
        assert report.identity_evolution[0].layer == "Visible Layer"

    def test_findings_in_round_order(self) -> None:
        """Test that findings are ordered by round regardless of storage order."""
        rounds = tuple(make_round(n, approved=True) for n in range(10, 0, -1))

        report = compile_report(make_session(rounds), GENERATED_AT)

        assert [f.round_number for f in report.detailed_findings] == list(range(1, 11))

    def test_hebrew_labels(self) -> None:
        """Test that fixed labels follow the session language."""
        session = _approved_session(language=SupportedLanguage.HE)

        report = compile_report(session, GENERATED_AT)

        assert report.language == "he"
        assert report.detailed_findings[0].label == "סבב 1: שכבה גלויה"
        assert report.treatment_recommendations[-1] == "חקר מנגנוני הגנה והעצמי האותנטי"

    def test_compiling_twice_is_equivalent(self) -> None:
        """Test that compilation is a pure function of the session."""
        session = _approved_session()

        assert compile_report(session, GENERATED_AT) == compile_report(
            session, GENERATED_AT
        )


class TestReportSerialization:
    """Tests for FuturegraphReport.to_dict."""

    def test_camel_case_sections(self) -> None:
        """Test the serialized report layout."""
        data = compile_report(_approved_session(), GENERATED_AT).to_dict()

        assert data["sessionId"] == "fg_test"
        assert data["generatedAt"] == "2026-02-01T12:00:00+00:00"
        assert list(data["detailedFindings"])[0] == "Round 1: Visible Layer"
        assert "graphologicalSigns" in data["detailedFindings"]["Round 1: Visible Layer"]
        assert data["therapeuticContract"]["focusAreas"] == ["Root Layer anchor"]
        assert data["identityEvolution"][0] == {
            "round": 1,
            "layer": "Visible Layer",
            "anchors": ["Visible Layer anchor"],
        }
        assert data["voiceMaskAnalysis"]["internalVoices"][0]["id"] == "inner_critic"
