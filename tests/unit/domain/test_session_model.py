"""Unit tests for the Session aggregate and Round."""

from datetime import timedelta

import pytest

from futuregraph.domain.models.session import Session, SessionStatus
from tests.helpers.analysis_factory import (
    BASE_TIME,
    make_analysis,
    make_round,
    make_session,
    session_with_rounds,
)


class TestRound:
    """Tests for Round."""

    def test_rejects_invalid_round_number(self) -> None:
        """Test that a round must be numbered 1..10."""
        with pytest.raises(ValueError, match="round_number"):
            make_round(11, analysis=make_analysis(1))

    def test_is_resolved(self) -> None:
        """Test that resolved means QA-passed and not flagged."""
        assert make_round(1).is_resolved
        assert not make_round(1, passed=False).is_resolved
        assert not make_round(1, requires_reprocessing=True).is_resolved

    def test_rejection_flags_reprocessing(self) -> None:
        """Test that a rejection requests reprocessing."""
        decided = make_round(2).with_decision("Too shallow", False, BASE_TIME)

        assert decided.therapist_approved is False
        assert decided.requires_reprocessing is True
        assert decided.therapist_feedback == "Too shallow"
        assert decided.approval_timestamp == BASE_TIME

    def test_approval_keeps_reprocessing_flag(self) -> None:
        """Test that an approval records the decision but keeps the flag."""
        rejected = make_round(2).with_decision("No", False, BASE_TIME)
        approved = rejected.with_decision(
            "Fine after all", True, BASE_TIME + timedelta(minutes=5)
        )

        assert approved.therapist_approved is True
        assert approved.requires_reprocessing is True
        assert approved.therapist_feedback == "Fine after all"


class TestSessionInvariants:
    """Tests for Session construction checks."""

    def test_new_session_defaults(self) -> None:
        """Test the state of a freshly created session."""
        session = make_session()

        assert session.status == SessionStatus.ACTIVE
        assert session.current_round == 0
        assert session.rounds == ()
        assert session.version == 0
        assert not session.is_complete

    def test_duplicate_round_numbers_rejected(self) -> None:
        """Test that a round number appears at most once."""
        with pytest.raises(ValueError, match="duplicate"):
            make_session((make_round(1), make_round(1)))

    def test_round_beyond_current_round_rejected(self) -> None:
        """Test that current_round covers every stored round."""
        with pytest.raises(ValueError, match="beyond current_round"):
            Session(
                session_id="fg_x",
                user_id="u",
                client_id="c",
                image_ref="img",
                start_time=BASE_TIME,
                current_round=1,
                rounds=(make_round(2),),
            )

    @pytest.mark.parametrize("current_round", [-1, 11])
    def test_current_round_bounds(self, current_round: int) -> None:
        """Test that current_round stays within 0..10."""
        with pytest.raises(ValueError, match="current_round"):
            Session(
                session_id="fg_x",
                user_id="u",
                client_id="c",
                image_ref="img",
                start_time=BASE_TIME,
                current_round=current_round,
            )


class TestSessionUpdates:
    """Tests for the immutable update methods."""

    def test_with_round_appends(self) -> None:
        """Test that a first-time round is appended."""
        session = session_with_rounds(2).with_round(make_round(3))

        assert [r.round_number for r in session.rounds] == [1, 2, 3]
        assert session.current_round == 3

    def test_with_round_replaces_in_place(self) -> None:
        """Test that reprocessing replaces the round and resets the decision."""
        session = make_session(
            (make_round(1), make_round(2, approved=True), make_round(3))
        )
        fresh = make_round(2, passed=False)

        updated = session.with_round(fresh)

        assert [r.round_number for r in updated.rounds] == [1, 2, 3]
        assert updated.get_round(2) is fresh
        assert updated.get_round(2).therapist_approved is False
        assert updated.current_round == 3

    def test_with_round_clears_reprocessing_flag(self) -> None:
        """Test that a fresh analysis replaces a flagged round unflagged."""
        session = make_session((make_round(1, requires_reprocessing=True),))

        updated = session.with_round(make_round(1))

        assert updated.get_round(1).requires_reprocessing is False

    def test_with_round_does_not_mutate_original(self) -> None:
        """Test that the original session is left untouched."""
        session = session_with_rounds(1)

        session.with_round(make_round(2))

        assert session.round_numbers == frozenset({1})

    def test_with_updated_round_requires_existing(self) -> None:
        """Test that only stored rounds can be updated."""
        with pytest.raises(KeyError):
            session_with_rounds(1).with_updated_round(make_round(2))

    def test_approved_round_count(self) -> None:
        """Test that only approved rounds count as completed."""
        session = make_session((make_round(1, approved=True), make_round(2)))

        assert session.approved_round_count == 1
        assert session_with_rounds(10, approved=True).is_complete

    def test_with_language_noop(self) -> None:
        """Test that switching to the same language returns the same object."""
        session = make_session()

        assert session.with_language(session.language) is session

    def test_mark_completed_keeps_first_time(self) -> None:
        """Test that re-completing keeps the first completion time."""
        completed = make_session().mark_completed(BASE_TIME)
        again = completed.mark_completed(BASE_TIME + timedelta(hours=1))

        assert again.status == SessionStatus.COMPLETED
        assert again.completed_at == BASE_TIME

    def test_negative_version_rejected(self) -> None:
        """Test that the concurrency token cannot go negative."""
        with pytest.raises(ValueError, match="version"):
            make_session().with_version(-1)
