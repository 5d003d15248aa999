"""Unit tests for round definitions and language handling."""

import pytest

from futuregraph.domain.models.language import (
    DEFAULT_LANGUAGE,
    SupportedLanguage,
    normalize_language,
)
from futuregraph.domain.models.round_definitions import (
    DIAGNOSTIC_ROUNDS,
    ROUND_DEFINITIONS,
    TOTAL_ROUNDS,
    TREATMENT_ROUNDS,
    get_round_definition,
    is_valid_round_number,
)


class TestRoundDefinitions:
    """Tests for the ten fixed rounds."""

    def test_ten_rounds_defined(self) -> None:
        """Test that every round number has a definition."""
        assert TOTAL_ROUNDS == 10
        assert sorted(ROUND_DEFINITIONS) == list(range(1, 11))

    def test_diagnostic_and_treatment_partition(self) -> None:
        """Test that diagnostic and treatment rounds cover all rounds once."""
        assert set(DIAGNOSTIC_ROUNDS) | set(TREATMENT_ROUNDS) == set(range(1, 11))
        assert not set(DIAGNOSTIC_ROUNDS) & set(TREATMENT_ROUNDS)

    def test_round_names(self) -> None:
        """Test the names used as report labels."""
        assert get_round_definition(1).name == "Visible Layer"
        assert get_round_definition(6).name == "Root Layer"
        assert get_round_definition(7).name == "Voice Dialogue"
        assert get_round_definition(10).name == "Treatment Recommendations"

    def test_treatment_flag(self) -> None:
        """Test that rounds 7-10 are treatment rounds."""
        assert not get_round_definition(6).is_treatment
        assert get_round_definition(7).is_treatment

    @pytest.mark.parametrize("number", [0, 11, -1])
    def test_invalid_round_number(self, number: int) -> None:
        """Test that numbers outside 1..10 are rejected."""
        assert not is_valid_round_number(number)
        with pytest.raises(ValueError, match="between 1 and 10"):
            get_round_definition(number)


class TestNormalizeLanguage:
    """Tests for language normalization."""

    def test_known_codes(self) -> None:
        """Test that supported codes resolve, case-insensitively."""
        assert normalize_language("he") is SupportedLanguage.HE
        assert normalize_language(" EN ") is SupportedLanguage.EN
        assert normalize_language(SupportedLanguage.HE) is SupportedLanguage.HE

    @pytest.mark.parametrize("value", [None, "", "fr", "hebrew"])
    def test_unknown_falls_back_to_english(self, value: str | None) -> None:
        """Test that unknown or missing codes fall back to English."""
        assert normalize_language(value) is DEFAULT_LANGUAGE
        assert DEFAULT_LANGUAGE is SupportedLanguage.EN
