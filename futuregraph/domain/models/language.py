"""Output language for prompts, QA messages and report text."""

from __future__ import annotations

from enum import Enum


class SupportedLanguage(str, Enum):
    """Languages the engine can produce output in.

    Languages:
        EN: English (default and fallback)
        HE: Hebrew
    """

    EN = "en"
    HE = "he"


DEFAULT_LANGUAGE = SupportedLanguage.EN


def normalize_language(value: str | SupportedLanguage | None) -> SupportedLanguage:
    """Coerce a caller-supplied language code into a supported language.

    Unknown or missing codes fall back to English rather than failing,
    so a bad preference never blocks an analysis.

    Args:
        value: Language code ("en", "he"), enum member, or None.

    Returns:
        The matching SupportedLanguage, or DEFAULT_LANGUAGE.
    """
    if isinstance(value, SupportedLanguage):
        return value
    if value:
        try:
            return SupportedLanguage(value.strip().lower())
        except ValueError:
            return DEFAULT_LANGUAGE
    return DEFAULT_LANGUAGE
