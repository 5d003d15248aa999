"""Localized fixed text for prompts, QA messages and report labels.

Lookups fall back to English, then to the key itself, so a missing
translation degrades to readable output instead of an error. Templates
use str.format placeholders.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from futuregraph.domain.models.language import (
    DEFAULT_LANGUAGE,
    SupportedLanguage,
    normalize_language,
)
from futuregraph.domain.models.law_registry import LAWS_BY_ID
from futuregraph.domain.models.round_definitions import ROUND_DEFINITIONS

EN = SupportedLanguage.EN
HE = SupportedLanguage.HE

_PHRASES: Mapping[str, Mapping[SupportedLanguage, str]] = {
    # Prompt construction
    "system_intro": {
        EN: "You are an AI therapist assistant implementing the FutureGraph™ Pro+ methodology.",
        HE: "אתה עוזר AI למטפלים המיישם את מתודולוגיית FutureGraph™ Pro+.",
    },
    "laws_heading": {
        EN: "FUTUREGRAPH LAWS TO APPLY:",
        HE: "חוקי FutureGraph שיש להחיל:",
    },
    "analysis_structure": {
        EN: "ANALYSIS STRUCTURE FOR THIS ROUND:",
        HE: "מבנה הניתוח עבור סבב זה:",
    },
    "provide_json": {
        EN: "Provide your analysis in JSON format with the following structure:",
        HE: "ספק את הניתוח בפורמט JSON עם המבנה הבא:",
    },
    "previous_findings": {
        EN: "PREVIOUS ROUND FINDINGS TO CONSIDER:",
        HE: "ממצאי סבבים קודמים שיש לקחת בחשבון:",
    },
    "analyze_prompt": {
        EN: "Analyze this handwriting sample for Round {number}: {name}",
        HE: "נתח את דגימת כתב היד עבור סבב {number}: {name}",
    },
    "client_context": {EN: "Client Context", HE: "הקשר לקוח"},
    "additional_context": {EN: "Additional Context", HE: "הקשר נוסף"},
    "apply_laws": {
        EN: "Apply all FutureGraph™ Pro+ laws and provide detailed analysis focusing on the {name} layer.",
        HE: "החל את כל חוקי FutureGraph™ Pro+ וספק ניתוח מפורט המתמקד בשכבה {name}.",
    },
    "respond_in_language": {EN: "", HE: "השב בעברית."},
    # QA validation
    "one_layer_violation": {
        EN: "One-Layer Influence violated: Round {source_round} → Round {target_round}",
        HE: "הפרת מגבלת השפעה של שכבה אחת: סבב {source_round} → סבב {target_round}",
    },
    "missing_justification": {
        EN: "Sign {position} missing required justification or therapeutic relevance",
        HE: "סימן {position}: חסרה הנמקה נדרשת או רלוונטיות טיפולית",
    },
    "voice_mask_violation": {
        EN: "Voice ≠ Mask principle violated: '{identifier}' is classified as both voice and mask",
        HE: "עקרון קול ≠ מסכה הופר: '{identifier}' מסווג גם כקול וגם כמסכה",
    },
    # Report
    "round_label": {EN: "Round {number}: {name}", HE: "סבב {number}: {name}"},
    "executive_summary": {
        EN: (
            "Based on comprehensive FutureGraph™ Pro+ analysis across 10 diagnostic "
            "rounds, the client presents with {visible} evolving to {root}. "
            "Primary treatment recommendations include {treatment}."
        ),
        HE: (
            "בהתבסס על ניתוח מקיף של FutureGraph™ Pro+ לאורך 10 סבבים דיאגנוסטיים, "
            "המטופל מציג {visible} המתפתחת ל{root}. "
            "המלצות הטיפול העיקריות כוללות {treatment}."
        ),
    },
    "complex_patterns": {EN: "complex patterns", HE: "דפוסים מורכבים"},
    "deep_seated_identity": {
        EN: "deep-seated identity structures",
        HE: "מבני זהות עמוקים",
    },
    "targeted_interventions": {
        EN: "targeted interventions",
        HE: "התערבויות ממוקדות",
    },
    "voice_dialogue_recommendation": {
        EN: "Voice dialogue work to integrate internal parts",
        HE: "עבודת דיאלוג קול לשילוב חלקים פנימיים",
    },
    "defense_exploration_recommendation": {
        EN: "Exploration of defense mechanisms and authentic self",
        HE: "חקר מנגנוני הגנה והעצמי האותנטי",
    },
    "contract_goals_placeholder": {
        EN: "To be determined in collaboration with client",
        HE: "להיקבע בשיתוף עם המטופל",
    },
    "contract_approach": {
        EN: "Integrative approach based on FutureGraph™ Pro+ findings",
        HE: "גישת אינטגרציה המבוססת על ממצאי FutureGraph™ Pro+",
    },
    "contract_timeline": {
        EN: "Recommended 12-16 sessions with progress reviews every 4 sessions",
        HE: "מומלצות 12–16 מפגשים עם ביקורות התקדמות כל 4 מפגשים",
    },
    "voice_mask_integration": {
        EN: "Analysis of how voices and masks interact to form current personality structure",
        HE: "ניתוח כיצד קולות ומסכות משתלבים כדי ליצור מבנה אישיות נוכחי",
    },
    # Feedback
    "feedback_approved": {EN: "Round approved", HE: "הסבב אושר"},
    "feedback_rejected": {
        EN: "Round marked for reprocessing",
        HE: "הסבב סומן לעיבוד מחדש",
    },
}

_ROUND_NAMES_HE: Mapping[int, str] = {
    1: "שכבה גלויה",
    2: "שכבה מודעת",
    3: "שכבת התת-מודע",
    4: "שכבה נסתרת",
    5: "שכבת צל",
    6: "שכבת שורש",
    7: "דיאלוג קולות",
    8: "ניתוח מסכות",
    9: "אינטגרציה",
    10: "המלצות טיפול",
}

_ROUND_FOCUSES_HE: Mapping[int, str] = {
    1: "רשמים ראשוניים, דפוסים ברורים בכתב היד",
    2: "דפוסים שטחיים, התנהגויות ובחירות מודעות",
    3: "מניעים עמוקים, רצונות חבויים ודחפים",
    4: "דינמיקות ליבה, תוכן מודחק וקונפליקטים",
    5: "דפוסים לא מודעים, אלמנטים של צל והשלכות",
    6: "זהות יסודית, העצמי המרכזי ומהות",
    7: "קולות פנימיים, תת-אישיות ועבודת חלקים",
    8: "מנגנוני הגנה, פרסונות ואסטרטגיות הגנה",
    9: "סינתזה של כל השכבות לכדי הבנה קוהרנטית",
    10: "התערבויות טיפוליות ותכנון טיפול",
}

_LAW_NAMES_HE: Mapping[str, str] = {
    "controlled_flexibility": "חוק גמישות מבוקרת",
    "bi_directional_time": "חוק זמן דו-כיווני",
    "one_layer_influence": "מגבלת השפעה של שכבה אחת",
    "layer_synchronization": "חוק סנכרון שכבות",
    "dynamic_identity_anchor": "עוגן זהות דינמי",
    "voice_not_mask": "עקרון קול ≠ מסכה",
    "sign_flexibility": "עקרון גמישות סימנים",
    "sync_before_treatment": "חוק סנכרון תוצרים לפני טיפול",
    "secured_voice_dialogue": "חוק דיאלוג קול מאובטח",
    "inter_round_pause": "חוק הפסקה בין סבבים",
    "round_control": "טבלת בקרת סבבים",
}

_LAW_DESCRIPTIONS_HE: Mapping[str, str] = {
    "controlled_flexibility": "מאפשר הכללה מבוקרת של סימנים גרפולוגיים משניים מעבר לאינדיקטורים המרכזיים",
    "bi_directional_time": "קובע השפעה בין ממצאים מוקדמים ומאוחרים",
    "one_layer_influence": "תובנות יכולות להשפיע באופן רטרואקטיבי רק על שכבה אחת קודמת",
    "layer_synchronization": "פירוש עמוק חייב להדהד מהשכבה הגלויה",
    "dynamic_identity_anchor": "הזהות המרכזית של המטופל מתעדכנת בכל סיבוב",
    "voice_not_mask": "קול = סתירה פנימית, מסכה = הגנה מפני חוץ",
    "sign_flexibility": "מאפשר הכללת סימנים אם הם תואמים רגשית/נרטיבית",
    "sync_before_treatment": "כל התוצרים הדיאגנוסטיים חייבים להסתיים לפני סבבים 7–10",
    "secured_voice_dialogue": "קול תקף רק אם מושרש במסכה, טראומה או חוזה טיפולי",
    "inter_round_pause": "אין מעבר אוטומטי בין סבבים",
    "round_control": "הערך התנגשויות, עקביות, עומס רגשי ותוקף",
}


def phrase(
    key: str,
    language: SupportedLanguage | str | None = DEFAULT_LANGUAGE,
    **values: Any,
) -> str:
    """Render a fixed phrase in the requested language.

    Args:
        key: Phrase key.
        language: Target language; unknown codes fall back to English.
        **values: Template values for str.format.

    Returns:
        The rendered phrase, or the key itself if it is unknown.
    """
    entry = _PHRASES.get(key)
    if entry is None:
        return key
    lang = normalize_language(language)
    template = entry.get(lang, entry[DEFAULT_LANGUAGE])
    return template.format(**values) if values else template


def round_name(round_number: int, language: SupportedLanguage | str | None = None) -> str:
    """Localized name of a round, e.g. "Visible Layer"."""
    if normalize_language(language) == HE and round_number in _ROUND_NAMES_HE:
        return _ROUND_NAMES_HE[round_number]
    definition = ROUND_DEFINITIONS.get(round_number)
    return definition.name if definition else f"Round {round_number}"


def round_focus(round_number: int, language: SupportedLanguage | str | None = None) -> str:
    """Localized analytical focus of a round."""
    if normalize_language(language) == HE and round_number in _ROUND_FOCUSES_HE:
        return _ROUND_FOCUSES_HE[round_number]
    definition = ROUND_DEFINITIONS.get(round_number)
    return definition.focus if definition else ""


def round_label(round_number: int, language: SupportedLanguage | str | None = None) -> str:
    """Report section label, e.g. "Round 1: Visible Layer"."""
    return phrase(
        "round_label",
        language,
        number=round_number,
        name=round_name(round_number, language),
    )


def law_name(law_id: str, language: SupportedLanguage | str | None = None) -> str:
    """Localized law name; falls back to the registry name, then the id."""
    if normalize_language(language) == HE and law_id in _LAW_NAMES_HE:
        return _LAW_NAMES_HE[law_id]
    law = LAWS_BY_ID.get(law_id)
    return law.name if law else law_id


def law_description(law_id: str, language: SupportedLanguage | str | None = None) -> str:
    """Localized law description; empty if the law is unknown."""
    if normalize_language(language) == HE and law_id in _LAW_DESCRIPTIONS_HE:
        return _LAW_DESCRIPTIONS_HE[law_id]
    law = LAWS_BY_ID.get(law_id)
    return law.description if law else ""
