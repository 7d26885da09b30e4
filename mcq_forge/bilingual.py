"""Resolve localized question, option and explanation text for display."""
from __future__ import annotations

from mcq_forge.models import LocalizedText, MatchingPair, Option

FALLBACK_ORDER = ("en", "mr")


def resolve(value: LocalizedText | None, language: str = "mr") -> str:
    """Requested language, then English, then Marathi, then ``""``."""
    if isinstance(value, str):
        return value
    if not isinstance(value, dict):
        return ""
    for code in (language, *FALLBACK_ORDER):
        text = value.get(code)
        if isinstance(text, str) and text:
            return text
    return ""


def option_text(option: Option | None, language: str = "mr") -> str:
    if isinstance(option, MatchingPair):
        return f"{option.left} → {option.right}"
    return resolve(option, language)


def has_both_languages(value: LocalizedText | None) -> bool:
    """True when a language toggle makes sense for *value*."""
    return isinstance(value, dict) and bool(value.get("mr")) and bool(value.get("en"))


def render_question(question, language: str = "mr") -> dict:
    """Display strings for one question in *language*."""
    return {
        "text": resolve(question.text, language),
        "options": [option_text(o, language) for o in question.options],
        "explanation": resolve(question.explanation, language),
        "bilingual": has_both_languages(question.text),
    }
