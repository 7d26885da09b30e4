"""Map loosely-typed model output onto ``Question`` objects.

Every field degrades to its own default; a malformed entry never rejects
the rest of the quiz.
"""
from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

from mcq_forge.models import LANGUAGES, MatchingPair, Question, Quiz, QuizMeta

_log = logging.getLogger("mcq_forge.normalize")

MAX_OPTIONS = 4

# "A) Paris", "b. Paris", "C: Paris", "D- Paris".
# Punctuation after the letter is mandatory: "Apple" and "A cat" stay intact.
_ENUMERATOR_RE = re.compile(r"^[A-D][).:-]\s*", re.IGNORECASE)

# Model replies sometimes use the old {"A": ..., "B": ...} pair shape
_PAIR_KEYS = (("left", "right"), ("A", "B"))


def strip_enumerator(text: str) -> str:
    return _ENUMERATOR_RE.sub("", text, count=1).strip()


def _localized(value) -> str | dict:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict) and any(k in value for k in LANGUAGES):
        return {k: str(value[k]) for k in LANGUAGES if value.get(k) is not None}
    return str(value)


def _text(value) -> str:
    return "" if value is None else str(value)


def normalize_option(raw):
    if isinstance(raw, str):
        return strip_enumerator(raw)
    if isinstance(raw, dict):
        for left, right in _PAIR_KEYS:
            if left in raw and right in raw:
                return MatchingPair(_text(raw[left]), _text(raw[right]))
        if any(k in raw for k in LANGUAGES):
            return _localized(raw)
    return strip_enumerator(str(raw))


def _correct_index(raw, option_count: int) -> int:
    if not raw:
        return 0
    if isinstance(raw, str) and raw.strip().isdigit():
        raw = int(raw.strip())
    elif isinstance(raw, float) and raw.is_integer():
        raw = int(raw)
    if isinstance(raw, bool) or not isinstance(raw, int):
        _log.warning("correct_index %r is not an integer; defaulting to 0", raw)
        return 0
    if not 0 <= raw < max(option_count, 1):
        # Such a question scores as if the first option were right
        _log.warning("correct_index %d out of range for %d options; defaulting to 0", raw, option_count)
        return 0
    return raw


def normalize_question(raw) -> Question:
    if not isinstance(raw, dict):
        _log.warning("Skipping malformed question entry of type %s", type(raw).__name__)
        raw = {}
    options = raw.get("options")
    if not isinstance(options, list):
        options = []
    normalized = [normalize_option(o) for o in options[:MAX_OPTIONS]]
    return Question(
        text=_localized(raw.get("question")),
        options=normalized,
        correct_index=_correct_index(raw.get("correct_index"), len(normalized)),
        explanation=_localized(raw.get("explanation")),
    )


def normalize(raw_questions) -> list[Question]:
    return [normalize_question(q) for q in (raw_questions or [])]


def normalize_quiz(raw_questions, meta: QuizMeta | None = None) -> Quiz:
    questions = normalize(raw_questions)
    meta = meta or QuizMeta()
    meta.num_questions = len(questions)
    if not meta.generated_at:
        meta.generated_at = datetime.now(timezone.utc).isoformat()
    return Quiz(questions=questions, meta=meta)


def quiz_from_dict(payload: dict) -> Quiz:
    """Rebuild a quiz saved with ``Quiz.to_dict``."""
    meta_raw = payload.get("meta") or {}
    known = QuizMeta.__dataclass_fields__.keys()
    meta = QuizMeta(**{k: v for k, v in meta_raw.items() if k in known})
    questions = normalize(payload.get("questions"))
    return Quiz(questions=questions, meta=meta)
