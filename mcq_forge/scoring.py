"""Score an answer set against a quiz, with optional negative marking."""
from __future__ import annotations

import math
from collections.abc import Sequence

from mcq_forge.models import Question, QuestionResult, Quiz, ScoreResult


def _penalty(neg_value) -> float:
    try:
        value = float(neg_value)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def _is_index(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def score_quiz(
    quiz: Quiz | Sequence[Question],
    answers: Sequence[int | None] | None,
    negative_mark: bool = False,
    neg_value: float = 0.0,
) -> ScoreResult:
    """Score *answers* slot by slot.

    An unanswered slot (``None``, missing, or anything that is not an
    integer index) is neither right nor penalised.  Wrong answers cost
    *neg_value* when *negative_mark* is on.
    The running total may dip below zero; the final score is clamped at 0
    and rounded to two decimals.
    """
    questions = quiz.questions if isinstance(quiz, Quiz) else list(quiz or [])
    answers = list(answers or [])
    penalty = _penalty(neg_value) if negative_mark else 0.0

    raw = 0.0
    results: list[QuestionResult] = []
    for i, q in enumerate(questions):
        chosen = answers[i] if i < len(answers) else None
        if not _is_index(chosen):
            chosen = None
        correct = chosen is not None and chosen == q.correct_index
        if correct:
            raw += 1
        elif chosen is not None:
            raw -= penalty
        results.append(QuestionResult(index=i, correct=correct, chosen=chosen, explanation=q.explanation))

    return ScoreResult(score=round(max(raw, 0.0), 2), total=len(questions), per_question=results)
