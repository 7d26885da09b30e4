"""Drive the LLM from source text to a normalized quiz."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from mcq_forge.extractor import ExtractResult, extract
from mcq_forge.models import Quiz, QuizMeta
from mcq_forge.normalizer import normalize_quiz
from mcq_forge.prompts import build_prompt
from mcq_forge.providers.llm_mock import mock_questions

if TYPE_CHECKING:
    from mcq_forge.providers.base import LLMProvider

_log = logging.getLogger("mcq_forge.qgen")

# A question bank is extracted wholesale, up to this many questions
EXTRACT_QUESTION_COUNT = 50


@dataclass
class GenerationOutcome:
    raw: str
    extracted: ExtractResult
    quiz: Quiz | None

    @property
    def ok(self) -> bool:
        return self.quiz is not None


def question_count(mode: str, requested: int) -> int:
    return EXTRACT_QUESTION_COUNT if mode == "extract" else requested


def build_context(
    chunks: list[str],
    topic: str,
    mode: str = "generate",
    num_questions: int = 10,
    use_ingested: bool = False,
) -> str:
    """Pick the text the prompt is built around.

    A question bank always uses every ingested chunk.  Generation uses the
    first *num_questions* chunks only when *use_ingested* is set (right
    after an ingest); otherwise the topic alone.
    """
    if mode == "extract":
        return "\n\n".join(chunks)
    if use_ingested:
        return "\n\n".join(chunks[:num_questions]) or topic
    return topic


async def generate_quiz(
    llm: LLMProvider,
    text: str,
    num_questions: int = 10,
    language: str = "mr",
    mode: str = "generate",
    topic: str = "General",
    difficulty: str = "medium",
    temperature: float = 0.7,
) -> GenerationOutcome:
    """Prompt *llm* and turn its reply into a quiz.

    ``GenerationError`` from the provider propagates.  An unparseable reply
    yields an outcome with ``quiz=None`` and the extractor's error kind so
    the caller can show the raw output.
    """
    prompt = build_prompt(text, num_questions, mode, language)
    _log.info("Generate %s: %d questions (%s, %s)", mode, num_questions, language, llm.name())
    raw = await llm.generate(prompt, temperature=temperature)

    extracted = extract(raw)
    if not extracted.ok:
        _log.info("  Extraction failed: %s", extracted.error)
        return GenerationOutcome(raw=raw, extracted=extracted, quiz=None)

    meta = QuizMeta(
        topic=topic,
        language=language,
        difficulty=difficulty,
        mode=mode,
        generated_at=datetime.now(timezone.utc).isoformat(),
    )
    quiz = normalize_quiz(extracted.parsed, meta)
    _log.info("  Quiz ready: %d questions", len(quiz))
    return GenerationOutcome(raw=raw, extracted=extracted, quiz=quiz)


def mock_quiz(n: int = 5, language: str = "mr", mode: str = "generate") -> Quiz:
    meta = QuizMeta(topic="Mock", language=language, difficulty="mock", mode=mode)
    return normalize_quiz(mock_questions(n, language), meta)
