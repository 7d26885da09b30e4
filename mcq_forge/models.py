from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Union

LANGUAGES = ("mr", "en")
MODES = ("generate", "extract")

# Plain string, or {"mr": ..., "en": ...}
LocalizedText = Union[str, dict]


@dataclass(frozen=True)
class MatchingPair:
    """A "match the pairs" option, shown as ``left → right``."""
    left: str
    right: str

    def to_dict(self) -> dict:
        return {"left": self.left, "right": self.right}


Option = Union[str, dict, MatchingPair]


@dataclass
class Question:
    text: LocalizedText
    options: list[Option]
    correct_index: int
    explanation: LocalizedText

    def to_dict(self) -> dict:
        return {
            "question": self.text,
            "options": [o.to_dict() if isinstance(o, MatchingPair) else o for o in self.options],
            "correct_index": self.correct_index,
            "explanation": self.explanation,
        }


@dataclass
class QuizMeta:
    topic: str = "General"
    language: str = "mr"
    difficulty: str = "medium"
    mode: str = "generate"  # generate | extract
    num_questions: int = 0
    generated_at: str = ""
    id: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Quiz:
    questions: list[Question]
    meta: QuizMeta = field(default_factory=QuizMeta)

    def __len__(self) -> int:
        return len(self.questions)

    def to_dict(self) -> dict:
        return {
            "meta": self.meta.to_dict(),
            "questions": [q.to_dict() for q in self.questions],
        }


@dataclass
class QuestionResult:
    index: int
    correct: bool
    chosen: int | None
    explanation: LocalizedText


@dataclass
class ScoreResult:
    score: float
    total: int
    per_question: list[QuestionResult]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Attempt:
    timestamp: str
    topic: str
    score: float
    total: int
    num_questions: int
    language: str
    difficulty: str
    mode: str
    quiz_id: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)
