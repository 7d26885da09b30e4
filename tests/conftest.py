"""Shared test fixtures."""
from __future__ import annotations

import json

import pytest

from mcq_forge.db import Database
from mcq_forge.models import Attempt, MatchingPair, Question, Quiz, QuizMeta


@pytest.fixture
def tmp_db(tmp_path):
    """Create a fresh temporary database."""
    db = Database(tmp_path / "test.db")
    yield db
    db.close()


@pytest.fixture
def raw_questions():
    """Model output as it typically arrives: mixed option shapes."""
    return [
        {
            "question": "What is the capital of France?",
            "options": ["A) Paris", "B) Lyon", "C) Nice", "D) Lille"],
            "correct_index": 0,
            "explanation": "Paris has been the capital since 987.",
        },
        {
            "question": {"mr": "महाराष्ट्राची राजधानी कोणती?", "en": "What is the capital of Maharashtra?"},
            "options": ["पुणे", "मुंबई", "नागपूर", "नाशिक"],
            "correct_index": 1,
            "explanation": {"mr": "मुंबई ही राजधानी आहे.", "en": "Mumbai is the capital."},
        },
        {
            "question": "Match the rivers with their states.",
            "options": [
                {"left": "Godavari", "right": "Maharashtra"},
                {"left": "Kaveri", "right": "Karnataka"},
                {"left": "Narmada", "right": "Madhya Pradesh"},
                {"left": "Ganga", "right": "Uttar Pradesh"},
            ],
            "correct_index": 2,
            "explanation": "All pairs are listed by origin state.",
        },
    ]


@pytest.fixture
def raw_response(raw_questions):
    """A model reply wrapped in prose and a code fence."""
    return "Here are your questions:\n```json\n" + json.dumps(raw_questions, ensure_ascii=False) + "\n```\nGood luck!"


@pytest.fixture
def sample_quiz():
    return Quiz(
        questions=[
            Question("Q1", ["a", "b", "c", "d"], 0, "E1"),
            Question({"mr": "प्र2", "en": "Q2"}, ["a", "b", "c", "d"], 1, {"mr": "स्प2", "en": "E2"}),
            Question("Q3", [MatchingPair("x", "1"), MatchingPair("y", "2"), "c", "d"], 2, "E3"),
        ],
        meta=QuizMeta(topic="Geography", language="en", difficulty="easy", mode="generate",
                      num_questions=3, generated_at="2026-01-01T00:00:00+00:00"),
    )


@pytest.fixture
def sample_attempt():
    return Attempt(
        timestamp="2026-01-01T10:00:00+00:00",
        topic="Geography",
        score=2.0,
        total=3,
        num_questions=3,
        language="en",
        difficulty="easy",
        mode="generate",
    )
