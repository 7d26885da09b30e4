"""Offline provider for trying the app without an API key."""
from __future__ import annotations

import json
import re

from mcq_forge.providers.base import LLMProvider


def mock_questions(n: int = 5, language: str = "mr") -> list[dict]:
    return [
        {
            "question": f"Mock Q{i + 1} ({language})",
            "options": ["A", "B", "C", "D"],
            "correct_index": i % 4,
            "explanation": "Mock explanation",
        }
        for i in range(n)
    ]


class MockProvider(LLMProvider):
    def __init__(self, count: int = 5, language: str = "mr"):
        self.count = count
        self.language = language

    async def generate(self, prompt: str, temperature: float = 0.7) -> str:
        # Honour the count the prompt asks for when there is one
        m = re.search(r"(?:Generate|MPSC स्तरावरील) (\d+)", prompt)
        n = int(m.group(1)) if m else self.count
        return json.dumps(mock_questions(n, self.language), indent=2, ensure_ascii=False)

    def name(self) -> str:
        return "mock"
