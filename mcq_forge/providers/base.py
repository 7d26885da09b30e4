from __future__ import annotations

from abc import ABC, abstractmethod


class GenerationError(Exception):
    """The text-generation service failed or answered with a non-success status."""

    def __init__(self, message: str, payload: str = ""):
        super().__init__(message)
        self.payload = payload


class LLMProvider(ABC):
    @abstractmethod
    async def generate(self, prompt: str, temperature: float = 0.7) -> str:
        ...

    @abstractmethod
    def name(self) -> str:
        ...
