from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcq_forge.config import Settings
    from mcq_forge.providers.base import LLMProvider


def get_llm(settings: Settings) -> LLMProvider:
    s = settings
    if s.llm_provider == "gemini":
        from mcq_forge.providers.llm_gemini import GeminiProvider
        return GeminiProvider(api_key=s.resolved_gemini_key(), model=s.llm_model, base_url=s.gemini_url)
    elif s.llm_provider == "ollama":
        from mcq_forge.providers.llm_ollama import OllamaProvider
        return OllamaProvider(base_url=s.ollama_url, model=s.llm_model)
    elif s.llm_provider == "anthropic":
        from mcq_forge.providers.llm_anthropic import AnthropicProvider
        return AnthropicProvider(model=s.llm_model)
    elif s.llm_provider == "openai":
        from mcq_forge.providers.llm_openai import OpenAIProvider
        return OpenAIProvider(model=s.llm_model)
    elif s.llm_provider == "mock":
        from mcq_forge.providers.llm_mock import MockProvider
        return MockProvider(count=s.num_questions, language=s.language)
    raise ValueError(f"Unknown LLM provider: {s.llm_provider}")
