from __future__ import annotations

import os

from mcq_forge.providers.base import GenerationError, LLMProvider


class AnthropicProvider(LLMProvider):
    def __init__(self, model: str = "claude-sonnet-4-20250514", max_tokens: int = 8192):
        import anthropic
        self.client = anthropic.AsyncAnthropic(
            api_key=os.environ.get("ANTHROPIC_API_KEY", ""),
        )
        self.model = model
        self.max_tokens = max_tokens

    async def generate(self, prompt: str, temperature: float = 0.7) -> str:
        import anthropic
        try:
            message = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            raise GenerationError(f"Anthropic API error: {e}", str(e)) from e
        return "\n".join(block.text for block in message.content if getattr(block, "text", None))

    def name(self) -> str:
        return f"anthropic/{self.model}"
