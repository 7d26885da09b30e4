from __future__ import annotations

import os

from mcq_forge.providers.base import GenerationError, LLMProvider


class OpenAIProvider(LLMProvider):
    def __init__(self, model: str = "gpt-4o-mini"):
        import openai
        self.client = openai.AsyncOpenAI(
            api_key=os.environ.get("OPENAI_API_KEY", ""),
        )
        self.model = model

    async def generate(self, prompt: str, temperature: float = 0.7) -> str:
        import openai
        try:
            resp = await self.client.chat.completions.create(
                model=self.model,
                temperature=temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.OpenAIError as e:
            raise GenerationError(f"OpenAI API error: {e}", str(e)) from e
        return resp.choices[0].message.content or ""

    def name(self) -> str:
        return f"openai/{self.model}"
