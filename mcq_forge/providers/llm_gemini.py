from __future__ import annotations

import json
import logging
import time

import httpx

from mcq_forge.providers.base import GenerationError, LLMProvider

log = logging.getLogger("mcq_forge.llm")

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


def response_text(data: dict) -> str:
    """Join the text parts of the first candidate.

    Falls back to the serialized response so the extractor always has
    something to work on.
    """
    candidates = []
    if isinstance(data, dict):
        candidates = data.get("candidates") or []
    parts = []
    if candidates and isinstance(candidates[0], dict):
        parts = (candidates[0].get("content") or {}).get("parts") or []
    raw = "\n".join(p.get("text") or "" for p in parts if isinstance(p, dict))
    if not raw:
        raw = json.dumps(data, ensure_ascii=False)
    return raw


class GeminiProvider(LLMProvider):
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash",
        base_url: str = GEMINI_BASE_URL,
        timeout: float = 120.0,
    ):
        if not api_key:
            raise ValueError("No Gemini key provided")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def generate(self, prompt: str, temperature: float = 0.7) -> str:
        log.info("── PROMPT (%s) ──\n%s", self.model, prompt)
        t0 = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(
                    f"{self.base_url}/models/{self.model}:generateContent",
                    params={"key": self.api_key},
                    json={
                        "contents": [{"parts": [{"text": prompt}]}],
                        "generationConfig": {"temperature": temperature},
                    },
                )
        except httpx.HTTPError as e:
            raise GenerationError(f"Gemini request failed: {e}") from e
        if resp.is_error:
            raise GenerationError(f"Gemini API error: {resp.text}", resp.text)
        try:
            data = resp.json()
        except ValueError as e:
            raise GenerationError(f"Gemini returned a non-JSON body: {e}", resp.text) from e
        raw = response_text(data)
        log.info("── RESPONSE (%.1fs) ──\n%s", time.monotonic() - t0, raw)
        return raw

    def name(self) -> str:
        return f"gemini/{self.model}"
