from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "llm_provider": "gemini",
    "llm_model": "gemini-1.5-flash",
    "gemini_key": "",
    "gemini_url": "https://generativelanguage.googleapis.com/v1beta",
    "ollama_url": "http://localhost:11434",
    "temperature": 0.7,
    "language": "mr",
    "difficulty": "medium",
    "num_questions": 10,
    "chunk_size": 1200,
    "negative_mark": False,
    "neg_value": 0.33,
    "ocr_languages": "eng+mar",
    "db_path": "quiz.db",
}


@dataclass
class Settings:
    llm_provider: str = DEFAULTS["llm_provider"]
    llm_model: str = DEFAULTS["llm_model"]
    gemini_key: str = DEFAULTS["gemini_key"]
    gemini_url: str = DEFAULTS["gemini_url"]
    ollama_url: str = DEFAULTS["ollama_url"]
    temperature: float = DEFAULTS["temperature"]
    language: str = DEFAULTS["language"]
    difficulty: str = DEFAULTS["difficulty"]
    num_questions: int = DEFAULTS["num_questions"]
    chunk_size: int = DEFAULTS["chunk_size"]
    negative_mark: bool = DEFAULTS["negative_mark"]
    neg_value: float = DEFAULTS["neg_value"]
    ocr_languages: str = DEFAULTS["ocr_languages"]
    db_path: str = DEFAULTS["db_path"]

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def db_full_path(self) -> Path:
        return self.project_root / self.db_path

    def resolved_gemini_key(self) -> str:
        return self.gemini_key or os.environ.get("GEMINI_API_KEY", "")

    def to_dict(self) -> dict:
        return {
            "llm_provider": self.llm_provider,
            "llm_model": self.llm_model,
            "gemini_key": self.gemini_key,
            "gemini_url": self.gemini_url,
            "ollama_url": self.ollama_url,
            "temperature": self.temperature,
            "language": self.language,
            "difficulty": self.difficulty,
            "num_questions": self.num_questions,
            "chunk_size": self.chunk_size,
            "negative_mark": self.negative_mark,
            "neg_value": self.neg_value,
            "ocr_languages": self.ocr_languages,
            "db_path": self.db_path,
        }

    def public_dict(self) -> dict:
        """``to_dict`` with the API key masked, for API responses."""
        d = self.to_dict()
        key = d["gemini_key"]
        d["gemini_key"] = f"***{key[-4:]}" if len(key) >= 4 else ("***" if key else "")
        return d


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text())
        # Migrate: geminiKey (browser-era settings) -> gemini_key
        if "geminiKey" in raw:
            raw.setdefault("gemini_key", raw["geminiKey"])
            del raw["geminiKey"]
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")
