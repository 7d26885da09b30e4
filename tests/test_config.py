"""Tests for configuration loading and saving."""
from __future__ import annotations

import json
from unittest.mock import patch

from mcq_forge.config import DEFAULTS, Settings, load_settings, save_settings


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.llm_provider == "gemini"
        assert s.language == "mr"
        assert s.num_questions == 10
        assert s.negative_mark is False
        assert s.neg_value == 0.33

    def test_to_dict(self):
        d = Settings().to_dict()
        assert d["llm_provider"] == "gemini"
        assert len(d) == 14  # all fields present
        assert d == DEFAULTS

    def test_to_dict_roundtrip(self):
        s = Settings(llm_provider="ollama", num_questions=25)
        s2 = Settings(**s.to_dict())
        assert s2.llm_provider == "ollama"
        assert s2.num_questions == 25

    def test_db_full_path(self):
        s = Settings(db_path="data/q.db")
        assert s.db_full_path == s.project_root / "data" / "q.db"

    def test_gemini_key_from_env(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        assert Settings().resolved_gemini_key() == "env-key"
        assert Settings(gemini_key="cfg-key").resolved_gemini_key() == "cfg-key"


class TestPublicDict:
    def test_key_masked(self):
        d = Settings(gemini_key="AIzaSyABCDEF1234").public_dict()
        assert d["gemini_key"] == "***1234"

    def test_short_key(self):
        assert Settings(gemini_key="ab").public_dict()["gemini_key"] == "***"

    def test_no_key(self):
        assert Settings().public_dict()["gemini_key"] == ""


class TestLoadSaveSettings:
    def test_load_from_file(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"llm_provider": "openai", "num_questions": 30}))

        with patch("mcq_forge.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.llm_provider == "openai"
        assert s.num_questions == 30
        # Defaults for unspecified fields
        assert s.language == "mr"

    def test_load_missing_file(self, tmp_path):
        with patch("mcq_forge.config.CONFIG_PATH", tmp_path / "nonexistent.json"):
            s = load_settings()
        assert s.llm_provider == "gemini"

    def test_unknown_keys_ignored(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"theme": "dark", "language": "en"}))
        with patch("mcq_forge.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.language == "en"
        assert not hasattr(s, "theme")

    def test_legacy_key_migrated(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"geminiKey": "old-key"}))
        with patch("mcq_forge.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.gemini_key == "old-key"

    def test_save_and_reload(self, tmp_path):
        config_path = tmp_path / "config.json"
        with patch("mcq_forge.config.CONFIG_PATH", config_path):
            save_settings(Settings(negative_mark=True, neg_value=0.25))
            s = load_settings()
        assert s.negative_mark is True
        assert s.neg_value == 0.25
        assert json.loads(config_path.read_text())["neg_value"] == 0.25
