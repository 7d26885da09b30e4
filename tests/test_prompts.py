"""Tests for prompt templates and formatting."""
from __future__ import annotations

import pytest

from mcq_forge.prompts import (
    ENGLISH_PROMPT,
    MARATHI_PROMPT,
    build_prompt,
)


class TestBuildPrompt:
    def test_english_generate(self):
        prompt = build_prompt("The Indus valley.", 5, mode="generate", language="en")
        assert prompt.startswith("Read the content carefully.")
        assert "Generate 5 competitive-level MCQs" in prompt
        assert prompt.endswith("The Indus valley.")
        assert '"correct_index":2' in prompt

    def test_english_extract(self):
        prompt = build_prompt("Q1. Who ...", 50, mode="extract", language="en")
        assert "Extract the existing MCQs exactly" in prompt
        assert "Generate" not in prompt

    def test_marathi_generate(self):
        prompt = build_prompt("सिंधू संस्कृती", 7, mode="generate", language="mr")
        assert "MPSC स्तरावरील 7 बहुपर्यायी प्रश्न" in prompt
        assert '"correct_index":1' in prompt
        assert prompt.endswith("सिंधू संस्कृती")

    def test_marathi_extract(self):
        prompt = build_prompt("प्रश्नसंच", 50, mode="extract", language="mr")
        assert "जसेच्या तसे" in prompt

    def test_unknown_language_uses_english(self):
        assert build_prompt("x", 3, language="hi") == build_prompt("x", 3, language="en")

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            build_prompt("x", 3, mode="summarize")

    def test_json_contract_in_english(self):
        # Field names stay English in every locale
        for lang in ("mr", "en"):
            prompt = build_prompt("x", 3, language=lang)
            for key in ('"question"', '"options"', '"correct_index"', '"explanation"'):
                assert key in prompt

    def test_text_with_braces_survives(self):
        prompt = build_prompt("set {a, b}", 3, language="en")
        assert prompt.endswith("set {a, b}")


class TestPromptTemplates:
    def test_placeholders(self):
        for template in (MARATHI_PROMPT, ENGLISH_PROMPT):
            assert "{lead}" in template
            assert "{example}" in template
            assert "{text}" in template
