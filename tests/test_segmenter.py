"""Tests for text segmentation."""
from __future__ import annotations

import types

from mcq_forge.segmenter import iter_segments, segment


class TestSegment:
    def test_short_text_single_chunk(self):
        assert segment("one two three") == ["one two three"]

    def test_empty_text(self):
        assert segment("") == []
        assert segment("   \n\t ") == []

    def test_none_text(self):
        assert segment(None) == []

    def test_whitespace_normalized(self):
        assert segment("  alpha\n\nbeta\tgamma  ") == ["alpha beta gamma"]

    def test_splits_on_bound(self):
        # Each token costs 5 (4 chars + separator)
        text = " ".join(["word"] * 10)
        chunks = segment(text, max_chunk_chars=12)
        assert chunks == ["word word"] * 5

    def test_chunks_within_bound(self):
        text = " ".join(f"tok{i}" for i in range(500))
        for chunk in segment(text, max_chunk_chars=50):
            assert len(chunk) <= 50

    def test_tokens_reproduced_exactly(self):
        text = "The  quick brown\nfox jumps over\tthe lazy dog " * 40
        chunks = segment(text, max_chunk_chars=37)
        assert " ".join(chunks).split() == text.split()
        assert " ".join(chunks) == " ".join(text.split())

    def test_oversized_token_kept_whole(self):
        big = "x" * 50
        chunks = segment(f"a {big} b", max_chunk_chars=10)
        assert chunks == ["a", big, "b"]

    def test_last_partial_chunk_emitted(self):
        chunks = segment("aaaa bbbb cccc", max_chunk_chars=10)
        assert chunks == ["aaaa bbbb", "cccc"]

    def test_default_bound(self):
        text = " ".join(["abcdefghi"] * 300)  # 3000 chars of cost
        chunks = segment(text)
        assert len(chunks) == 3
        assert all(len(c) <= 1200 for c in chunks)


class TestIterSegments:
    def test_is_generator(self):
        gen = iter_segments("a b c")
        assert isinstance(gen, types.GeneratorType)
        assert list(gen) == ["a b c"]
        assert list(gen) == []  # exhausted, not restartable
