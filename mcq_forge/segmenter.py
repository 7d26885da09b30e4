"""Split source text into bounded chunks for prompting."""
from __future__ import annotations

from collections.abc import Iterator

DEFAULT_CHUNK_CHARS = 1200


def iter_segments(text: str, max_chunk_chars: int = DEFAULT_CHUNK_CHARS) -> Iterator[str]:
    """Yield whitespace-token chunks of at most *max_chunk_chars* characters.

    Each token counts its length plus one separator.  A chunk is closed
    before a token that would push it past the bound, so only a chunk
    holding a single oversized token can exceed it.  Tokens are never split.
    """
    chunk: list[str] = []
    count = 0
    for token in (text or "").split():
        cost = len(token) + 1
        if chunk and count + cost > max_chunk_chars:
            yield " ".join(chunk)
            chunk = []
            count = 0
        chunk.append(token)
        count += cost
    if chunk:
        yield " ".join(chunk)


def segment(text: str, max_chunk_chars: int = DEFAULT_CHUNK_CHARS) -> list[str]:
    return list(iter_segments(text, max_chunk_chars))
