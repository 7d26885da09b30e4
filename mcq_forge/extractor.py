"""Pull a JSON array of questions out of a noisy model response.

Repairs run in a fixed order, each one a small pure function so it can be
tested on its own:

1. ``strip_code_fences``     -- drop ```` ```json ```` / ```` ``` ```` markers
2. ``isolate_array``         -- greedy match from the first ``[`` to the last ``]``
   (or to the end of the text when no ``]`` follows)
3. ``close_truncated_array`` -- append ``]`` when the reply was cut off

Only these three.  Anything that still fails ``json.loads`` is reported as
a ``parse_error`` together with the candidate text, never guessed at.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field

_log = logging.getLogger("mcq_forge.extract")

EMPTY = "empty"
PARSE_ERROR = "parse_error"

_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


@dataclass
class ExtractResult:
    parsed: list = field(default_factory=list)
    raw: str = ""
    error: str | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.ok:
            return {"parsed": self.parsed, "raw": self.raw}
        d = {"error": self.error, "raw": self.raw}
        if self.detail is not None:
            d["detail"] = self.detail
        return d


def strip_code_fences(text: str) -> str:
    return text.replace("```json", "").replace("```", "").strip()


def isolate_array(text: str) -> str:
    m = _ARRAY_RE.search(text)
    if m:
        return m.group(0)
    # Truncated reply: keep everything from the opening bracket on
    start = text.find("[")
    return text[start:] if start >= 0 else text


def close_truncated_array(text: str) -> str:
    text = text.strip()
    if not text.endswith("]"):
        text += "]"
    return text


REPAIRS = (strip_code_fences, isolate_array, close_truncated_array)


def extract(raw: str | None) -> ExtractResult:
    if not raw:
        return ExtractResult(raw="", error=EMPTY)

    candidate = raw
    for repair in REPAIRS:
        candidate = repair(candidate)

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        _log.info("Parse error: %s", e)
        _log.debug("  Candidate: %.300s", candidate)
        return ExtractResult(raw=candidate, error=PARSE_ERROR, detail=str(e))

    if not isinstance(parsed, list):
        parsed = [parsed]
    return ExtractResult(parsed=parsed, raw=candidate)
