"""Cleanup of raw model text before it is parsed as JSON.

Models wrap structured output in code fences or chatty prose even when told
not to.  ``normalize`` removes the fences and cuts the text down to the span
running from the first opening bracket to the *last* closing bracket of the
kind expected for the mode.  The span is greedy, not balanced: a stray
closing bracket after the payload, or an opening bracket in leading prose,
ends up inside the span and the parse step then fails.
"""
from __future__ import annotations

import re
from typing import Dict, Tuple

from globetrotter.core.types import Mode

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*")
_SPAN_BRACKETS: Dict[str, Tuple[str, str]] = {
    "suggestions": ("[", "]"),
    "trip_plan": ("{", "}"),
}


def strip_fences(text: str) -> str:
    """Drop every code fence marker (with an optional ``json`` tag)."""

    text = text.strip()
    text = _FENCE_PATTERN.sub("", text)
    return text.strip()


def extract_span(text: str, mode: Mode) -> str:
    """Return the greedy bracket span for ``mode``, or ``text`` if none exists."""

    opening, closing = _SPAN_BRACKETS[mode]
    start = text.find(opening)
    end = text.rfind(closing)
    if start == -1 or end < start:
        return text
    return text[start:end + 1]


def normalize(raw: str, mode: Mode) -> str:
    """Isolate the JSON payload inside raw model output.

    Never fails: text without a matching bracket span is returned fenceless
    and trimmed, so that parsing fails downstream instead of guessing here.
    """

    return extract_span(strip_fences(raw or ""), mode)


def normalize_suggestions(raw: str) -> str:
    return normalize(raw, "suggestions")


def normalize_trip_plan(raw: str) -> str:
    return normalize(raw, "trip_plan")
