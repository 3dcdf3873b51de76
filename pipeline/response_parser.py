"""Turn a raw model reply into a raw plan object.

Stages, first success wins:
  1. strict JSON on the outermost {...} span (or the whole text)
  2. the same after swapping single quotes for double quotes
  3. lenient repair (trailing commas, unquoted numeric keys)
  4. structured text extraction

Only a JSON object counts as a successful parse. Nothing in here raises.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Optional

from pipeline.structured_text import extract_structured_data

logger = logging.getLogger(__name__)

_OBJECT_SPAN_RE = re.compile(r"\{.*\}", re.DOTALL)
_NUMERIC_KEY_RE = re.compile(r'(?<=[\{,])\s*(\d+)\s*:')
_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")


def extract_json_candidate(text: str) -> str:
    """Return the greedy first-'{' to last-'}' span, or the whole text."""
    match = _OBJECT_SPAN_RE.search(text)
    return match.group(0) if match else text


def _fix_quotes(candidate: str) -> str:
    return candidate.replace("'", '"')


def _fix_lenient(candidate: str) -> str:
    fixed = _NUMERIC_KEY_RE.sub(r' "\1":', candidate)
    return _TRAILING_COMMA_RE.sub(r"\1", fixed)


_REPAIRS: tuple[tuple[str, Callable[[str], str]], ...] = (
    ("strict", lambda candidate: candidate),
    ("quote-repair", _fix_quotes),
    ("lenient-repair", _fix_lenient),
)


def _loads_object(candidate: str) -> Optional[dict[str, Any]]:
    try:
        data = json.loads(candidate)
    except (ValueError, RecursionError) as exc:
        logger.debug("JSON parse failed: %s", exc)
        return None
    if not isinstance(data, dict):
        logger.debug("JSON parsed to %s, not an object", type(data).__name__)
        return None
    return data


def parse_response(text: Any) -> dict[str, Any]:
    """Parse a model reply into a raw (un-normalized) plan dict."""
    if not isinstance(text, str):
        text = ""

    candidate = extract_json_candidate(text)
    for stage, repair in _REPAIRS:
        data = _loads_object(repair(candidate))
        if data is not None:
            logger.info("Parsed model reply as JSON (%s)", stage)
            return data

    if text.strip():
        logger.warning("Model reply is not valid JSON, falling back to text extraction")
    try:
        return extract_structured_data(text)
    except Exception:
        logger.exception("Text extraction failed, returning an empty plan")
        return {}
