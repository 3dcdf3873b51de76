"""Salvage values from JSON that does not parse.

Gemini replies in JSON mode are sometimes cut off at the output token limit
or wrapped in stray prose. These helpers read keyed values straight out of
the text so a truncated reply still yields whatever it got through.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

_STRING = r'"((?:[^"\\\n]|\\.)*)"'
_STRING_RE = re.compile(_STRING)
_PAIR_RE = re.compile(r'"(\w+)"\s*:\s*(?:' + _STRING + r"|(-?\d+(?:\.\d+)?))")


def _unescape(raw: str) -> str:
    try:
        return json.loads(f'"{raw}"')
    except json.JSONDecodeError:
        return raw.replace('\\"', '"')


def json_string_value(text: str, key: str) -> Optional[str]:
    """Return the first string value stored under ``"key":`` in ``text``."""
    match = re.search(rf'"{re.escape(key)}"\s*:\s*{_STRING}', text)
    if match is None:
        return None
    return _unescape(match.group(1)).strip() or None


def json_string_array(text: str, key: str) -> list[str]:
    """Return the complete strings inside a ``"key": [...]`` array.

    An array cut off before its closing bracket still yields every string
    that was closed.
    """
    match = re.search(rf'"{re.escape(key)}"\s*:\s*\[(.*?)(?:\]|\Z)', text, re.DOTALL)
    if match is None:
        return []
    values = (_unescape(m.group(1)).strip() for m in _STRING_RE.finditer(match.group(1)))
    return [v for v in values if v]


def _key_positions(text: str, key: str) -> list[int]:
    return [m.start() for m in re.finditer(rf'"{re.escape(key)}"\s*:', text)]


def json_object_fragments(text: str, anchor_key: str = "name") -> list[dict[str, Any]]:
    """Read flat objects that each start with ``anchor_key``.

    The text is cut at every ``"anchor_key":`` occurrence; the scalar pairs
    in each piece form one object (first occurrence of a key wins).
    """
    positions = _key_positions(text, anchor_key)
    objects = []
    for start, end in zip(positions, positions[1:] + [len(text)]):
        chunk = text[start:end]
        obj: dict[str, Any] = {}
        for match in _PAIR_RE.finditer(chunk):
            key, string_value, number_value = match.groups()
            if key in obj:
                continue
            if string_value is not None:
                obj[key] = _unescape(string_value).strip()
            else:
                obj[key] = float(number_value) if "." in number_value else int(number_value)
        if obj.get(anchor_key):
            objects.append(obj)
    return objects


def json_fragment_categories(text: str) -> list[dict[str, Any]]:
    """Read ``{"categoryName": ..., "creators": [...]}`` groups from broken JSON."""
    positions = _key_positions(text, "categoryName")
    categories = []
    for start, end in zip(positions, positions[1:] + [len(text)]):
        chunk = text[start:end]
        name = json_string_value(chunk, "categoryName")
        creators_at = re.search(r'"creators"\s*:', chunk)
        if creators_at is None:
            continue
        creators = json_object_fragments(chunk[creators_at.end():], "name")
        if creators:
            categories.append({"categoryName": name, "creators": creators})
    return categories
