"""Pull short list items out of a loosely formatted text block.

Strategies are tried in order and the first one that yields anything wins:
explicit bullets/numbering, then short header-free lines, then a plain
line split. The result is always cleaned, de-duplicated and capped.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

_BULLET_ITEM_RE = re.compile(r"(?:^|\n)[ \t]*(?:\d+\.|-|\*|•)\s*([^\n]+)")
_SHORT_LINE_RE = re.compile(r"^[ \t]*([^:.\n]{10,150}?)[ \t]*$", re.MULTILINE)
_LEADING_NUMBER_RE = re.compile(r"^\s*\d+\.\s*")
_LEADING_BULLET_RE = re.compile(r"^\s*[-*•]\s*")
_EMPHASIS_RE = re.compile(r"[*`]+")

MIN_ITEM_CHARS = 5


def _bullet_items(text: str) -> list[str]:
    return [m.group(1).strip() for m in _BULLET_ITEM_RE.finditer(text)]


def _short_line_items(text: str) -> list[str]:
    return [m.group(1).strip() for m in _SHORT_LINE_RE.finditer(text)]


def _split_line_items(text: str) -> list[str]:
    lines = [line.strip() for line in text.split("\n")]
    return [line for line in lines if 10 < len(line) < 150 and not line.endswith(":")]


_STRATEGIES: tuple[Callable[[str], list[str]], ...] = (
    _bullet_items,
    _short_line_items,
    _split_line_items,
)


def _clean_item(item: str) -> str:
    item = _LEADING_NUMBER_RE.sub("", item)
    item = _LEADING_BULLET_RE.sub("", item)
    # markdown bold/code markers, e.g. "**Unboxing**: open the box"
    item = _EMPHASIS_RE.sub("", item)
    return item.strip()


def _is_meaningful(item: str) -> bool:
    return len(item) > MIN_ITEM_CHARS and not item.isdigit() and not item.endswith(":")


def extract_list_items(text: Optional[str], max_items: int = 5) -> list[str]:
    """Extract up to ``max_items`` list items from ``text``.

    Never raises; returns an empty list when nothing qualifies.
    """
    if not text or not isinstance(text, str) or max_items < 1:
        return []
    cleaned_text = text.strip()

    for strategy in _STRATEGIES:
        candidates = [c for c in strategy(cleaned_text) if len(c) > MIN_ITEM_CHARS]
        if candidates:
            break
    else:
        return []

    items: list[str] = []
    seen: set[str] = set()
    for candidate in candidates:
        item = _clean_item(candidate)
        if not _is_meaningful(item) or item in seen:
            continue
        seen.add(item)
        items.append(item)
        if len(items) >= max_items:
            break
    return items
