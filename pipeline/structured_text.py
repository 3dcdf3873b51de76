"""Best-effort campaign plan from a reply that is not valid JSON.

Each plan field has its own ordered list of strategies; the first strategy
that yields something wins. The result is a partial, raw plan dict meant
only as input to pipeline.normalizer.normalize_plan.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Optional

from pipeline.category_extractor import extract_creator_categories
from pipeline.creator_extractor import extract_creators_from_text
from pipeline.json_fragments import (
    json_fragment_categories,
    json_string_array,
    json_string_value,
)
from pipeline.list_extractor import extract_list_items
from schemas.campaign_plan import DEFAULT_CAMPAIGN_NAME, DEFAULT_CATEGORY_NAME, MAX_LIST_ITEMS

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Section headers
# ---------------------------------------------------------------------------

# Headings may be markdown (#, **bold**) or numbered ("2. Tracking Metrics:").
_HEADER_PREFIX = r"^[ \t#>*_]*(?:\d+[.)][ \t]*)?[*_]*"
_HEADER_SUFFIX = r"[*_]*[ \t]*(?::[*_]*|$)"

VIDEO_IDEA_HEADERS = (
    r"video\s+ideas?",
    r"content\s+(?:recommendations?|ideas)",
    r"video\s+concepts?",
)
TRACKING_METRIC_HEADERS = (
    r"tracking\s+metrics",
    r"measurement\s+metrics",
    r"(?:success\s+|key\s+)?metrics",
    r"kpis?",
)
KEYS_TO_SUCCESS_HEADERS = (
    r"keys?\s+to\s+success",
    r"key\s+recommendations",
    r"tips\s+for\s+success",
    r"success\s+factors",
)
_OTHER_HEADERS = (
    r"campaign\s+name",
    r"recommended(?:\s+youtube)?\s+creators",
    r"creator\s+categories",
    r"(?:category|niche|group)",
)


def _header_re(synonyms: tuple[str, ...]) -> re.Pattern:
    return re.compile(
        _HEADER_PREFIX + "(?:" + "|".join(synonyms) + ")" + _HEADER_SUFFIX,
        re.IGNORECASE | re.MULTILINE,
    )


_ANY_HEADER_RE = _header_re(
    VIDEO_IDEA_HEADERS + TRACKING_METRIC_HEADERS + KEYS_TO_SUCCESS_HEADERS + _OTHER_HEADERS
)
_CAMPAIGN_NAME_RE = re.compile(
    r"^[ \t#>*_]*campaign\s+name[*_]*[ \t]*:?[*_]*[ \t]*([^\n]+)",
    re.IGNORECASE | re.MULTILINE,
)


def section_body(text: str, header: re.Pattern) -> Optional[str]:
    """Text between the first ``header`` match and the next known header."""
    match = header.search(text)
    if match is None:
        return None
    start = match.end()
    following = _ANY_HEADER_RE.search(text, start)
    end = following.start() if following else len(text)
    return text[start:end]


# ---------------------------------------------------------------------------
# Field strategies
# ---------------------------------------------------------------------------

ListStrategy = Callable[[str], list[str]]


def _json_array_strategy(key: str) -> ListStrategy:
    def strategy(text: str) -> list[str]:
        return json_string_array(text, key)[:MAX_LIST_ITEMS]
    strategy.__name__ = f"json_array[{key}]"
    return strategy


def _section_strategy(synonym: str) -> ListStrategy:
    header = _header_re((synonym,))

    def strategy(text: str) -> list[str]:
        body = section_body(text, header)
        if body is None:
            return []
        return extract_list_items(body, MAX_LIST_ITEMS)
    strategy.__name__ = f"section[{synonym}]"
    return strategy


def _list_strategies(json_key: str, headers: tuple[str, ...]) -> tuple[ListStrategy, ...]:
    return (_json_array_strategy(json_key),) + tuple(_section_strategy(h) for h in headers)


VIDEO_IDEA_STRATEGIES = _list_strategies("videoIdeas", VIDEO_IDEA_HEADERS)
TRACKING_METRIC_STRATEGIES = _list_strategies("trackingMetrics", TRACKING_METRIC_HEADERS)
KEYS_TO_SUCCESS_STRATEGIES = _list_strategies("keysToSuccess", KEYS_TO_SUCCESS_HEADERS)


def first_match(text: str, strategies: tuple[ListStrategy, ...]) -> list[str]:
    """Run ``strategies`` in order and return the first non-empty result."""
    for strategy in strategies:
        items = strategy(text)
        if items:
            logger.debug("List strategy %s matched %d items", strategy.__name__, len(items))
            return items
    return []


def extract_campaign_name(text: str) -> str:
    name = json_string_value(text, "campaignName")
    if name:
        return name
    match = _CAMPAIGN_NAME_RE.search(text)
    if match:
        name = match.group(1).strip(" \t*_\"'")
        if name:
            return name
    return DEFAULT_CAMPAIGN_NAME


def extract_categories(text: str) -> list[dict[str, Any]]:
    categories = json_fragment_categories(text)
    if categories:
        logger.info("Recovered %d creator categories from partial JSON", len(categories))
        return categories

    categories = extract_creator_categories(text)
    if categories:
        return categories

    creators = extract_creators_from_text(text)
    if creators:
        return [{"categoryName": DEFAULT_CATEGORY_NAME, "creators": creators}]
    return []


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def extract_structured_data(text: Optional[str]) -> dict[str, Any]:
    """Build a partial raw plan dict from unstructured reply text."""
    if not text or not isinstance(text, str):
        text = ""

    result = {
        "campaignName": extract_campaign_name(text),
        "videoIdeas": first_match(text, VIDEO_IDEA_STRATEGIES),
        "trackingMetrics": first_match(text, TRACKING_METRIC_STRATEGIES),
        "keysToSuccess": first_match(text, KEYS_TO_SUCCESS_STRATEGIES),
        "creatorCategories": extract_categories(text),
    }

    logger.info(
        "Extracted structured data: name=%r ideas=%d metrics=%d keys=%d categories=%d creators=%d",
        result["campaignName"],
        len(result["videoIdeas"]),
        len(result["trackingMetrics"]),
        len(result["keysToSuccess"]),
        len(result["creatorCategories"]),
        sum(len(c["creators"]) for c in result["creatorCategories"]),
    )
    return result
