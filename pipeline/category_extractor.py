"""Group extracted creators into categories.

Explicit "Category: ..." / "Niche: ..." / "Group: ..." blocks are used when
the reply has them. Otherwise the flat creator list is bucketed by keyword
into a fixed taxonomy.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from pipeline.creator_extractor import extract_creators_from_text
from schemas.campaign_plan import DEFAULT_CATEGORY_NAME

logger = logging.getLogger(__name__)

_CATEGORY_BLOCK_RE = re.compile(
    r"""
    ^[ \t#>*_]*(?:category|niche|group)[*_]*[ \t]*:[*_]*[ \t]*
    (?P<name>[^\n]*)
    (?P<body>.*?)
    (?=\n[ \t]*\n|\n[ \t#>*_]*(?:category|niche|group)[*_]*[ \t]*:|\Z)
    """,
    re.IGNORECASE | re.MULTILINE | re.DOTALL | re.VERBOSE,
)
_NAME_TRIM = " \t*_#:\"'"

# Declaration order is match priority. The catch-all bucket has no keywords.
CREATOR_TYPE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Review": ("review", "unbox", "test", "critic"),
    "Lifestyle": ("lifestyle", "daily", "vlog", "life"),
    "Tutorial": ("tutorial", "how to", "guide", "tips", "learn"),
    "Entertainment": ("entertainment", "funny", "comedy", "prank"),
}
CATCH_ALL_TYPE = "Niche"


def _explicit_categories(text: str) -> list[dict[str, Any]]:
    categories = []
    for match in _CATEGORY_BLOCK_RE.finditer(text):
        name = match.group("name").strip(_NAME_TRIM) or DEFAULT_CATEGORY_NAME
        creators = extract_creators_from_text(match.group("body"), require_section=False)
        if creators:
            categories.append({"categoryName": name, "creators": creators})
        else:
            logger.debug("Category block %r has no parsable creators", name)
    return categories


def classify_creator(creator: dict[str, Any]) -> str:
    """Return the taxonomy type for a creator (first keyword match wins)."""
    text_to_check = f"{creator.get('name', '')} {creator.get('description', '')}".lower()
    for creator_type, keywords in CREATOR_TYPE_KEYWORDS.items():
        if any(keyword in text_to_check for keyword in keywords):
            return creator_type
    return CATCH_ALL_TYPE


def categorize_creators_by_type(creators: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Bucket a flat creator list into '{Type} Creators' categories.

    Every creator lands in exactly one bucket; buckets appear in the order
    their first creator was seen.
    """
    buckets: dict[str, list[dict[str, Any]]] = {}
    for creator in creators:
        buckets.setdefault(classify_creator(creator), []).append(creator)
    return [
        {"categoryName": f"{creator_type} Creators", "creators": members}
        for creator_type, members in buckets.items()
    ]


def extract_creator_categories(text: Optional[str]) -> list[dict[str, Any]]:
    """Extract creator categories from ``text``. Never raises."""
    if not text or not isinstance(text, str):
        return []

    categories = _explicit_categories(text)
    if categories:
        logger.info("Found %d explicit creator categories", len(categories))
    else:
        all_creators = extract_creators_from_text(text)
        categories = categorize_creators_by_type(all_creators)
        if categories:
            logger.info("No explicit categories found, grouped creators by content type")

    logger.info(
        "Extracted %d categories with %d total creators",
        len(categories), sum(len(c["creators"]) for c in categories),
    )
    return categories
