"""Coerce any raw plan object into a schema-conformant CampaignPlan.

This is the single point where untrusted data (strict JSON, repaired JSON,
text-extracted dicts, mock plans) is validated field by field. Anything
missing or of the wrong type is replaced by its default; malformed list
entries are dropped. The input object is never modified.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pipeline.creator_metrics import format_count, format_subscriber_label, positive_count
from schemas.campaign_plan import (
    DEFAULT_AVERAGE_VIEWS,
    DEFAULT_BUDGET_FIT,
    DEFAULT_CAMPAIGN_NAME,
    DEFAULT_CATEGORY_NAME,
    DEFAULT_CHANNEL_URL,
    DEFAULT_CREATOR_NAME,
    DEFAULT_SUBSCRIBERS,
    MAX_LIST_ITEMS,
    CampaignPlan,
    Creator,
    CreatorCategory,
    default_description,
)

logger = logging.getLogger(__name__)


def _text(value: Any) -> Optional[str]:
    """Return ``value`` if it is a string with visible content."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def _count_label(value: Any) -> Optional[str]:
    """Accept a label string, or format a bare positive number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        count = positive_count(value)
        return format_count(count) if count is not None else None
    return _text(value)


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if _text(item) is not None][:MAX_LIST_ITEMS]


def normalize_creator(raw: dict[str, Any], budget_fit: Optional[str] = None) -> Creator:
    """Build a fully defaulted Creator from a raw dict.

    ``budget_fit`` overrides whatever the raw dict carries.
    """
    name = _text(raw.get("name")) or DEFAULT_CREATOR_NAME

    subscribers = raw.get("subscribers")
    count = positive_count(subscribers)
    if count is not None:
        subscribers = format_subscriber_label(count)
    else:
        subscribers = _text(subscribers) or DEFAULT_SUBSCRIBERS

    return Creator(
        name=name,
        description=_text(raw.get("description")) or default_description(name),
        channel_url=_text(raw.get("channelUrl")) or DEFAULT_CHANNEL_URL,
        subscribers=subscribers,
        average_views=_count_label(raw.get("averageViews")) or DEFAULT_AVERAGE_VIEWS,
        budget_fit=budget_fit or _text(raw.get("budgetFit")) or DEFAULT_BUDGET_FIT,
    )


def _creators(value: Any, budget_fit: Optional[str] = None) -> list[Creator]:
    if not isinstance(value, list):
        return []
    return [normalize_creator(c, budget_fit) for c in value if isinstance(c, dict)]


def normalize_categories(value: Any) -> list[CreatorCategory]:
    """Normalize ``creatorCategories``; categories left empty are dropped."""
    if not isinstance(value, list):
        return []
    categories = []
    for raw in value:
        if not isinstance(raw, dict):
            continue
        creators = _creators(raw.get("creators"))
        if not creators:
            continue
        categories.append(
            CreatorCategory(
                category_name=_text(raw.get("categoryName")) or DEFAULT_CATEGORY_NAME,
                creators=creators,
            )
        )
    return categories


def _legacy_categories(raw: dict[str, Any]) -> list[CreatorCategory]:
    """Wrap the flat ``recommendedCreators`` shape in a single category."""
    creators = _creators(raw.get("recommendedCreators"), budget_fit=DEFAULT_BUDGET_FIT)
    if not creators:
        return []
    logger.info("Converting flat recommendedCreators list to a category")
    return [CreatorCategory(category_name=DEFAULT_CATEGORY_NAME, creators=creators)]


def normalize_plan(raw: Any) -> CampaignPlan:
    """Return the canonical CampaignPlan for any raw object."""
    if not isinstance(raw, dict):
        raw = {}

    categories = normalize_categories(raw.get("creatorCategories"))
    if not categories:
        categories = _legacy_categories(raw)

    plan = CampaignPlan(
        campaign_name=_text(raw.get("campaignName")) or DEFAULT_CAMPAIGN_NAME,
        video_ideas=_string_list(raw.get("videoIdeas")),
        tracking_metrics=_string_list(raw.get("trackingMetrics")),
        keys_to_success=_string_list(raw.get("keysToSuccess")),
        creator_categories=categories,
    )

    logger.info(
        "Normalized plan: name=%r ideas=%d metrics=%d keys=%d categories=%s",
        plan.campaign_name,
        len(plan.video_ideas),
        len(plan.tracking_metrics),
        len(plan.keys_to_success),
        [(c.category_name, len(c.creators)) for c in plan.creator_categories],
    )
    return plan
