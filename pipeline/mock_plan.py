"""Mock campaign plans for running without a Gemini key.

Content is randomized for demo purposes; pass a seeded ``random.Random`` for
repeatable output. The only hard contract is the plan schema, which is
enforced by routing the result through normalize_plan like any live reply.
"""

from __future__ import annotations

import logging
import random
import re
from typing import Any, Optional

from pipeline.creator_metrics import (
    budget_fit,
    creator_sizes_for_budget,
    estimate_average_views,
    parse_budget_range,
)
from pipeline.normalizer import normalize_plan
from schemas.campaign_plan import MAX_LIST_ITEMS, CampaignPlan

logger = logging.getLogger(__name__)

DEFAULT_BUDGET = "$5,000 - $10,000"

MOCK_CATEGORIES = (
    "Beauty & Lifestyle",
    "Tech Reviewers",
    "Fitness Enthusiasts",
    "Gaming Channels",
    "Food & Cooking",
    "DIY & Crafts",
    "Travel Vloggers",
    "Educational Content",
    "Fashion Influencers",
)

_NAME_PARTS = {
    "Beauty & Lifestyle": (("Glow", "Daily", "Bella", "Pure", "Luxe"), ("Beauty", "Looks", "Life", "Glam")),
    "Tech Reviewers": (("Tech", "Gadget", "Byte", "Circuit", "Pixel"), ("Review", "Lab", "Talk", "Unboxed")),
    "Fitness Enthusiasts": (("Fit", "Iron", "Active", "Peak", "Core"), ("Coach", "Life", "Strong", "Moves")),
    "Gaming Channels": (("Pixel", "Respawn", "Loot", "Quest", "Combo"), ("Gaming", "Plays", "Arena", "Crew")),
    "Food & Cooking": (("Kitchen", "Chef", "Tasty", "Home", "Spice"), ("Eats", "Cooks", "Bites", "Table")),
    "DIY & Crafts": (("Maker", "Crafty", "Handmade", "Build", "Workshop"), ("Studio", "Projects", "Hacks", "Lab")),
    "Travel Vloggers": (("Wander", "Nomad", "Global", "Road", "Passport"), ("Trips", "Diaries", "Journeys", "Vlogs")),
    "Educational Content": (("Smart", "Learn", "Brainy", "Explained", "Curious"), ("Minds", "Academy", "Lessons", "Hub")),
    "Fashion Influencers": (("Style", "Chic", "Trend", "Vogue", "Thread"), ("Edit", "Closet", "Diaries", "Looks")),
}

_DESCRIPTION_TEMPLATES = (
    "Specializing in {topic} content with a highly engaged audience that aligns well with your target market.",
    "Known for authentic {topic} videos and strong comment-section engagement.",
    "Creates polished {topic} videos with consistent upload schedule and loyal viewers.",
    "Trusted voice in {topic} whose audience regularly acts on product recommendations.",
)

_VIDEO_IDEA_TEMPLATES = (
    "Unboxing and first impressions of {product}",
    "30-day challenge using {product} in everyday life",
    "Honest review: is {product} worth it?",
    "How-to tutorial showing the best ways to use {product}",
    "Side-by-side comparison of {product} with popular alternatives",
    "Day-in-the-life vlog featuring {product}",
    "Behind-the-scenes look at how {product} is made",
    "Top 5 tips for getting the most out of {product}",
)

_TRACKING_METRICS = (
    "Views and watch time on sponsored videos",
    "Click-through rate on tracked product links",
    "Conversions from creator-specific discount codes",
    "Engagement rate (likes, comments, shares) per video",
    "Subscriber growth on your brand channel during the campaign",
    "Cost per acquisition compared to other channels",
    "Audience retention at the sponsored segment",
)

_KEYS_TO_SUCCESS = (
    "Give creators creative freedom so the integration feels authentic",
    "Provide a clear brief with key product features and talking points",
    "Use unique discount codes to attribute sales to each creator",
    "Stagger video releases to keep momentum across the campaign",
    "Repurpose top-performing creator content in paid ads",
    "Build long-term relationships with creators who convert well",
    "Review results weekly and shift budget to the best performers",
)

_NAME_SUFFIXES = ("Launch", "Spotlight", "Creator Push", "Showcase", "Collab Series")

_STOPWORDS = frozenset({
    "the", "and", "for", "with", "our", "your", "that", "this", "from", "into",
    "increase", "drive", "boost", "awareness", "sales", "brand", "campaign",
    "http", "https", "www", "com",
})


def campaign_keywords(campaign_data: dict[str, Any]) -> list[str]:
    """Pick distinctive words from the campaign goals and product info."""
    source = " ".join(
        str(campaign_data.get(key) or "")
        for key in ("productInfo", "campaignGoals", "targetAudience", "creatorDetails")
    )
    words = re.findall(r"[A-Za-z]{4,}", source.lower())
    keywords: list[str] = []
    for word in words:
        if word not in _STOPWORDS and word not in keywords:
            keywords.append(word)
    return keywords


def _product_label(campaign_data: dict[str, Any], keywords: list[str]) -> str:
    analysis = campaign_data.get("productAnalysis")
    if isinstance(analysis, dict):
        category = (analysis.get("extractedInfo") or {}).get("category")
        if isinstance(category, str) and category.strip() and category.lower() != "unknown":
            return f"your {category.strip().lower()} product"
    if keywords:
        return f"your {keywords[0]} product"
    return "your product"


def mock_campaign_name(campaign_data: dict[str, Any], rng: random.Random) -> str:
    keywords = campaign_keywords(campaign_data)
    lead = keywords[0].capitalize() if keywords else "Creator"
    return f"{lead} {rng.choice(_NAME_SUFFIXES)}"


def mock_video_ideas(campaign_data: dict[str, Any], rng: random.Random) -> list[str]:
    product = _product_label(campaign_data, campaign_keywords(campaign_data))
    return [t.format(product=product) for t in rng.sample(_VIDEO_IDEA_TEMPLATES, MAX_LIST_ITEMS)]


def mock_tracking_metrics(rng: random.Random) -> list[str]:
    return rng.sample(_TRACKING_METRICS, MAX_LIST_ITEMS)


def mock_keys_to_success(rng: random.Random) -> list[str]:
    return rng.sample(_KEYS_TO_SUCCESS, MAX_LIST_ITEMS)


def mock_creator_name(category_name: str, index: int, rng: random.Random) -> str:
    firsts, seconds = _NAME_PARTS.get(category_name, (("Creator",), ("Channel",)))
    return f"{rng.choice(firsts)}{rng.choice(seconds)}{index + 1}"


def mock_creator_description(category_name: str, rng: random.Random) -> str:
    topic = category_name.lower().replace("&", "and")
    return rng.choice(_DESCRIPTION_TEMPLATES).format(topic=topic)


def mock_creator_categories(campaign_data: dict[str, Any], rng: random.Random) -> list[dict[str, Any]]:
    """3-4 categories of 5-8 creators sized to the campaign budget."""
    budget = campaign_data.get("campaignBudget") or DEFAULT_BUDGET
    budget_range = parse_budget_range(budget)
    sizes = creator_sizes_for_budget(budget_range)

    selected = rng.sample(MOCK_CATEGORIES, rng.randint(3, 4))
    categories = []
    for category_name in selected:
        creators = []
        for i in range(rng.randint(5, 8)):
            name = mock_creator_name(category_name, i, rng)
            subscribers = rng.choice(sizes)
            creators.append({
                "name": name,
                "description": mock_creator_description(category_name, rng),
                "channelUrl": f"https://youtube.com/c/{name.lower()}",
                "subscribers": subscribers,
                "averageViews": estimate_average_views(subscribers, rng.uniform(0.10, 0.20)),
                "budgetFit": budget_fit(subscribers, budget_range),
            })
        categories.append({"categoryName": category_name, "creators": creators})
    return categories


def generate_mock_plan(
    campaign_data: Optional[dict[str, Any]] = None,
    rng: Optional[random.Random] = None,
) -> CampaignPlan:
    """Generate a schema-conformant mock CampaignPlan."""
    campaign_data = campaign_data or {}
    rng = rng or random.Random()
    logger.info("Generating mock campaign plan")

    raw = {
        "campaignName": mock_campaign_name(campaign_data, rng),
        "videoIdeas": mock_video_ideas(campaign_data, rng),
        "trackingMetrics": mock_tracking_metrics(rng),
        "keysToSuccess": mock_keys_to_success(rng),
        "creatorCategories": mock_creator_categories(campaign_data, rng),
    }
    return normalize_plan(raw)
