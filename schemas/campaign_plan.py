"""Campaign plan schema: the canonical output every plan producer emits.

Live Gemini replies, text-extracted replies, and mock plans all pass through
pipeline.normalizer.normalize_plan, which builds these models. Attribute
names are snake_case; the JSON/wire names are the camelCase aliases.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

MAX_LIST_ITEMS = 5

DEFAULT_CAMPAIGN_NAME = "YouTube Creator Campaign"
DEFAULT_CATEGORY_NAME = "Recommended Creators"
DEFAULT_CREATOR_NAME = "Unknown Creator"
DEFAULT_CHANNEL_URL = "https://youtube.com"
DEFAULT_SUBSCRIBERS = "500K subscribers"
DEFAULT_AVERAGE_VIEWS = "150K"
DEFAULT_BUDGET_FIT = "Medium fit"


def default_description(name: str) -> str:
    return f"{name} creates content that aligns well with your campaign goals."


# ---------------------------------------------------------------------------
# Plan
# ---------------------------------------------------------------------------

class _PlanModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Creator(_PlanModel):
    """A recommended YouTube creator with audience and budget-fit labels."""
    name: str = Field(..., description="Creator or channel name")
    description: str = Field(..., description="Why this creator fits the campaign")
    channel_url: str = Field(..., alias="channelUrl", description="YouTube channel URL")
    subscribers: str = Field(..., description="Subscriber label, e.g. '1.2M subscribers'")
    average_views: str = Field(..., alias="averageViews", description="Average views label, e.g. '150K'")
    budget_fit: str = Field(
        ..., alias="budgetFit",
        description="How well the audience size matches the budget, e.g. 'High fit for your budget'",
    )


class CreatorCategory(_PlanModel):
    """A named niche of creators."""
    category_name: str = Field(..., alias="categoryName")
    creators: list[Creator] = Field(default_factory=list)


class CampaignPlan(_PlanModel):
    """Structured YouTube creator campaign plan."""
    campaign_name: str = Field(..., alias="campaignName")
    video_ideas: list[str] = Field(default_factory=list, alias="videoIdeas", max_length=MAX_LIST_ITEMS)
    tracking_metrics: list[str] = Field(
        default_factory=list, alias="trackingMetrics", max_length=MAX_LIST_ITEMS,
    )
    keys_to_success: list[str] = Field(
        default_factory=list, alias="keysToSuccess", max_length=MAX_LIST_ITEMS,
    )
    creator_categories: list[CreatorCategory] = Field(default_factory=list, alias="creatorCategories")

    @property
    def total_creators(self) -> int:
        return sum(len(c.creators) for c in self.creator_categories)

    def to_dict(self) -> dict[str, Any]:
        """Wire representation (camelCase keys)."""
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

class CampaignRequest(BaseModel):
    """Merchant-supplied campaign details (form data)."""
    model_config = ConfigDict(populate_by_name=True)

    campaign_goals: str = Field(default="", alias="campaignGoals")
    target_audience: str = Field(default="", alias="targetAudience")
    creator_details: str = Field(default="", alias="creatorDetails")
    campaign_budget: str = Field(default="", alias="campaignBudget")
    timeline: str = Field(default="")
    product_info: str = Field(default="", alias="productInfo", description="Product URL")
    product_analysis: Optional[dict[str, Any]] = Field(
        default=None, alias="productAnalysis",
        description="Output of the product analyst (ProductAnalysis wire dict)",
    )

    def to_inputs(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
