"""Product analysis schema: what the product analyst learns from a product URL.

Feeds the campaign planner prompt (category, audience, features, creator
guidance) before the plan is generated.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _AnalysisModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class AnalyzedCreator(_AnalysisModel):
    """A creator suggested during product analysis (no budget data yet)."""
    name: str = "Unknown creator"
    description: str = ""
    subscribers: str = "Unknown"
    channel_url: str = Field(default="https://youtube.com", alias="channelUrl")


class ExtractedInfo(_AnalysisModel):
    category: str = "Unknown"
    estimated_price: str = Field(default="Varies", alias="estimatedPrice")
    target_demographic: str = Field(default="General audience", alias="targetDemographic")
    key_features: list[str] = Field(default_factory=list, alias="keyFeatures")
    recommended_creator_types: list[str] = Field(default_factory=list, alias="recommendedCreatorTypes")
    suggested_content_styles: list[str] = Field(default_factory=list, alias="suggestedContentStyles")
    recommended_creators: list[AnalyzedCreator] = Field(default_factory=list, alias="recommendedCreators")
    raw_analysis: Optional[str] = Field(default=None, alias="rawAnalysis")


class ProductAnalysis(_AnalysisModel):
    """Structured analysis of a product page."""
    url: str
    domain: str = ""
    analysis_source: str = Field(
        default="mock", alias="analysisSource",
        description="'gemini' when produced by the model, 'mock' otherwise",
    )
    extracted_info: ExtractedInfo = Field(default_factory=ExtractedInfo, alias="extractedInfo")
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
