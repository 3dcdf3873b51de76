"""Campaign Planner: turns merchant campaign details into a CampaignPlan.

Inputs: campaign request fields (camelCase) plus an optional product analysis.
Outputs: CampaignPlan with video ideas, tracking metrics, keys to success and
creators grouped by category.

Without a Gemini key (or with FORCE_MOCK=true) a mock plan is returned. Any
failure of the model call also falls back to the mock plan.
"""

from __future__ import annotations

import random
from typing import Any, Optional

import config
from pipeline.base_agent import BaseAgent
from pipeline.mock_plan import generate_mock_plan
from pipeline.normalizer import normalize_plan
from pipeline.response_parser import parse_response
from prompts.campaign_planner_system import SYSTEM_PROMPT, build_campaign_prompt
from schemas.campaign_plan import CampaignPlan


class CampaignPlannerAgent(BaseAgent):
    name = "Campaign Planner"
    slug = "campaign_planner"

    def __init__(self, rng: Optional[random.Random] = None, **kwargs):
        super().__init__(**kwargs)
        self.rng = rng

    @property
    def system_prompt(self) -> str:
        return SYSTEM_PROMPT

    def build_user_prompt(self, inputs: dict[str, Any]) -> str:
        return build_campaign_prompt(inputs)

    def generate_campaign_plan(self, campaign_data: dict[str, Any]) -> CampaignPlan:
        """Return a canonical CampaignPlan for ``campaign_data``. Never raises."""
        campaign_data = campaign_data or {}
        if config.MOCK_ENABLED:
            self.logger.info("Mock mode enabled, generating mock campaign plan")
            return generate_mock_plan(campaign_data, self.rng)

        try:
            text = self.run_text(campaign_data)
        except Exception as e:
            self.logger.error("Campaign plan generation failed, falling back to mock data: %s", e)
            return generate_mock_plan(campaign_data, self.rng)

        self.logger.info("Gemini response preview: %s...", text[:200])
        return normalize_plan(parse_response(text))
