"""Product Analyst: infers category, audience and creator fit from a product URL.

Inputs: product URL (page text is fetched as optional context).
Outputs: ProductAnalysis → Campaign Planner prompt.
"""

from __future__ import annotations

from typing import Any

import config
from pipeline.base_agent import BaseAgent
from pipeline.product_analysis import (
    create_mock_product_analysis,
    fetch_page_text,
    parse_product_analysis,
    url_domain,
)
from prompts.product_analyst_system import SYSTEM_PROMPT, build_product_analysis_prompt
from schemas.product_analysis import ProductAnalysis


class ProductAnalystAgent(BaseAgent):
    name = "Product Analyst"
    slug = "product_analyst"

    def __init__(self, fetch_page: bool = True, **kwargs):
        super().__init__(**kwargs)
        self.fetch_page = fetch_page

    @property
    def system_prompt(self) -> str:
        return SYSTEM_PROMPT

    def build_user_prompt(self, inputs: dict[str, Any]) -> str:
        return build_product_analysis_prompt(inputs["url"], inputs.get("page_text", ""))

    def analyze_product(self, url: str) -> ProductAnalysis:
        """Analyze the product at ``url``. Never raises."""
        if config.MOCK_ENABLED:
            self.logger.info("Mock mode enabled, using mock product analysis")
            return create_mock_product_analysis(url)
        if url_domain(url) is None:
            self.logger.warning("Invalid product URL %r, using mock product analysis", url)
            return create_mock_product_analysis(url)

        page_text = fetch_page_text(url) if self.fetch_page else ""
        try:
            text = self.run_text({"url": url, "page_text": page_text})
        except Exception as e:
            self.logger.error("Product analysis failed, falling back to mock data: %s", e)
            return create_mock_product_analysis(url)

        return parse_product_analysis(url, text)
