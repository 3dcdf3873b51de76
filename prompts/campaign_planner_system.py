"""Campaign Planner: System Prompt and user prompt builder.

SYSTEM_PROMPT sets the marketing-specialist persona and style.
build_campaign_prompt() renders the merchant's campaign details, the optional
product analysis, budget guidance and the exact JSON shape we parse.
"""

from __future__ import annotations

from typing import Any

SYSTEM_PROMPT = """Context: You're a marketing specialist, skilled at connecting YouTube creators and merchants. You excel at crafting marketing and ad campaigns to help merchants find the right creators for successful collaborations.

Objective: Provide personalized recommendations to guide merchants in building marketing and ad campaigns with YouTube creators from scratch.

Style and Tone:
- Use clear, concise language with everyday words and short sentences
- Aim for a 9th-grade reading level, keeping it simple yet engaging
- Be a friendly and professional campaign expert
- Express confidence in the merchant's ability to create a successful campaign
"""

_JSON_SHAPE = """{
  "campaignName": "Create a catchy campaign name based on the product",
  "videoIdeas": ["Video idea 1", "Video idea 2", "Video idea 3", "Video idea 4", "Video idea 5"],
  "trackingMetrics": ["Tracking metric 1", "Tracking metric 2", "Tracking metric 3", "Tracking metric 4", "Tracking metric 5"],
  "keysToSuccess": ["Key to success 1", "Key to success 2", "Key to success 3", "Key to success 4", "Key to success 5"],
  "creatorCategories": [
    {
      "categoryName": "Category 1 (e.g., Tech Reviewers)",
      "creators": [
        {
          "name": "Creator name 1",
          "description": "Detailed description about why this creator is a good fit",
          "channelUrl": "YouTube channel URL",
          "subscribers": "1.2M subscribers",
          "averageViews": "150K views",
          "budgetFit": "High fit for your budget"
        }
      ]
    }
  ]
}"""


def _joined(values: Any) -> str:
    if isinstance(values, list) and values:
        return ", ".join(str(v) for v in values)
    return "N/A"


def format_product_analysis(analysis: dict[str, Any] | None) -> str:
    """Render a product analysis (camelCase dict) as a prompt block."""
    if not isinstance(analysis, dict):
        return ""
    info = analysis.get("extractedInfo") or {}

    creators = [c for c in info.get("recommendedCreators") or [] if isinstance(c, dict)]
    if creators:
        creator_lines = "\n".join(
            f"- {c.get('name', 'Unknown creator')} ({c.get('subscribers', 'Unknown')}): {c.get('description', '')}"
            for c in creators
        )
    else:
        creator_lines = "No specific creators recommended from analysis"

    return f"""
Product Analysis:
- Category: {info.get('category', 'Unknown')}
- Price Range: {info.get('estimatedPrice') or 'Not available'}
- Target Audience: {info.get('targetDemographic', 'Not specified')}
- Key Features: {_joined(info.get('keyFeatures'))}

Suggested Creator Guidance:
- Recommended Creator Types: {_joined(info.get('recommendedCreatorTypes'))}
- Suggested Content Styles: {_joined(info.get('suggestedContentStyles'))}

Recommended YouTube Creators from Analysis:
{creator_lines}
"""


def build_campaign_prompt(data: dict[str, Any]) -> str:
    """Build the user prompt for a campaign request (camelCase keys)."""
    analysis = data.get("productAnalysis")
    target_audience = data.get("targetAudience")
    if not target_audience and isinstance(analysis, dict):
        target_audience = (analysis.get("extractedInfo") or {}).get("targetDemographic")
    budget = data.get("campaignBudget") or "Not specified"

    return f"""IMPORTANT CONTEXT:
The merchant may have provided a product URL for AI analysis. Use BOTH the product analysis data (if present) AND their campaign goals to create a highly tailored campaign plan.

Create a structured YouTube creator marketing campaign plan based on the following details:

Campaign Goals: {data.get('campaignGoals') or 'Not specified'}
Target Audience: {target_audience or 'Not specified'}
Creator Details: {data.get('creatorDetails') or 'Not specified'}
Campaign Budget: {budget}
Timeline: {data.get('timeline') or 'Not specified'}
Product URL: {data.get('productInfo') or 'Not provided'}
{format_product_analysis(analysis)}
BUDGET GUIDANCE:
The merchant's budget is {budget}. Based on this budget:
- For budgets under $5,000: Recommend micro-influencers (50K-200K subscribers)
- For budgets $5,000-$25,000: Recommend mid-tier creators (200K-1M subscribers)
- For budgets over $25,000: Recommend larger creators (1M+ subscribers)

IMPORTANT GUIDANCE:
1. Focus on creating a campaign that highlights the specific product features identified in the analysis
2. Group recommended creators by category/niche (e.g., Tech Reviewers, Beauty Influencers, Lifestyle Vloggers)
3. Include AT LEAST 5 creators for EACH category, and recommend at least 3-4 different categories relevant to the product
4. For each creator, include realistic subscriber counts and average view counts that align with the campaign budget
5. Suggest video concepts that utilize the content styles most appropriate for this product
6. Include specific ways to measure campaign success based on the product type and campaign goals

IMPORTANT: You MUST format your response as valid JSON with the following structure exactly:
{_JSON_SHAPE}

Include 3-4 categories with the same structure, each with at least 5 creators.

Remember: Your entire response must be valid JSON following the exact structure above, with no additional text before or after."""
