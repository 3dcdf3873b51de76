"""Product Analyst: System Prompt and user prompt builder."""

SYSTEM_PROMPT = """Context: You're a marketing specialist, skilled at connecting YouTube creators and merchants. You excel at crafting marketing and ad campaigns to help merchants find the right creators for successful collaborations.

You analyze a single product and describe who it is for, what makes it stand out, and which YouTube creators and content styles would promote it best."""

_JSON_SHAPE = """{
  "category": "Product category",
  "targetDemographic": "Target audience description",
  "priceRange": "Estimated price range",
  "keyFeatures": ["Feature 1", "Feature 2", "Feature 3", "Feature 4", "Feature 5"],
  "recommendedContentTypes": ["Content type 1", "Content type 2", "Content type 3"],
  "recommendedCreators": [
    {
      "name": "Real creator name",
      "channelUrl": "Actual YouTube channel URL",
      "subscribers": "Approximate subscriber count",
      "description": "Why they're a good fit for this product"
    }
  ]
}"""


def build_product_analysis_prompt(url: str, page_text: str = "") -> str:
    """Build the user prompt for analyzing the product at ``url``."""
    page_block = ""
    if page_text:
        page_block = f"\nPRODUCT PAGE TEXT (scraped, may be incomplete):\n{page_text}\n"

    return f"""Objective: Analyze this product at URL: {url}
{page_block}
FORMAT YOUR RESPONSE AS VALID JSON with the following structure:
{_JSON_SHAPE}

IMPORTANT NOTES:
- For recommendedCreators, suggest 3 ACTUAL real YouTube creators who would be a good fit for this specific product
- Provide real YouTube channel URLs (like https://www.youtube.com/@CreatorName)
- Focus on identifying the unique selling points of this specific product
- Analyze the specific product at the URL provided, not just the product type in general

Remember to structure your entire response as valid JSON, nothing else."""
