"""Product analysis: what kind of product is behind a URL, and who should promote it.

Two-stage process when a Gemini key is available:
  1. Fetch + Clean (best effort): httpx fetches the page, BeautifulSoup
     strips it to text that is added to the prompt as context.
  2. Parse: the model reply is read as JSON when possible, otherwise with
     regex fallbacks for every field.

Without a key, or when anything goes wrong, a mock analysis is derived from
keywords in the URL.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup

from pipeline.json_fragments import json_object_fragments, json_string_array
from schemas.product_analysis import AnalyzedCreator, ExtractedInfo, ProductAnalysis

logger = logging.getLogger(__name__)

# Maximum characters of cleaned page text to send to the LLM
MAX_PAGE_CHARS = 8_000

MAX_FEATURES = 5
MAX_CREATOR_TYPES = 3
MAX_CONTENT_STYLES = 3


# ---------------------------------------------------------------------------
# Fetch
# ---------------------------------------------------------------------------

def fetch_page_text(url: str, timeout: float = 15.0) -> str:
    """Fetch a product page and return cleaned, truncated text.

    Returns an empty string on any failure; page text is optional context.
    """
    headers = {
        "User-Agent": (
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        ),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }
    try:
        response = httpx.get(url, headers=headers, follow_redirects=True, timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("Could not fetch product page %s: %s", url, e)
        return ""

    soup = BeautifulSoup(response.text, "html.parser")
    for tag in soup(["script", "style", "nav", "footer", "header", "noscript", "svg", "iframe"]):
        tag.decompose()

    lines = [line.strip() for line in soup.get_text(separator="\n", strip=True).splitlines()]
    text = "\n".join(line for line in lines if line)
    if len(text) > MAX_PAGE_CHARS:
        text = text[:MAX_PAGE_CHARS] + "\n\n[... page text truncated ...]"
    logger.info("Fetched %d chars of product page text from %s", len(text), url)
    return text


def url_domain(url: str) -> Optional[str]:
    try:
        return urlparse(url).hostname or None
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Mock analysis
# ---------------------------------------------------------------------------

PRICE_RANGES = {
    "electronics": "$100 - $1000+",
    "clothing": "$20 - $200",
    "beauty": "$15 - $150",
    "home": "$50 - $500",
    "food": "$10 - $100",
}
TARGET_DEMOGRAPHICS = {
    "electronics": "Tech enthusiasts, 18-45",
    "clothing": "Fashion-conscious, 16-40",
    "beauty": "Beauty enthusiasts, 18-35",
    "home": "Home owners, 25-55",
    "food": "Cooking enthusiasts, 25-65",
}
KEY_FEATURES = {
    "electronics": ["Innovative technology", "Performance", "Connectivity", "User experience", "Durability"],
    "clothing": ["Style", "Comfort", "Quality materials", "Versatility", "Fit"],
    "beauty": ["Effectiveness", "Ingredients", "Results", "Application", "Value"],
    "home": ["Design", "Functionality", "Quality", "Durability", "Aesthetics"],
    "food": ["Taste", "Nutrition", "Quality ingredients", "Convenience", "Value"],
}
CREATOR_TYPES = {
    "electronics": ["Tech reviewers", "Unboxing channels", "Tutorial creators"],
    "clothing": ["Fashion influencers", "Style vloggers", "Lifestyle creators"],
    "beauty": ["Beauty gurus", "Makeup artists", "Skincare experts"],
    "home": ["Home decor channels", "DIY creators", "Lifestyle vloggers"],
    "food": ["Cooking channels", "Food reviewers", "Recipe creators"],
}
CONTENT_STYLES = {
    "electronics": ["Detailed reviews", "Comparison videos", "How-to tutorials"],
    "clothing": ["Try-on hauls", "Styling tips", "Outfit inspirations"],
    "beauty": ["First impressions", "Tutorials", "Before & after demonstrations"],
    "home": ["Home tours", "Transformation videos", "DIY projects"],
    "food": ["Recipe tutorials", "Taste tests", "Cooking challenges"],
}

# URL substrings that identify a product type, checked in order.
_URL_TYPE_HINTS = (
    ("electronics", ("electronics", "tech", "electronic", "gadget")),
    ("clothing", ("clothing", "fashion", "wear", "apparel")),
    ("beauty", ("beauty", "makeup", "skincare", "cosmetic")),
    ("home", ("home", "furniture", "decor")),
    ("food", ("food", "grocery", "meal")),
)


def guess_product_type(url: str) -> str:
    lowered = (url or "").lower()
    for product_type, hints in _URL_TYPE_HINTS:
        if any(hint in lowered for hint in hints):
            return product_type
    return "unknown"


def create_mock_product_analysis(url: str) -> ProductAnalysis:
    """Build a plausible analysis from keywords in the URL."""
    domain = url_domain(url)
    if domain is None:
        return ProductAnalysis(
            url=url,
            analysis_source="mock",
            error="Failed to analyze product information",
            extracted_info=ExtractedInfo(
                key_features=["Quality", "Value", "Design", "Functionality", "Performance"],
                recommended_creator_types=["Review channels", "Lifestyle vloggers", "How-to channels"],
                suggested_content_styles=["Reviews", "Tutorials", "Day-in-the-life videos"],
            ),
        )

    product_type = guess_product_type(url)
    return ProductAnalysis(
        url=url,
        domain=domain,
        analysis_source="mock",
        extracted_info=ExtractedInfo(
            category=product_type,
            estimated_price=PRICE_RANGES.get(product_type, "Varies"),
            target_demographic=TARGET_DEMOGRAPHICS.get(product_type, "General audience"),
            key_features=KEY_FEATURES.get(
                product_type, ["Quality", "Value", "Design", "Functionality", "Performance"]
            ),
            recommended_creator_types=CREATOR_TYPES.get(
                product_type, ["Lifestyle creators", "Review channels", "Vloggers"]
            ),
            suggested_content_styles=CONTENT_STYLES.get(
                product_type, ["Reviews", "Tutorials", "Day-in-the-life vlogs"]
            ),
        ),
    )


# ---------------------------------------------------------------------------
# Parsing the model reply
# ---------------------------------------------------------------------------

_CATEGORY_RE = re.compile(r'(?:product\s+category|category)[:\s]+"?([^"\n,]+)"?', re.IGNORECASE)
_DEMOGRAPHIC_RE = re.compile(
    r'(?:target\s+demographic|audience|demographic|target\s+market)[:\s]+"?([^"\n,]+)"?', re.IGNORECASE
)
_PRICE_RE = re.compile(
    r'(?:price\s+range|pricing|price|cost)[:\s]+"?'
    r'([$€£]?[0-9][0-9,.]*\s*(?:-\s*[$€£]?[0-9][0-9,.]*)?|affordable|expensive|premium|budget[^"\n,]*)"?',
    re.IGNORECASE,
)
_LIST_BLOCK = r"(?:[\s]*:[\s]*)((?:(?:[-•*]|\d+\.)\s*[^\n]+\n?)+)"
_FEATURES_SECTION_RE = re.compile(
    r"(?:key\s+features|main\s+features|features|strengths)" + _LIST_BLOCK, re.IGNORECASE
)
_CONTENT_SECTION_RE = re.compile(
    r"(?:content\s+types|recommended\s+content|content\s+styles|video\s+ideas)" + _LIST_BLOCK, re.IGNORECASE
)
_CREATORS_SECTION_RE = re.compile(
    r"(?:recommended\s+creators|best\s+creators|top\s+creators|creators)" + _LIST_BLOCK, re.IGNORECASE
)
_FEATURE_SENTENCE_RE = re.compile(
    r"[^.!?]*(?:feature|strength|highlight|selling\s+point|benefit)[^.!?]*", re.IGNORECASE
)
_LIST_MARKER_RE = re.compile(r"^(?:[-•*]|\d+\.)\s*")
_CREATOR_SPLIT_RE = re.compile(r"\n(?:[-•*]|\d+\.)")
_CHANNEL_URL_RE = re.compile(r"https?://(?:www\.)?youtube\.com/[@a-zA-Z0-9\-_]+", re.IGNORECASE)
_CREATOR_NAME_RE = re.compile(r"^([A-Za-z0-9 .,&'\-_]+?)(?:\s*[-–:]\s*|\s*\(|\s+with\b|\s+who\b)", re.IGNORECASE)
_SUBSCRIBERS_RE = re.compile(r"(\d+(?:\.\d+)?[KkMm]?\s*(?:subscribers|subs|followers))", re.IGNORECASE)
_RECOMMENDED_CREATORS_RE = re.compile(r'"recommendedCreators"\s*:\s*\[')

_PLACEHOLDER_CREATOR_TYPES = ("vlogger", "reviewer", "educator")
_DEFAULT_CONTENT_STYLES = ["Product reviews", "How-to tutorials", "Unboxing videos"]


def _strings(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [v.strip() for v in value if isinstance(v, str) and v.strip()]


def _text_or(value: Any, default: str) -> str:
    return value.strip() if isinstance(value, str) and value.strip() else default


def _analyzed_creator(raw: dict[str, Any]) -> AnalyzedCreator:
    return AnalyzedCreator(
        name=_text_or(raw.get("name"), "Unknown creator"),
        description=_text_or(raw.get("description"), ""),
        subscribers=_text_or(raw.get("subscribers"), "Unknown"),
        channel_url=_text_or(raw.get("channelUrl"), "https://youtube.com"),
    )


def _load_json_object(text: str) -> Optional[dict[str, Any]]:
    match = re.search(r"\{.*\}", text, re.DOTALL)
    try:
        data = json.loads(match.group(0) if match else text)
    except (ValueError, RecursionError) as e:
        logger.warning("Failed to parse JSON from product analysis: %s", e)
        return None
    return data if isinstance(data, dict) else None


def _from_json(data: dict[str, Any], analysis_text: str) -> Optional[ExtractedInfo]:
    if not data.get("category") or not isinstance(data.get("keyFeatures"), list):
        logger.warning("JSON product analysis is missing expected fields")
        return None
    creators = [
        _analyzed_creator(c) for c in data.get("recommendedCreators") or [] if isinstance(c, dict)
    ]
    return ExtractedInfo(
        category=str(data["category"]).strip() or "Unknown",
        estimated_price=_text_or(data.get("priceRange"), "Varies"),
        target_demographic=_text_or(data.get("targetDemographic"), "General audience"),
        key_features=_strings(data.get("keyFeatures")),
        recommended_creator_types=[c.name for c in creators],
        suggested_content_styles=_strings(data.get("recommendedContentTypes")),
        recommended_creators=creators,
        raw_analysis=analysis_text,
    )


def _first_group(pattern: re.Pattern, text: str, default: str) -> str:
    match = pattern.search(text)
    return match.group(1).strip() if match else default


def _section_items(pattern: re.Pattern, text: str) -> list[str]:
    match = pattern.search(text)
    if match is None:
        return []
    lines = (_LIST_MARKER_RE.sub("", line.strip()).strip() for line in match.group(1).strip().split("\n"))
    return [line for line in lines if line]


def _extract_features(text: str) -> list[str]:
    features = json_string_array(text, "keyFeatures")
    if not features:
        features = _section_items(_FEATURES_SECTION_RE, text)
    if not features:
        sentences = (s.strip() for s in _FEATURE_SENTENCE_RE.findall(text))
        features = [s for s in sentences if 5 < len(s) < 100]
    return features[:MAX_FEATURES]


def _extract_content_types(text: str) -> list[str]:
    return json_string_array(text, "recommendedContentTypes") or _section_items(_CONTENT_SECTION_RE, text)


def _extract_creators(text: str) -> list[AnalyzedCreator]:
    start = _RECOMMENDED_CREATORS_RE.search(text)
    if start is not None:
        fragments = json_object_fragments(text[start.end():], "name")
        if fragments:
            return [_analyzed_creator(f) for f in fragments]

    match = _CREATORS_SECTION_RE.search(text)
    if match is None:
        return []
    creators = []
    for item in _CREATOR_SPLIT_RE.split(match.group(1).strip()):
        item = _LIST_MARKER_RE.sub("", item.strip())
        if not item:
            continue
        url_match = _CHANNEL_URL_RE.search(item)
        name_match = _CREATOR_NAME_RE.match(item)
        if not (name_match or url_match):
            continue
        subscribers = _SUBSCRIBERS_RE.search(item)
        creators.append(AnalyzedCreator(
            name=name_match.group(1).strip() if name_match else "Unknown creator",
            channel_url=url_match.group(0) if url_match else "https://youtube.com",
            subscribers=subscribers.group(1).strip() if subscribers else "Unknown",
            description=item,
        ))
    return creators


def _placeholder_creators() -> list[AnalyzedCreator]:
    return [
        AnalyzedCreator(
            name=f"YouTube {creator_type}",
            subscribers="Unknown",
            description=(
                "No specific creators identified. "
                f"Consider searching for {creator_type}s in your product niche."
            ),
        )
        for creator_type in _PLACEHOLDER_CREATOR_TYPES
    ]


def _from_text(analysis_text: str) -> ExtractedInfo:
    creators = _extract_creators(analysis_text) or _placeholder_creators()
    content_types = _extract_content_types(analysis_text) or list(_DEFAULT_CONTENT_STYLES)
    return ExtractedInfo(
        category=_first_group(_CATEGORY_RE, analysis_text, "Unknown"),
        estimated_price=_first_group(_PRICE_RE, analysis_text, "Varies"),
        target_demographic=_first_group(_DEMOGRAPHIC_RE, analysis_text, "General audience"),
        key_features=_extract_features(analysis_text),
        recommended_creator_types=[f"{c.name} ({c.subscribers})" for c in creators][:MAX_CREATOR_TYPES],
        suggested_content_styles=content_types[:MAX_CONTENT_STYLES],
        recommended_creators=creators,
        raw_analysis=analysis_text,
    )


def parse_product_analysis(url: str, analysis_text: str) -> ProductAnalysis:
    """Parse a model reply about ``url`` into a ProductAnalysis. Never raises."""
    try:
        domain = url_domain(url)
        if domain is None:
            raise ValueError(f"Invalid product URL: {url!r}")
        analysis_text = analysis_text or ""
        logger.info("Parsing product analysis for %s (%d chars)", url, len(analysis_text))

        info = None
        data = _load_json_object(analysis_text)
        if data is not None:
            info = _from_json(data, analysis_text)
        if info is None:
            logger.info("Falling back to regex-based text extraction")
            info = _from_text(analysis_text)

        return ProductAnalysis(url=url, domain=domain, analysis_source="gemini", extracted_info=info)
    except Exception as e:
        logger.error("Error parsing product analysis: %s", e)
        return create_mock_product_analysis(url)
