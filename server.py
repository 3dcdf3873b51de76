"""Campaign Planner: Web Server.

FastAPI backend that exposes API routes for product analysis, campaign plan
generation, normalizing saved model replies, health checks and token usage.

Usage:
    python server.py
    # Then open http://localhost:8000
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

import config
from agents.campaign_planner import CampaignPlannerAgent
from agents.product_analyst import ProductAnalystAgent
from pipeline.llm import get_usage_log, get_usage_summary
from pipeline.normalizer import normalize_plan
from pipeline.product_analysis import url_domain
from pipeline.response_parser import parse_response
from schemas.campaign_plan import CampaignRequest

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)


def _check_api_keys() -> list[str]:
    """Check whether the Gemini key is configured. Returns list of warnings."""
    warnings = []
    if not config.GOOGLE_API_KEY:
        warnings.append("GOOGLE_API_KEY is not set: campaign plans will use mock data")
    if config.FORCE_MOCK:
        warnings.append("FORCE_MOCK=true: campaign plans will use mock data")
    return warnings


@asynccontextmanager
async def lifespan(app: FastAPI):
    key_warnings = _check_api_keys()
    if key_warnings:
        logger.warning("=" * 60)
        logger.warning("API KEY WARNINGS:")
        for w in key_warnings:
            logger.warning("  • %s", w)
        logger.warning("Copy .env.example to .env and add your key:")
        logger.warning("  cp .env.example .env")
        logger.warning("=" * 60)
    else:
        logger.info("API keys: Gemini configured (model=%s)", config.GOOGLE_MODEL)
    yield


app = FastAPI(title="YouTube Creator Campaign Planner", version=config.VERSION, lifespan=lifespan)


# ---------------------------------------------------------------------------
# API Routes
# ---------------------------------------------------------------------------

class ProductAnalysisRequest(BaseModel):
    url: str = ""


class ParseResponseRequest(BaseModel):
    text: str = ""


def _generate_plan_sync(inputs: dict) -> dict:
    return CampaignPlannerAgent().generate_campaign_plan(inputs).to_dict()


def _analyze_product_sync(url: str) -> dict:
    return ProductAnalystAgent().analyze_product(url).to_dict()


@app.post("/api/campaign-plan")
async def api_campaign_plan(req: CampaignRequest):
    """Generate a campaign plan from the merchant's campaign details."""
    if not req.campaign_goals.strip():
        return JSONResponse({"error": "Campaign goals are required"}, status_code=400)

    inputs = req.to_inputs()
    logger.info(
        "Campaign plan requested: budget=%r timeline=%r product=%r analysis=%s",
        req.campaign_budget, req.timeline, req.product_info, req.product_analysis is not None,
    )
    loop = asyncio.get_running_loop()
    plan = await loop.run_in_executor(None, _generate_plan_sync, inputs)
    return {"plan": plan, "mock": config.MOCK_ENABLED}


@app.post("/api/product-analysis")
async def api_product_analysis(req: ProductAnalysisRequest):
    """Analyze a product URL to guide the campaign plan."""
    url = req.url.strip()
    if not url:
        return JSONResponse({"error": "Product URL is required"}, status_code=400)
    if url_domain(url) is None:
        return JSONResponse({"error": f"Invalid product URL: {url}"}, status_code=400)

    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, _analyze_product_sync, url)


@app.post("/api/parse-response")
async def api_parse_response(req: ParseResponseRequest):
    """Normalize a raw model reply (JSON or free text) into a campaign plan."""
    return {"plan": normalize_plan(parse_response(req.text)).to_dict()}


@app.get("/api/health")
async def api_health():
    """Check system health: API key, mock mode, model."""
    return {
        "ok": True,
        "version": config.VERSION,
        "google_configured": bool(config.GOOGLE_API_KEY),
        "mock_mode": config.MOCK_ENABLED,
        "model": config.GOOGLE_MODEL,
        "warnings": _check_api_keys(),
    }


@app.get("/api/usage")
async def api_usage():
    """Token usage and estimated cost of Gemini calls since startup."""
    return {"summary": get_usage_summary(), "calls": get_usage_log()}


@app.get("/")
async def index():
    return {
        "name": app.title,
        "version": config.VERSION,
        "endpoints": [
            "POST /api/product-analysis",
            "POST /api/campaign-plan",
            "POST /api/parse-response",
            "GET /api/health",
            "GET /api/usage",
        ],
    }


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn
    print("\n  YouTube Creator Campaign Planner")
    print("  http://localhost:8000\n")
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
