"""Planner configuration: API key, mock mode, per-agent model assignments, paths."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

VERSION = "1.0.0"

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
ROOT_DIR = Path(__file__).parent
OUTPUT_DIR = ROOT_DIR / os.getenv("OUTPUT_DIR", "outputs")

# ---------------------------------------------------------------------------
# Google AI (Gemini)
# ---------------------------------------------------------------------------
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "") or os.getenv("GEMINI_API_KEY", "")

GOOGLE_MODEL = os.getenv("GOOGLE_MODEL", "gemini-2.0-flash")

# Mock mode is used when explicitly forced or when no API key is available.
FORCE_MOCK = os.getenv("FORCE_MOCK", "").strip().lower() == "true"
MOCK_ENABLED = FORCE_MOCK or not GOOGLE_API_KEY

# ---------------------------------------------------------------------------
# Per-Agent Model Assignments
#
# Override any agent via env: CAMPAIGN_PLANNER_MODEL=gemini-2.5-flash
# ---------------------------------------------------------------------------

AGENT_LLM_CONFIG: dict[str, dict] = {
    # Campaign plan: low temperature, JSON mode, long output for 3-4 categories
    "campaign_planner": {
        "provider": "google",
        "model": os.getenv("CAMPAIGN_PLANNER_MODEL", GOOGLE_MODEL),
        "temperature": 0.1,
        "top_p": 0.95,
        "top_k": 32,
        "max_tokens": 8_192,
        "json_mode": True,
    },
    # Product analysis: free text allowed, parsed leniently
    "product_analyst": {
        "provider": "google",
        "model": os.getenv("PRODUCT_ANALYST_MODEL", GOOGLE_MODEL),
        "temperature": 0.7,
        "top_p": 0.8,
        "top_k": 40,
        "max_tokens": 4_096,
        "json_mode": False,
    },
}


def get_agent_llm_config(agent_slug: str) -> dict:
    """Return the LLM config for a specific agent, with defaults."""
    defaults = {
        "provider": "google",
        "model": GOOGLE_MODEL,
        "temperature": 0.7,
        "top_p": None,
        "top_k": None,
        "max_tokens": 8_192,
        "json_mode": False,
    }
    agent_conf = AGENT_LLM_CONFIG.get(agent_slug, {})
    return {**defaults, **agent_conf}


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
