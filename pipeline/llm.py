"""LLM client: Google Gemini via the google-genai SDK.

Each agent can use a different model and sampling settings. The config
determines which model each agent gets.

Includes built-in cost tracking: every LLM call records token usage and
calculates cost based on per-model pricing. Use reset_usage(), get_usage_log(),
and get_usage_summary() to access the accumulated data.

Error handling:
  - 400-level errors (bad request, auth) are not retried.
  - 429 (rate limit) and 5xx (server errors) ARE retried with exponential backoff.
  - All errors are extracted into clean, readable messages.
"""

from __future__ import annotations

import logging
import threading
import time as _time
from typing import Any

import httpx
from google.genai import errors as genai_errors
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

import config

logger = logging.getLogger(__name__)

PROVIDER = "google"

# ---------------------------------------------------------------------------
# Cost tracking
# ---------------------------------------------------------------------------

# Pricing per 1M tokens: { model_prefix: (input_$/1M, output_$/1M) }
# Models are matched longest-prefix-first, so "gemini-2.5-flash-lite" matches before "gemini-2.5-flash".
MODEL_PRICING: dict[str, tuple[float, float]] = {
    "gemini-2.5-pro":        (1.25,  10.00),
    "gemini-2.5-flash-lite": (0.10,   0.40),
    "gemini-2.5-flash":      (0.30,   2.50),
    "gemini-2.0-flash-lite": (0.075,  0.30),
    "gemini-2.0-flash":      (0.10,   0.40),
    "gemini-1.5-pro":        (1.25,   5.00),
    "gemini-1.5-flash":      (0.075,  0.30),
}

# Fallback pricing if a model isn't in the table (conservative estimate)
_FALLBACK_PRICING = (1.25, 10.00)

_usage_lock = threading.Lock()
_usage_log: list[dict[str, Any]] = []


def _get_pricing(model: str) -> tuple[float, float]:
    """Find pricing for a model by longest-prefix match."""
    best_match = ""
    for prefix in MODEL_PRICING:
        if model.startswith(prefix) and len(prefix) > len(best_match):
            best_match = prefix
    if best_match:
        return MODEL_PRICING[best_match]
    logger.warning("No pricing found for model '%s', using fallback $%.2f/$%.2f per 1M", model, *_FALLBACK_PRICING)
    return _FALLBACK_PRICING


def _record_usage(model: str, input_tokens: int, output_tokens: int):
    """Record a single LLM call's token usage and cost."""
    in_price, out_price = _get_pricing(model)
    cost = (input_tokens * in_price + output_tokens * out_price) / 1_000_000
    entry = {
        "provider": PROVIDER,
        "model": model,
        "input_tokens": input_tokens,
        "output_tokens": output_tokens,
        "cost": cost,
        "timestamp": _time.time(),
    }
    with _usage_lock:
        _usage_log.append(entry)
    logger.info(
        "Token usage: %s/%s in=%d out=%d cost=$%.4f",
        PROVIDER, model, input_tokens, output_tokens, cost,
    )


def reset_usage():
    """Clear all accumulated usage data."""
    with _usage_lock:
        _usage_log.clear()


def get_usage_log() -> list[dict[str, Any]]:
    """Return a copy of the full usage log."""
    with _usage_lock:
        return list(_usage_log)


def get_usage_summary() -> dict[str, Any]:
    """Return aggregated cost and token totals."""
    with _usage_lock:
        entries = list(_usage_log)
    total_input = sum(e["input_tokens"] for e in entries)
    total_output = sum(e["output_tokens"] for e in entries)
    total_cost = sum(e["cost"] for e in entries)
    return {
        "total_input_tokens": total_input,
        "total_output_tokens": total_output,
        "total_tokens": total_input + total_output,
        "total_cost": round(total_cost, 4),
        "calls": len(entries),
    }


# ---------------------------------------------------------------------------
# Error helpers
# ---------------------------------------------------------------------------

class LLMError(Exception):
    """Clean error from an LLM call with a human-readable message."""

    def __init__(self, message: str, provider: str = "", model: str = "", cause: Exception | None = None):
        self.provider = provider
        self.model = model
        self.cause = cause
        super().__init__(message)


def _is_retryable(exc: BaseException) -> bool:
    """Return True if the error is transient and worth retrying.

    We retry on:
      - Rate limits (429)
      - Server errors (5xx)
      - Connection / timeout errors
    We do NOT retry on:
      - 400 Bad Request (invalid params, won't fix itself)
      - 401/403 Auth errors (key is wrong)
      - 404 (model doesn't exist)
    """
    if isinstance(exc, genai_errors.ServerError):
        return True
    if isinstance(exc, genai_errors.ClientError):
        return getattr(exc, "code", None) == 429
    return isinstance(exc, (ConnectionError, TimeoutError, httpx.TransportError))


def _extract_error_message(exc: Exception, model: str) -> str:
    """Pull out a clean, human-readable error message from an API exception."""
    if isinstance(exc, genai_errors.ClientError):
        code = getattr(exc, "code", None)
        detail = getattr(exc, "message", None) or str(exc)
        if code in (401, 403):
            return f"[{PROVIDER}] Authentication failed. Check your GOOGLE_API_KEY."
        if code == 404:
            return f"[{PROVIDER}] Model '{model}' not found. Check the model name in config.py or .env."
        if code == 429:
            return f"[{PROVIDER}/{model}] Rate limit exceeded: {detail}"
        return f"[{PROVIDER}/{model}] Bad request: {detail}"

    msg = str(exc)
    # Generic fallback: truncate very long messages
    if len(msg) > 300:
        msg = msg[:300] + "..."
    return f"[{PROVIDER}/{model}] {msg}"


# ---------------------------------------------------------------------------
# Client (lazy-init singleton)
# ---------------------------------------------------------------------------

_google_client = None


def _get_google():
    global _google_client
    if _google_client is None:
        if not config.GOOGLE_API_KEY:
            raise LLMError(
                "GOOGLE_API_KEY is not set. Add it to your .env file.",
                provider=PROVIDER,
            )
        from google import genai
        _google_client = genai.Client(api_key=config.GOOGLE_API_KEY)
    return _google_client


def _call_google(
    system_prompt: str,
    user_prompt: str,
    model: str,
    temperature: float,
    max_tokens: int,
    json_mode: bool = False,
    top_p: float | None = None,
    top_k: int | None = None,
) -> str:
    from google.genai import types

    client = _get_google()

    gen_config = types.GenerateContentConfig(
        system_instruction=system_prompt or None,
        temperature=temperature,
        max_output_tokens=max_tokens,
        top_p=top_p,
        top_k=top_k,
    )
    if json_mode:
        gen_config.response_mime_type = "application/json"

    logger.info(
        "Google [%s]: json_mode=%s max_output_tokens=%d top_p=%s top_k=%s",
        model, json_mode, max_tokens, top_p, top_k,
    )

    stream_start = _time.time()
    chunks: list[str] = []
    last_chunk = None
    for last_chunk in client.models.generate_content_stream(
        model=model,
        contents=user_prompt,
        config=gen_config,
    ):
        if last_chunk.text:
            chunks.append(last_chunk.text)

    content = "".join(chunks)
    logger.info(
        "Google [%s]: stream complete, %d chars in %.1fs",
        model, len(content), _time.time() - stream_start,
    )

    # Token usage arrives on the last chunk
    meta = getattr(last_chunk, "usage_metadata", None) if last_chunk is not None else None
    if meta:
        in_tok = getattr(meta, "prompt_token_count", 0) or 0
        out_tok = getattr(meta, "candidates_token_count", 0) or 0
        _record_usage(model, in_tok, out_tok)
    return content


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

@retry(
    retry=retry_if_exception(_is_retryable),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=30),
    reraise=True,
)
def call_llm(
    system_prompt: str,
    user_prompt: str,
    model: str | None = None,
    temperature: float = 0.7,
    max_tokens: int = 8_192,
    json_mode: bool = False,
    top_p: float | None = None,
    top_k: int | None = None,
) -> str:
    """Call Gemini and return the raw reply text.

    Retries on transient errors (rate limits, server errors).
    Raises LLMError immediately for bad requests or auth errors.
    """
    model = model or config.GOOGLE_MODEL

    logger.info("LLM call: provider=%s, model=%s, temp=%.1f", PROVIDER, model, temperature)
    try:
        return _call_google(
            system_prompt, user_prompt, model, temperature, max_tokens,
            json_mode=json_mode, top_p=top_p, top_k=top_k,
        )
    except LLMError:
        raise
    except Exception as exc:
        clean_msg = _extract_error_message(exc, model)
        logger.error("LLM call failed: %s", clean_msg)
        if _is_retryable(exc):
            raise  # let tenacity retry
        raise LLMError(clean_msg, provider=PROVIDER, model=model, cause=exc) from exc
