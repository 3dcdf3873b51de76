from __future__ import annotations

import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from google.genai import errors as genai_errors
from tenacity import wait_none

from pipeline import llm


def _chunk(text, usage=None):
    return SimpleNamespace(text=text, usage_metadata=usage)


def _client(chunks=None, side_effect=None):
    client = MagicMock()
    if side_effect is not None:
        client.models.generate_content_stream.side_effect = side_effect
    else:
        client.models.generate_content_stream.return_value = chunks
    return client


class CallLLMTests(unittest.TestCase):
    def setUp(self):
        llm.reset_usage()
        patcher = patch.object(llm.call_llm.retry, "wait", wait_none())
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_joins_stream_and_records_usage(self):
        usage = SimpleNamespace(prompt_token_count=100, candidates_token_count=50)
        client = _client([_chunk('{"campaignName": '), _chunk(None), _chunk('"X"}', usage)])
        with patch("pipeline.llm._get_google", return_value=client):
            text = llm.call_llm("system", "user", model="gemini-2.0-flash", json_mode=True, top_p=0.95, top_k=32)

        self.assertEqual(text, '{"campaignName": "X"}')
        kwargs = client.models.generate_content_stream.call_args.kwargs
        self.assertEqual(kwargs["model"], "gemini-2.0-flash")
        self.assertEqual(kwargs["contents"], "user")
        self.assertEqual(kwargs["config"].response_mime_type, "application/json")
        self.assertEqual(kwargs["config"].top_k, 32)

        summary = llm.get_usage_summary()
        self.assertEqual(summary["calls"], 1)
        self.assertEqual(summary["total_tokens"], 150)
        self.assertEqual(llm.get_usage_log()[0]["model"], "gemini-2.0-flash")

    def test_text_mode_has_no_json_mime_type(self):
        client = _client([_chunk("plain")])
        with patch("pipeline.llm._get_google", return_value=client):
            llm.call_llm("system", "user", model="gemini-2.0-flash")
        config = client.models.generate_content_stream.call_args.kwargs["config"]
        self.assertIsNone(config.response_mime_type)

    def test_transient_errors_are_retried(self):
        client = _client(side_effect=[ConnectionError("reset"), [_chunk("ok")]])
        with patch("pipeline.llm._get_google", return_value=client):
            self.assertEqual(llm.call_llm("s", "u", model="gemini-2.0-flash"), "ok")
        self.assertEqual(client.models.generate_content_stream.call_count, 2)

    def test_bad_request_is_wrapped_without_retry(self):
        client = _client(side_effect=ValueError("bad"))
        with patch("pipeline.llm._get_google", return_value=client):
            with self.assertRaises(llm.LLMError) as ctx:
                llm.call_llm("s", "u", model="gemini-2.0-flash")
        self.assertEqual(client.models.generate_content_stream.call_count, 1)
        self.assertIn("gemini-2.0-flash", str(ctx.exception))
        self.assertIsInstance(ctx.exception.cause, ValueError)

    def test_missing_key_raises(self):
        with patch("pipeline.llm._google_client", None), patch("pipeline.llm.config.GOOGLE_API_KEY", ""):
            with self.assertRaises(llm.LLMError):
                llm.call_llm("s", "u")


class ErrorClassificationTests(unittest.TestCase):
    def test_retryable(self):
        not_found = genai_errors.ClientError(404, {"error": {"code": 404, "message": "not found", "status": "NOT_FOUND"}})
        rate_limited = genai_errors.ClientError(429, {"error": {"code": 429, "message": "slow down", "status": "RESOURCE_EXHAUSTED"}})
        unavailable = genai_errors.ServerError(503, {"error": {"code": 503, "message": "busy", "status": "UNAVAILABLE"}})
        self.assertFalse(llm._is_retryable(not_found))
        self.assertTrue(llm._is_retryable(rate_limited))
        self.assertTrue(llm._is_retryable(unavailable))
        self.assertTrue(llm._is_retryable(TimeoutError()))
        self.assertFalse(llm._is_retryable(ValueError()))

    def test_clean_messages(self):
        not_found = genai_errors.ClientError(404, {"error": {"code": 404, "message": "not found", "status": "NOT_FOUND"}})
        self.assertIn("not found", llm._extract_error_message(not_found, "gemini-x"))
        self.assertIn("gemini-x", llm._extract_error_message(not_found, "gemini-x"))
        denied = genai_errors.ClientError(403, {"error": {"code": 403, "message": "denied", "status": "PERMISSION_DENIED"}})
        self.assertIn("GOOGLE_API_KEY", llm._extract_error_message(denied, "gemini-x"))

    def test_pricing_prefix_match(self):
        self.assertEqual(llm._get_pricing("gemini-2.5-flash-lite-001"), llm.MODEL_PRICING["gemini-2.5-flash-lite"])
        self.assertEqual(llm._get_pricing("gemini-2.0-flash-001"), llm.MODEL_PRICING["gemini-2.0-flash"])


if __name__ == "__main__":
    unittest.main()
