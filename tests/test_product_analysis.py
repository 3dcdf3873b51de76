from __future__ import annotations

import json
import unittest
from unittest.mock import MagicMock, patch

import httpx

from pipeline.product_analysis import (
    create_mock_product_analysis,
    fetch_page_text,
    guess_product_type,
    parse_product_analysis,
)

URL = "https://shop.example.com/tech/earbuds"

TEXT_REPLY = """Product Category: Wireless earbuds
Target Demographic: Commuters aged 20-35
Price Range: $79 - $129

Key Features:
- Active noise cancelling
- 30 hour battery

Recommended Creators:
1. MKBHD - https://www.youtube.com/@mkbhd with 18M subscribers
2. Unbox Therapy: unboxing videos 20M subscribers
"""


class MockProductAnalysisTests(unittest.TestCase):
    def test_product_type_from_url(self):
        self.assertEqual(guess_product_type("https://example.com/gadget/phone"), "electronics")
        self.assertEqual(guess_product_type("https://example.com/skincare/serum"), "beauty")
        self.assertEqual(guess_product_type("https://example.com/products/123"), "unknown")

    def test_known_type(self):
        analysis = create_mock_product_analysis("https://shop.example.com/fashion/jacket")
        self.assertEqual(analysis.domain, "shop.example.com")
        self.assertEqual(analysis.analysis_source, "mock")
        info = analysis.extracted_info
        self.assertEqual(info.category, "clothing")
        self.assertEqual(info.estimated_price, "$20 - $200")
        self.assertEqual(len(info.key_features), 5)
        self.assertEqual(len(info.recommended_creator_types), 3)

    def test_unknown_type_defaults(self):
        info = create_mock_product_analysis("https://example.com/p/123").extracted_info
        self.assertEqual(info.category, "unknown")
        self.assertEqual(info.estimated_price, "Varies")
        self.assertEqual(info.target_demographic, "General audience")

    def test_invalid_url(self):
        analysis = create_mock_product_analysis("not a url")
        self.assertEqual(analysis.domain, "")
        self.assertEqual(analysis.error, "Failed to analyze product information")
        self.assertEqual(analysis.extracted_info.category, "Unknown")

    def test_wire_format(self):
        data = create_mock_product_analysis(URL).to_dict()
        self.assertEqual(data["analysisSource"], "mock")
        self.assertIn("keyFeatures", data["extractedInfo"])
        self.assertNotIn("error", data)


class ParseProductAnalysisTests(unittest.TestCase):
    def test_json_reply(self):
        reply = json.dumps({
            "category": "Audio",
            "targetDemographic": "Commuters",
            "priceRange": "$99",
            "keyFeatures": ["ANC", "Long battery"],
            "recommendedContentTypes": ["Reviews", "Commute vlogs"],
            "recommendedCreators": [
                {"name": "MKBHD", "channelUrl": "https://www.youtube.com/@mkbhd",
                 "subscribers": "18M", "description": "Tech reviews"},
            ],
        })
        analysis = parse_product_analysis(URL, "```json\n" + reply + "\n```")
        self.assertEqual(analysis.analysis_source, "gemini")
        info = analysis.extracted_info
        self.assertEqual(info.category, "Audio")
        self.assertEqual(info.estimated_price, "$99")
        self.assertEqual(info.key_features, ["ANC", "Long battery"])
        self.assertEqual(info.recommended_creator_types, ["MKBHD"])
        self.assertEqual(info.suggested_content_styles, ["Reviews", "Commute vlogs"])
        self.assertEqual(info.recommended_creators[0].channel_url, "https://www.youtube.com/@mkbhd")

    def test_text_reply(self):
        info = parse_product_analysis(URL, TEXT_REPLY).extracted_info
        self.assertEqual(info.category, "Wireless earbuds")
        self.assertEqual(info.target_demographic, "Commuters aged 20-35")
        self.assertEqual(info.estimated_price, "$79 - $129")
        self.assertEqual(info.key_features, ["Active noise cancelling", "30 hour battery"])
        self.assertEqual(
            info.recommended_creator_types,
            ["MKBHD (18M subscribers)", "Unbox Therapy (20M subscribers)"],
        )
        self.assertEqual(info.recommended_creators[0].channel_url, "https://www.youtube.com/@mkbhd")
        self.assertEqual(
            info.suggested_content_styles,
            ["Product reviews", "How-to tutorials", "Unboxing videos"],
        )

    def test_placeholder_creators(self):
        info = parse_product_analysis(URL, "A nice product with a great feature set.").extracted_info
        self.assertEqual(len(info.recommended_creators), 3)
        self.assertEqual(info.recommended_creators[0].name, "YouTube vlogger")
        self.assertEqual(info.category, "Unknown")
        self.assertEqual(info.key_features, ["A nice product with a great feature set"])

    def test_truncated_json_keeps_creators(self):
        reply = (
            '{"category": "Audio", "recommendedCreators": [{"name": "MKBHD", "subscribers": "18M"}, '
            '{"name": "Linus'
        )
        info = parse_product_analysis(URL, reply).extracted_info
        self.assertEqual(info.recommended_creators[0].name, "MKBHD")

    def test_decoder_errors_use_text_extraction(self):
        for error in (ValueError("out of range"), RecursionError("too deep")):
            with patch("pipeline.product_analysis.json") as fake_json:
                fake_json.loads.side_effect = error
                analysis = parse_product_analysis(URL, TEXT_REPLY)
            self.assertEqual(analysis.analysis_source, "gemini")
            self.assertEqual(analysis.extracted_info.category, "Wireless earbuds")

    def test_failure_falls_back_to_mock(self):
        with patch("pipeline.product_analysis._from_text", side_effect=RuntimeError("boom")):
            analysis = parse_product_analysis(URL, "plain text")
        self.assertEqual(analysis.analysis_source, "mock")
        self.assertEqual(analysis.extracted_info.category, "electronics")

    def test_invalid_url_falls_back_to_mock(self):
        analysis = parse_product_analysis("nope", TEXT_REPLY)
        self.assertEqual(analysis.analysis_source, "mock")
        self.assertIsNotNone(analysis.error)


class FetchPageTextTests(unittest.TestCase):
    def test_strips_scripts_and_navigation(self):
        response = MagicMock()
        response.text = (
            "<html><head><script>var x = 1;</script></head><body>"
            "<nav>Menu</nav><h1>Earbuds</h1><p>Great sound</p></body></html>"
        )
        with patch("pipeline.product_analysis.httpx.get", return_value=response):
            text = fetch_page_text(URL)
        self.assertIn("Earbuds", text)
        self.assertIn("Great sound", text)
        self.assertNotIn("var x", text)
        self.assertNotIn("Menu", text)

    def test_network_error_returns_empty(self):
        with patch("pipeline.product_analysis.httpx.get", side_effect=httpx.ConnectError("down")):
            self.assertEqual(fetch_page_text(URL), "")


if __name__ == "__main__":
    unittest.main()
