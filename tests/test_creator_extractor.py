from __future__ import annotations

import unittest

from pipeline.creator_extractor import (
    channel_url_for,
    extract_creators_from_text,
    find_creator_section,
    parse_creator_entry,
)
from pipeline.creator_metrics import SUBSCRIBER_LABELS, estimate_average_views
from schemas.campaign_plan import default_description

REPLY = """Campaign Name: Glow Up
Recommended Creators:
1. TechWithTim: In-depth gadget reviews
   with a loyal audience.
2. Sara Dietschy (1.2M) - creative tech vlogs
3. NoDelimiterHere
Video Ideas:
- Unboxing the new phone
"""


class CreatorExtractorTests(unittest.TestCase):
    def test_extracts_entries_from_section(self):
        creators = extract_creators_from_text(REPLY)
        self.assertEqual([c["name"] for c in creators], ["TechWithTim", "Sara Dietschy"])

    def test_multi_line_entry_description(self):
        first = extract_creators_from_text(REPLY)[0]
        self.assertEqual(first["description"], "In-depth gadget reviews with a loyal audience.")
        self.assertEqual(first["channelUrl"], "https://youtube.com/c/techwithtim")

    def test_section_stops_at_next_heading(self):
        section = find_creator_section(REPLY)
        self.assertIsNotNone(section)
        self.assertNotIn("Unboxing the new phone", section)

    def test_synthesized_metrics_are_consistent(self):
        for creator in extract_creators_from_text(REPLY):
            self.assertIn(creator["subscribers"], SUBSCRIBER_LABELS)
            self.assertEqual(creator["averageViews"], estimate_average_views(creator["subscribers"]))
            self.assertNotIn("budgetFit", creator)

    def test_extraction_is_deterministic(self):
        self.assertEqual(extract_creators_from_text(REPLY), extract_creators_from_text(REPLY))

    def test_no_section_returns_empty(self):
        self.assertEqual(extract_creators_from_text("1. TechWithTim: reviews"), [])
        self.assertEqual(extract_creators_from_text(""), [])
        self.assertEqual(extract_creators_from_text(None), [])

    def test_without_required_section(self):
        creators = extract_creators_from_text("- Alpha Creator: fitness tips", require_section=False)
        self.assertEqual(len(creators), 1)
        self.assertEqual(creators[0]["name"], "Alpha Creator")
        self.assertEqual(creators[0]["channelUrl"], "https://youtube.com/c/alphacreator")

    def test_youtube_heading_variant(self):
        text = "Recommended YouTube Creators:\n- Chef Nina, home cooking"
        creators = extract_creators_from_text(text)
        self.assertEqual([c["name"] for c in creators], ["Chef Nina"])
        self.assertEqual(creators[0]["description"], "home cooking")

    def test_empty_description_uses_filler(self):
        creator = parse_creator_entry("EmptyDesc:")
        self.assertEqual(creator["description"], default_description("EmptyDesc"))

    def test_markdown_emphasis_stripped_from_name(self):
        creator = parse_creator_entry("**Bold Name**: great reviews")
        self.assertEqual(creator["name"], "Bold Name")
        self.assertEqual(creator["description"], "great reviews")

    def test_entry_without_delimiter_skipped(self):
        self.assertIsNone(parse_creator_entry("Just a name"))

    def test_channel_url_removes_whitespace(self):
        self.assertEqual(channel_url_for("Mark  Rober"), "https://youtube.com/c/markrober")


if __name__ == "__main__":
    unittest.main()
