from __future__ import annotations

import copy
import unittest

from pipeline.normalizer import normalize_creator, normalize_plan
from pipeline.response_parser import parse_response
from schemas.campaign_plan import (
    DEFAULT_AVERAGE_VIEWS,
    DEFAULT_BUDGET_FIT,
    DEFAULT_CAMPAIGN_NAME,
    DEFAULT_CATEGORY_NAME,
    DEFAULT_CHANNEL_URL,
    DEFAULT_SUBSCRIBERS,
    default_description,
)


class NormalizerTests(unittest.TestCase):
    def test_non_dict_input_gives_default_plan(self):
        for raw in (None, [], "plan", 7):
            plan = normalize_plan(raw)
            self.assertEqual(plan.campaign_name, DEFAULT_CAMPAIGN_NAME)
            self.assertEqual(plan.video_ideas, [])
            self.assertEqual(plan.tracking_metrics, [])
            self.assertEqual(plan.keys_to_success, [])
            self.assertEqual(plan.creator_categories, [])

    def test_creator_defaults(self):
        plan = normalize_plan({"creatorCategories": [{"creators": [{"name": "Solo"}]}]})
        category = plan.creator_categories[0]
        self.assertEqual(category.category_name, DEFAULT_CATEGORY_NAME)
        creator = category.creators[0]
        self.assertEqual(creator.name, "Solo")
        self.assertEqual(creator.description, default_description("Solo"))
        self.assertEqual(creator.channel_url, DEFAULT_CHANNEL_URL)
        self.assertEqual(creator.subscribers, DEFAULT_SUBSCRIBERS)
        self.assertEqual(creator.average_views, DEFAULT_AVERAGE_VIEWS)
        self.assertEqual(creator.budget_fit, DEFAULT_BUDGET_FIT)

    def test_blank_and_wrong_typed_fields_replaced(self):
        creator = normalize_creator({"name": "   ", "description": 5, "channelUrl": None, "budgetFit": ""})
        self.assertEqual(creator.name, "Unknown Creator")
        self.assertEqual(creator.description, default_description("Unknown Creator"))
        self.assertEqual(creator.channel_url, DEFAULT_CHANNEL_URL)
        self.assertEqual(creator.budget_fit, DEFAULT_BUDGET_FIT)

    def test_numeric_counts_become_labels(self):
        creator = normalize_creator({"name": "Num", "subscribers": 1_200_000, "averageViews": 150_000})
        self.assertEqual(creator.subscribers, "1.2M subscribers")
        self.assertEqual(creator.average_views, "150K")

    def test_overflowing_numbers_fall_back_to_defaults(self):
        huge = "1" + "0" * 400
        replies = (
            '{"creatorCategories": [{"creators": [{"name": "A", "averageViews": 1e999}]}]}',
            '{"creatorCategories": [{"creators": [{"name": "A", "subscribers": %s}]}]}' % huge,
            '{"recommendedCreators": [{"name": "A", "subscribers": Infinity, "averageViews": -Infinity}]}',
        )
        for reply in replies:
            plan = normalize_plan(parse_response(reply))
            creator = plan.creator_categories[0].creators[0]
            self.assertEqual(creator.name, "A")
            self.assertEqual(creator.subscribers, DEFAULT_SUBSCRIBERS)
            self.assertEqual(creator.average_views, DEFAULT_AVERAGE_VIEWS)

    def test_nan_counts_fall_back_to_defaults(self):
        creator = normalize_creator({"name": "N", "subscribers": float("nan"), "averageViews": float("inf")})
        self.assertEqual(creator.subscribers, DEFAULT_SUBSCRIBERS)
        self.assertEqual(creator.average_views, DEFAULT_AVERAGE_VIEWS)

    def test_malformed_entries_dropped(self):
        raw = {
            "creatorCategories": [
                "bad",
                {"categoryName": "Empty", "creators": []},
                {"categoryName": "Mixed", "creators": ["str", 5, {"name": "Ok"}]},
                {"categoryName": "Not a list", "creators": {"name": "Nope"}},
            ]
        }
        plan = normalize_plan(raw)
        self.assertEqual([c.category_name for c in plan.creator_categories], ["Mixed"])
        self.assertEqual([c.name for c in plan.creator_categories[0].creators], ["Ok"])

    def test_list_fields_filtered_and_capped(self):
        raw = {"videoIdeas": ["a", "", "   ", 3, None, "b", "c", "d", "e", "f"], "trackingMetrics": "nope"}
        plan = normalize_plan(raw)
        self.assertEqual(plan.video_ideas, ["a", "b", "c", "d", "e"])
        self.assertEqual(plan.tracking_metrics, [])

    def test_category_name_collisions_kept_in_order(self):
        raw = {
            "creatorCategories": [
                {"categoryName": "Tech", "creators": [{"name": "One"}]},
                {"categoryName": "Tech", "creators": [{"name": "Two"}]},
            ]
        }
        plan = normalize_plan(raw)
        self.assertEqual([c.category_name for c in plan.creator_categories], ["Tech", "Tech"])
        self.assertEqual(plan.total_creators, 2)

    def test_legacy_recommended_creators(self):
        raw = {"recommendedCreators": [{"name": "Legacy", "budgetFit": "High fit for your budget"}, "junk"]}
        plan = normalize_plan(raw)
        self.assertEqual(len(plan.creator_categories), 1)
        category = plan.creator_categories[0]
        self.assertEqual(category.category_name, DEFAULT_CATEGORY_NAME)
        self.assertEqual(category.creators[0].name, "Legacy")
        self.assertEqual(category.creators[0].budget_fit, "Medium fit")

    def test_legacy_without_valid_creators_is_dropped(self):
        self.assertEqual(normalize_plan({"recommendedCreators": ["junk"]}).creator_categories, [])
        self.assertEqual(normalize_plan({"recommendedCreators": []}).creator_categories, [])

    def test_categories_take_precedence_over_legacy(self):
        raw = {
            "creatorCategories": [{"categoryName": "New", "creators": [{"name": "A"}]}],
            "recommendedCreators": [{"name": "B"}],
        }
        plan = normalize_plan(raw)
        self.assertEqual([c.category_name for c in plan.creator_categories], ["New"])

    def test_input_not_mutated(self):
        raw = {
            "campaignName": "",
            "videoIdeas": ["x" * 10] * 8,
            "creatorCategories": [{"creators": [{"name": "Solo"}]}],
        }
        snapshot = copy.deepcopy(raw)
        normalize_plan(raw)
        self.assertEqual(raw, snapshot)

    def test_wire_format_uses_camel_case(self):
        data = normalize_plan({"creatorCategories": [{"creators": [{"name": "Solo"}]}]}).to_dict()
        self.assertEqual(
            set(data), {"campaignName", "videoIdeas", "trackingMetrics", "keysToSuccess", "creatorCategories"}
        )
        self.assertEqual(
            set(data["creatorCategories"][0]["creators"][0]),
            {"name", "description", "channelUrl", "subscribers", "averageViews", "budgetFit"},
        )

    def test_idempotent(self):
        raw = {"campaignName": "Again", "creatorCategories": [{"creators": [{"name": "Solo"}]}]}
        plan = normalize_plan(raw)
        self.assertEqual(normalize_plan(plan.to_dict()), plan)


if __name__ == "__main__":
    unittest.main()
