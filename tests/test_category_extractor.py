from __future__ import annotations

import unittest

from pipeline.category_extractor import (
    CATCH_ALL_TYPE,
    categorize_creators_by_type,
    classify_creator,
    extract_creator_categories,
)

LABELED = """Here are my picks.

Category: Tech Reviewers
1. GadgetGuru: unboxing the latest phones
2. ByteSize: quick tech explainers

**Niche:** Fitness Fans
- FitFam: daily workout vlogs

Group: Empty Group
No creators listed here.
"""

FLAT = """Recommended Creators:
- ReviewKing: honest product reviews
- DailyDose: lifestyle vlogs
- ChefMax: cooking for fun
- HowToHank: tutorial series
"""


class CategoryExtractorTests(unittest.TestCase):
    def test_labeled_blocks(self):
        categories = extract_creator_categories(LABELED)
        self.assertEqual([c["categoryName"] for c in categories], ["Tech Reviewers", "Fitness Fans"])
        self.assertEqual([c["name"] for c in categories[0]["creators"]], ["GadgetGuru", "ByteSize"])
        self.assertEqual([c["name"] for c in categories[1]["creators"]], ["FitFam"])

    def test_blocks_without_creators_are_dropped(self):
        names = [c["categoryName"] for c in extract_creator_categories(LABELED)]
        self.assertNotIn("Empty Group", names)

    def test_keyword_grouping_when_no_labels(self):
        categories = extract_creator_categories(FLAT)
        self.assertEqual(
            [c["categoryName"] for c in categories],
            ["Review Creators", "Lifestyle Creators", "Niche Creators", "Tutorial Creators"],
        )
        self.assertEqual(sum(len(c["creators"]) for c in categories), 4)

    def test_classify_priority_follows_declaration_order(self):
        # matches both Review and Tutorial keywords
        creator = {"name": "TestLab", "description": "tutorial videos"}
        self.assertEqual(classify_creator(creator), "Review")
        self.assertEqual(classify_creator({"name": "Zed", "description": "pottery"}), CATCH_ALL_TYPE)

    def test_categorize_conserves_creators(self):
        creators = [
            {"name": "A", "description": "funny sketches"},
            {"name": "B", "description": "comedy"},
            {"name": "C", "description": "guide to gardening"},
        ]
        categories = categorize_creators_by_type(creators)
        self.assertEqual([c["categoryName"] for c in categories], ["Entertainment Creators", "Tutorial Creators"])
        self.assertEqual([len(c["creators"]) for c in categories], [2, 1])

    def test_empty_input(self):
        self.assertEqual(extract_creator_categories(""), [])
        self.assertEqual(extract_creator_categories(None), [])
        self.assertEqual(extract_creator_categories("nothing useful here"), [])
        self.assertEqual(categorize_creators_by_type([]), [])


if __name__ == "__main__":
    unittest.main()
