import unittest

from sfnews.models import Category
from sfnews.ranking import dedup_across_categories, dedup_within_category

from .helpers import make_article


class TestDedupWithinCategory(unittest.TestCase):
    def test_keeps_first_and_preserves_order(self):
        first = make_article("https://example.com/a", title="First")
        tracked = make_article("https://example.com/a?utm_source=rss", title="Tracked copy")
        other = make_article("https://example.com/b", title="Other")

        result = dedup_within_category([first, tracked, other])

        self.assertEqual([a.title for a in result], ["First", "Other"])

    def test_empty(self):
        self.assertEqual(dedup_within_category([]), [])


class TestDedupAcrossCategories(unittest.TestCase):
    def test_higher_priority_category_wins(self):
        local = make_article("https://example.com/shared", title="Local copy", category=Category.LOCAL)
        tech = make_article("https://www.example.com/shared/", title="Tech copy", category=Category.TECH)
        tech_only = make_article("https://example.com/tech", category=Category.TECH)

        result = dedup_across_categories({
            Category.TECH: [tech, tech_only],
            Category.LOCAL: [local],
        })

        self.assertEqual([a.title for a in result[Category.LOCAL]], ["Local copy"])
        self.assertEqual([a.url for a in result[Category.TECH]], ["https://example.com/tech"])

    def test_category_field_matches_bucket(self):
        article = make_article("https://example.com/x", category=Category.TECH)

        result = dedup_across_categories({Category.POLITICS: [article]})

        self.assertEqual(result[Category.POLITICS][0].category, Category.POLITICS)

    def test_politics_beats_economy_and_tech(self):
        url = "https://example.com/budget"
        result = dedup_across_categories({
            Category.TECH: [make_article(url, category=Category.TECH)],
            Category.ECONOMY: [make_article(url, category=Category.ECONOMY)],
            Category.POLITICS: [make_article(url, category=Category.POLITICS)],
        })

        self.assertEqual(len(result[Category.POLITICS]), 1)
        self.assertEqual(result[Category.ECONOMY], [])
        self.assertEqual(result[Category.TECH], [])


if __name__ == "__main__":
    unittest.main()
