import unittest

from sfnews.geo import check_alerts, extract_neighborhoods, is_locale_relevant
from sfnews.ingestion.categorize import infer_category
from sfnews.ingestion.text import make_snippet
from sfnews.models import Category


class TestNeighborhoods(unittest.TestCase):
    def test_aliases_map_to_canonical_names(self):
        found = extract_neighborhoods("Shooting in the Tenderloin, road work in FiDi and South of Market")
        self.assertEqual(found, ["Civic Center/Tenderloin", "Financial District", "SoMa"])

    def test_none(self):
        self.assertEqual(extract_neighborhoods("Statewide budget talks"), [])


class TestAlerts(unittest.TestCase):
    def test_alert_keywords(self):
        has_alert, keywords = check_alerts("BART delay after power outage downtown")
        self.assertTrue(has_alert)
        self.assertEqual(keywords, ["bart delay", "power outage"])

    def test_no_alert(self):
        self.assertEqual(check_alerts("New cafe opens"), (False, []))


class TestLocaleRelevance(unittest.TestCase):
    def test_relevant(self):
        self.assertTrue(is_locale_relevant("Caltrain electrification finished"))
        self.assertTrue(is_locale_relevant("Stripe announces new API"))

    def test_not_relevant(self):
        self.assertFalse(is_locale_relevant("Rust 1.80 released"))


class TestInferCategory(unittest.TestCase):
    def test_tags_win_over_text(self):
        self.assertEqual(infer_category("startup news", tags=["Housing"]), Category.ECONOMY)

    def test_flair(self):
        self.assertEqual(infer_category("bike lanes", flair="Politics"), Category.POLITICS)

    def test_padded_ai_keyword(self):
        self.assertEqual(infer_category("AI model launch"), Category.TECH)
        self.assertEqual(infer_category("Said the chair"), Category.LOCAL)

    def test_fallback_is_local(self):
        self.assertEqual(infer_category("Dog show at the park"), Category.LOCAL)


class TestSnippet(unittest.TestCase):
    def test_markup_and_entities_removed_and_capped(self):
        text = "<p>Fish &amp; chips &#8212; <b>cheap</b></p>" + " word" * 100
        snippet = make_snippet(text, max_length=60)
        self.assertTrue(snippet.startswith("Fish & chips — cheap word"))
        self.assertLessEqual(len(snippet), 60)


if __name__ == "__main__":
    unittest.main()
