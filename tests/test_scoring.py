import unittest

from sfnews.models import Article
from sfnews.ranking import KeywordScorer, RecencyScorer, SourceScorer, score_article

from .helpers import NOW, make_article


class TestKeywordScorer(unittest.TestCase):
    def setUp(self):
        self.scorer = KeywordScorer()

    def test_primary_locale(self):
        article = make_article("https://a.example/1", title="San Francisco supervisors vote")
        self.assertEqual(self.scorer.score(article), 10)

    def test_metro_alias(self):
        self.assertEqual(self.scorer.score(make_article("https://a.example/2", title="Bay Area transit news")), 5)
        self.assertEqual(self.scorer.score(make_article("https://a.example/3", title="SF transit news")), 5)

    def test_each_neighborhood_counts(self):
        article = make_article("https://a.example/4", title="Rents rise in the Mission and SoMa")
        self.assertEqual(self.scorer.score(article), 6)

    def test_snippet_is_scanned(self):
        article = make_article("https://a.example/5", title="Budget vote", snippet="Bay Area leaders react")
        self.assertEqual(self.scorer.score(article), 5)


class TestRecencyScorer(unittest.TestCase):
    def setUp(self):
        self.scorer = RecencyScorer()

    def test_tiers(self):
        cases = [(2, 10), (12, 5), (48, 2), (100, 0)]
        for hours, expected in cases:
            article = make_article("https://a.example/r", hours_ago=hours)
            self.assertEqual(self.scorer.score(article, NOW), expected, hours)

    def test_future_date_gets_nothing(self):
        article = make_article("https://a.example/f", published_date=NOW.add(hours=1).to_iso8601_string())
        self.assertEqual(self.scorer.score(article, NOW), 0)

    def test_unparseable_date_gets_nothing(self):
        article = make_article("https://a.example/u", published_date="not a date")
        self.assertEqual(self.scorer.score(article, NOW), 0)


class TestSourceScorer(unittest.TestCase):
    def test_allowlisted_outlets(self):
        scorer = SourceScorer()
        self.assertEqual(scorer.score(make_article("https://a.example/s", source="SFGate")), 5)
        self.assertEqual(scorer.score(make_article("https://a.example/s", source="San Francisco Chronicle")), 5)
        self.assertEqual(scorer.score(make_article("https://a.example/s", source="Reddit r/sanfrancisco")), 0)


class TestScoreArticle(unittest.TestCase):
    def test_components_are_summed(self):
        article = make_article(
            "https://missionlocal.org/story",
            title="San Francisco supervisors vote",
            hours_ago=2,
            source="Mission Local",
        )
        self.assertEqual(score_article(article, NOW), 25)

    def test_empty_article_scores_zero(self):
        article = Article(title="", url="", snippet="", published_date="", source="")
        self.assertEqual(score_article(article, NOW), 0)

    def test_recent_outscores_older(self):
        recent = make_article("https://a.example/m", title="Same story", hours_ago=1)
        older = make_article("https://a.example/m", title="Same story", hours_ago=50)
        self.assertGreater(score_article(recent, NOW), score_article(older, NOW))

    def test_future_article_does_not_beat_current_one(self):
        current = make_article("https://a.example/n", title="Same story", published_date=NOW.to_iso8601_string())
        future = make_article("https://a.example/n", title="Same story", published_date=NOW.add(hours=3).to_iso8601_string())
        self.assertLessEqual(score_article(future, NOW), score_article(current, NOW))

    def test_local_fresh_trusted_beats_undated_generic(self):
        local = make_article(
            "https://sfstandard.com/rezoning",
            title="Mission District rezoning",
            hours_ago=2,
            source="SF Standard",
        )
        generic = make_article("https://blog.example/cats", title="cats", published_date="???", source="Generic Blog")
        self.assertGreater(score_article(local, NOW), score_article(generic, NOW))

    def test_deterministic(self):
        article = make_article("https://a.example/d", title="Bay Area housing in the Castro", hours_ago=30)
        self.assertEqual(score_article(article, NOW), score_article(article, NOW))


if __name__ == "__main__":
    unittest.main()
