import unittest
from datetime import date

import httpx

from sfnews.config import BackupConfig, FetchSettings, SourceConfig, SourceKind
from sfnews.ingestion import BackupSearchAdapter, DailyBudget, FetchOptions
from sfnews.models import AdapterStats, Category, SourceType

from .helpers import mock_client

SOURCE = SourceConfig(
    name="TheNewsAPI",
    url="https://api.thenewsapi.com/v1/news/all",
    kind=SourceKind.BACKUP,
    source_type=SourceType.BACKUP,
    priority=5,
)

PAYLOAD = {
    "data": [
        {
            "title": "City Hall weighs new budget",
            "url": "https://example.com/budget",
            "description": "Supervisors debate cuts.",
            "published_at": "2025-01-15T08:00:00.000000Z",
            "source": "sfexaminer.com",
        },
        {"title": "Row without a link", "url": ""},
    ]
}


class TestDailyBudget(unittest.TestCase):
    def test_consume_and_reset_on_new_day(self):
        today = [date(2025, 1, 15)]
        budget = DailyBudget(limit=3, today=lambda: today[0])

        budget.consume()
        budget.consume()
        self.assertEqual(budget.remaining(), 1)

        today[0] = date(2025, 1, 16)
        self.assertEqual(budget.remaining(), 3)

    def test_remaining_never_negative(self):
        budget = DailyBudget(limit=1, today=lambda: date(2025, 1, 15))
        budget.consume()
        budget.consume()
        self.assertEqual(budget.remaining(), 0)


class TestBackupSearchAdapter(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.today = [date(2025, 1, 15)]
        self.budget = DailyBudget(limit=10, today=lambda: self.today[0])
        self.backup = BackupConfig(api_key="secret", daily_limit=10, safety_margin=5)
        self.requests = []

    def handler(self, request):
        self.requests.append(request)
        return httpx.Response(200, json=PAYLOAD)

    def adapter(self, client, backup=None):
        return BackupSearchAdapter(
            SOURCE,
            backup=backup or self.backup,
            budget=self.budget,
            settings=FetchSettings(),
            client=client,
        )

    async def test_maps_rows_to_articles(self):
        async with mock_client(self.handler) as client:
            articles = await self.adapter(client).fetch_articles(
                FetchOptions(category=Category.POLITICS, limit=15)
            )

        self.assertEqual(len(articles), 1)
        article = articles[0]
        self.assertEqual(article.category, Category.POLITICS)
        self.assertEqual(article.source_type, SourceType.BACKUP)
        self.assertEqual(article.source, "sfexaminer.com")
        self.assertEqual(article.snippet, "Supervisors debate cuts.")

        params = self.requests[0].url.params
        self.assertEqual(params["api_token"], "secret")
        self.assertEqual(params["limit"], "10")
        self.assertEqual(params["language"], "en")
        self.assertIn("election", params["search"])

    async def test_missing_key_makes_no_call(self):
        no_key = BackupConfig(api_key=None, daily_limit=10, safety_margin=5)
        async with mock_client(self.handler) as client:
            adapter = self.adapter(client, backup=no_key)
            articles = await adapter.fetch_articles(FetchOptions(category=Category.LOCAL))
            available = await adapter.is_available()

        self.assertEqual(articles, [])
        self.assertFalse(available)
        self.assertEqual(self.requests, [])

    async def test_stops_at_safety_margin_until_next_day(self):
        async with mock_client(self.handler) as client:
            adapter = self.adapter(client)
            for _ in range(7):
                await adapter.fetch_articles(FetchOptions(category=Category.TECH))
            self.assertEqual(len(self.requests), 5)
            self.assertEqual(self.budget.remaining(), 5)

            self.today[0] = date(2025, 1, 16)
            articles = await adapter.fetch_articles(FetchOptions(category=Category.TECH))

        self.assertEqual(len(articles), 1)
        self.assertEqual(len(self.requests), 6)

    async def test_error_status_spends_quota(self):
        async with mock_client(lambda request: httpx.Response(429, text="rate limited")) as client:
            stats = AdapterStats()
            articles = await self.adapter(client).fetch_articles(
                FetchOptions(category=Category.ECONOMY), stats
            )

        self.assertEqual(articles, [])
        self.assertEqual(stats.failed, 1)
        self.assertEqual(self.budget.remaining(), 9)


if __name__ == "__main__":
    unittest.main()
