"""Shared builders for tests."""

from typing import List, Optional

import httpx
import pendulum

from sfnews.ingestion import SourceAdapter, FetchOptions
from sfnews.ingestion.base import filter_category
from sfnews.models import AdapterStats, Article, Category

NOW = pendulum.datetime(2025, 1, 15, 12, 0, 0, tz="UTC")


def make_article(
    url: str,
    title: str = "Neutral headline",
    category: Optional[Category] = Category.LOCAL,
    hours_ago: Optional[float] = 1,
    published_date: Optional[str] = None,
    source: str = "Example Wire",
    snippet: str = "",
) -> Article:
    if published_date is None:
        published_date = NOW.subtract(seconds=int(hours_ago * 3600)).to_iso8601_string()
    return Article(
        title=title,
        url=url,
        snippet=snippet,
        published_date=published_date,
        source=source,
        category=category,
    )


class StaticAdapter(SourceAdapter):
    """Adapter returning canned articles, or failing like a dead provider."""

    def __init__(self, kind: str, articles: List[Article], fail: bool = False) -> None:
        super().__init__()
        self.kind = kind
        self.articles = articles
        self.fail = fail
        self.calls: List[FetchOptions] = []

    async def _fetch(self, options: FetchOptions, stats: AdapterStats) -> List[Article]:
        self.calls.append(options)
        if self.fail:
            raise httpx.ConnectError("connection refused")
        articles = filter_category(self.articles, options.category)
        stats.record_success(len(articles))
        return articles

    async def _probe(self) -> bool:
        return not self.fail


class RecordingBackup(SourceAdapter):
    """Backup stand-in that records which categories were requested."""

    kind = "backup"

    def __init__(self, per_call: int = 1) -> None:
        super().__init__()
        self.per_call = per_call
        self.requested: List[Category] = []

    async def _fetch(self, options: FetchOptions, stats: AdapterStats) -> List[Article]:
        category = options.category
        self.requested.append(category)
        articles = [
            make_article(
                f"https://backup.example.com/{category.value}/{len(self.requested)}-{i}",
                category=category,
            )
            for i in range(self.per_call)
        ]
        stats.record_success(len(articles))
        return articles

    async def _probe(self) -> bool:
        return True


def mock_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
