"""Base class for source adapters."""

import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

import httpx
import pendulum

from ..config import FetchSettings, SourceConfig
from ..dates import to_iso
from ..geo import check_alerts, extract_neighborhoods
from ..models import AdapterStats, Article, Category
from .models import FetchOptions

logger = logging.getLogger(__name__)


class SourceAdapter(ABC):
    """
    Converts one provider's payloads into Articles.

    ``fetch_articles`` and ``is_available`` never raise: failures are logged
    and turn into an empty list or False.
    """

    kind: str = "base"

    def __init__(
        self,
        settings: Optional[FetchSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize adapter.

        Args:
            settings: Timeouts, pacing and size limits
            client: Shared HTTP client; if None each call opens its own
        """
        self.settings = settings or FetchSettings()
        self.client = client

    @property
    def name(self) -> str:
        """Name used in log lines."""
        return self.kind

    @asynccontextmanager
    async def session(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the shared client, or a short-lived one."""
        if self.client is not None:
            yield self.client
            return
        async with httpx.AsyncClient(
            timeout=self.settings.timeout,
            follow_redirects=True,
            headers={"User-Agent": self.settings.user_agent},
        ) as client:
            yield client

    async def fetch_articles(
        self,
        options: Optional[FetchOptions] = None,
        stats: Optional[AdapterStats] = None,
    ) -> List[Article]:
        """Fetch articles, returning an empty list on any failure."""
        options = options or FetchOptions()
        stats = stats if stats is not None else AdapterStats()
        try:
            return await self._fetch(options, stats)
        except httpx.HTTPError as e:
            stats.record_failure()
            logger.error("%s: HTTP error: %s", self.name, e)
        except Exception:
            stats.record_failure()
            logger.exception("%s: unexpected error", self.name)
        return []

    async def is_available(self) -> bool:
        """Cheap reachability probe."""
        try:
            return await self._probe()
        except Exception as e:
            logger.debug("%s: probe failed: %s", self.name, e)
            return False

    @abstractmethod
    async def _fetch(self, options: FetchOptions, stats: AdapterStats) -> List[Article]:
        """Fetch and convert articles. May raise; the caller converts errors."""

    @abstractmethod
    async def _probe(self) -> bool:
        """Check the provider responds. May raise."""

    def build_article(
        self,
        source: SourceConfig,
        title: str,
        url: str,
        snippet: str,
        published: object,
        outlet: str,
        category: Category,
        fetched_at: Optional[pendulum.DateTime] = None,
    ) -> Article:
        """Create an Article with the tags every adapter attaches."""
        text = f"{title} {snippet}"
        has_alert, alert_keywords = check_alerts(text)
        return Article(
            title=title,
            url=url,
            snippet=snippet,
            published_date=to_iso(published, fallback=fetched_at),
            source=outlet,
            category=category,
            neighborhoods=extract_neighborhoods(text),
            source_type=source.source_type,
            priority=source.priority,
            has_alert=has_alert,
            alert_keywords=alert_keywords,
        )


def filter_category(articles: List[Article], category: Optional[Category]) -> List[Article]:
    """Keep only articles in ``category`` (all if None)."""
    if category is None:
        return articles
    return [a for a in articles if a.category == category]
