"""Backup search adapter (TheNewsAPI), gated by credential and daily budget."""

import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel, Field

from ..config import BackupConfig, FetchSettings, SourceConfig
from ..models import AdapterStats, Article, Category, SourceType
from .base import SourceAdapter
from .budget import DailyBudget
from .models import FetchOptions
from .text import make_snippet

logger = logging.getLogger(__name__)

CATEGORY_QUERIES = {
    Category.TECH: '"San Francisco" OR "Bay Area" AND (technology OR AI OR startup OR tech)',
    Category.POLITICS: '"San Francisco" OR "California" AND (politics OR election OR government OR mayor)',
    Category.ECONOMY: '"San Francisco" OR "Bay Area" AND (economy OR business OR housing OR "real estate")',
    Category.LOCAL: '"San Francisco" OR "Bay Area" OR SF OR BART OR "Golden Gate"',
}


class _SearchArticle(BaseModel):
    """Search result row (only the fields we read)."""

    title: Optional[str] = None
    url: Optional[str] = None
    snippet: Optional[str] = None
    description: Optional[str] = None
    published_at: Optional[str] = None
    source: Optional[str] = None


class _SearchResponse(BaseModel):
    data: List[_SearchArticle] = Field(default_factory=list)


class BackupSearchAdapter(SourceAdapter):
    """Paid search API used only when primary coverage is thin."""

    kind = "backup"

    def __init__(
        self,
        source: SourceConfig,
        backup: Optional[BackupConfig] = None,
        budget: Optional[DailyBudget] = None,
        settings: Optional[FetchSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize backup adapter.

        Args:
            source: Source config (endpoint and tags)
            backup: API key, quota and safety margin
            budget: Shared daily budget; one is created from the quota if None
            settings: Fetch settings
            client: Shared HTTP client
        """
        super().__init__(settings, client)
        self.source = source
        self.backup = backup or BackupConfig()
        self.budget = budget or DailyBudget(limit=self.backup.daily_limit)

    @property
    def api_key(self) -> Optional[str]:
        return self.backup.api_key

    def has_budget(self) -> bool:
        """Whether a call is allowed without dipping into the safety margin."""
        return self.budget.remaining() > self.backup.safety_margin

    def to_article(self, row: _SearchArticle, category: Category) -> Optional[Article]:
        """Map a search result row onto an Article; rows without title or URL yield None."""
        title = (row.title or "").strip()
        url = (row.url or "").strip()
        if not title or not url:
            return None

        snippet = make_snippet(row.snippet or row.description or title, self.settings.snippet_length)
        article = self.build_article(
            self.source,
            title=title,
            url=url,
            snippet=snippet,
            published=row.published_at,
            outlet=row.source or self.source.name,
            category=category,
        )
        return article.with_derived(source_type=SourceType.BACKUP)

    async def _fetch(self, options: FetchOptions, stats: AdapterStats) -> List[Article]:
        if not self.api_key:
            logger.warning("%s API key not configured, skipping backup search", self.source.name)
            return []

        if not self.has_budget():
            logger.warning(
                "%s daily limit nearly reached (%d remaining), skipping",
                self.source.name,
                self.budget.remaining(),
            )
            return []

        category = options.category or Category.LOCAL
        params = {
            "api_token": self.api_key,
            "search": CATEGORY_QUERIES[category],
            "language": "en",
            "limit": min(options.limit, self.backup.results_per_call),
        }

        logger.info("Fetching %s from %s", category.value, self.source.name)
        # The attempt itself spends quota, whatever the outcome.
        self.budget.consume()
        async with self.session() as client:
            response = await client.get(self.source.url, params=params)
            if response.is_error:
                stats.record_failure()
                logger.error(
                    "%s error: %s - %s", self.source.name, response.status_code, response.text[:200]
                )
                return []
            payload = _SearchResponse.model_validate(response.json())

        articles = []
        for row in payload.data:
            article = self.to_article(row, category)
            if article is not None:
                articles.append(article)

        stats.record_success(len(articles))
        logger.info("Got %d articles from %s for %s", len(articles), self.source.name, category.value)
        return articles

    async def _probe(self) -> bool:
        # A real request would spend quota, so only the gates are checked.
        return bool(self.api_key) and self.has_budget()
