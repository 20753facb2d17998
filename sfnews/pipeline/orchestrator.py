"""Aggregation orchestrator: fan out to sources, fill thin categories, rank."""

import asyncio
import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

import httpx
import pendulum
from pendulum import DateTime
from pydantic import BaseModel, Field, field_validator
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import BackupConfig, Config, SourceKind
from ..ingestion import (
    BackupSearchAdapter,
    DailyBudget,
    DiscussionAdapter,
    FeedAdapter,
    FetchOptions,
    FixedIntervalPacer,
    LinkAggregatorAdapter,
    SourceAdapter,
)
from ..models import CATEGORY_PRIORITY, AggregationResult, AggregationStats, Article, Category
from ..ranking import CategoryRanker, dedup_across_categories, filter_by_date

logger = logging.getLogger(__name__)
console = Console()


class AggregationOptions(BaseModel):
    """Options for one aggregation run."""

    limit: int = Field(15, description="Articles kept per category", ge=1, le=100)
    from_date: Optional[datetime] = Field(None, description="Drop articles published before this")
    skip_backup: bool = Field(False, description="Never call the backup source")
    use_backup: bool = Field(False, description="Also query the backup source (single category)")

    @field_validator("from_date")
    @classmethod
    def validate_from_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Make the lower bound timezone-aware (naive values are UTC)."""
        if v is None:
            return v
        return pendulum.instance(v)

    @classmethod
    def for_days(cls, days: int, **kwargs) -> "AggregationOptions":
        """Options whose window starts ``days`` days ago."""
        return cls(from_date=pendulum.now("UTC").subtract(days=days), **kwargs)


class AggregationOrchestrator:
    """
    Runs every source adapter and merges their output into ranked,
    globally unique per-category lists.

    Adapter failures never propagate: a broken source only makes the
    result shorter.
    """

    def __init__(
        self,
        adapters: Sequence[SourceAdapter],
        backup: Optional[BackupSearchAdapter] = None,
        min_articles_per_category: int = 3,
        now: Optional[DateTime] = None,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            adapters: Primary adapters; their order fixes the combined order
            backup: Budget-gated backup adapter (None disables backup)
            min_articles_per_category: Below this a category calls the backup
            now: Reference time for scoring (current time if None)
        """
        self.adapters = list(adapters)
        self.backup = backup
        self.min_articles_per_category = min_articles_per_category
        self.now = now

    @classmethod
    def from_config(
        cls,
        config: Config,
        client: Optional[httpx.AsyncClient] = None,
        budget: Optional[DailyBudget] = None,
        pacer: Optional[FixedIntervalPacer] = None,
    ) -> "AggregationOrchestrator":
        """Build adapters for every enabled source in the configuration."""
        settings = config.config.fetch
        sources = [s for s in config.sources if s.enabled]

        adapters: List[SourceAdapter] = [
            FeedAdapter(s, settings, client) for s in sources if s.kind == SourceKind.FEED
        ]

        communities = [s for s in sources if s.kind == SourceKind.DISCUSSION]
        if communities:
            adapters.append(DiscussionAdapter(communities, settings, client, pacer=pacer))

        adapters.extend(
            LinkAggregatorAdapter(s, settings, client)
            for s in sources
            if s.kind == SourceKind.LINK_AGGREGATOR
        )

        backup = None
        backup_sources = [s for s in sources if s.kind == SourceKind.BACKUP]
        if backup_sources:
            backup_config = BackupConfig(**config.get_backup_config())
            backup = BackupSearchAdapter(
                backup_sources[0],
                backup=backup_config,
                budget=budget or DailyBudget(limit=backup_config.daily_limit),
                settings=settings,
                client=client,
            )

        logger.info(
            "Configured %d primary adapters, backup %s",
            len(adapters),
            "enabled" if backup else "disabled",
        )
        return cls(
            adapters,
            backup=backup,
            min_articles_per_category=config.config.defaults.min_articles_per_category,
        )

    async def _fetch_primary(
        self, options: FetchOptions, stats: AggregationStats
    ) -> List[Article]:
        """Run primary adapters concurrently; combine in adapter-list order."""
        results = await asyncio.gather(
            *(
                adapter.fetch_articles(options, stats.for_adapter(adapter.kind))
                for adapter in self.adapters
            )
        )
        return [article for batch in results for article in batch]

    async def _fetch_backup(
        self, category: Category, limit: int, stats: AggregationStats
    ) -> List[Article]:
        if self.backup is None:
            return []
        backup_stats = stats.for_adapter(self.backup.kind)
        attempted = backup_stats.attempted
        articles = await self.backup.fetch_articles(
            FetchOptions(category=category, limit=limit), backup_stats
        )
        stats.backup_calls += backup_stats.attempted - attempted
        return articles

    @staticmethod
    def partition(articles: List[Article]) -> Dict[Category, List[Article]]:
        """Group articles by category, in priority order, keeping input order."""
        category_map: Dict[Category, List[Article]] = {c: [] for c in CATEGORY_PRIORITY}
        for article in articles:
            category_map[article.category or Category.LOCAL].append(article)
        return category_map

    async def _fill_thin_categories(
        self,
        category_map: Dict[Category, List[Article]],
        options: AggregationOptions,
        stats: AggregationStats,
    ) -> None:
        """Call the backup, one category at a time, where coverage is thin."""
        for category in CATEGORY_PRIORITY:
            have = len(category_map[category])
            if have >= self.min_articles_per_category:
                continue
            logger.info(
                "%s has %d articles (< %d), trying backup",
                category.value,
                have,
                self.min_articles_per_category,
            )
            category_map[category].extend(
                await self._fetch_backup(category, options.limit, stats)
            )

    def _rank(
        self,
        category_map: Dict[Category, List[Article]],
        options: AggregationOptions,
        stats: AggregationStats,
    ) -> Dict[Category, List[Article]]:
        ranker = CategoryRanker(limit=options.limit, now=self.now)
        ranked = {}
        for category, articles in category_map.items():
            recent = filter_by_date(articles, options.from_date)
            stats.articles_before_dedup += len(recent)
            ranked[category] = ranker.rank(recent, category)
        return ranked

    async def fetch_category(
        self, category: Category, options: Optional[AggregationOptions] = None
    ) -> AggregationResult:
        """
        Fetch and rank a single category.

        The backup source is only queried when ``use_backup`` is set; the
        coverage threshold does not apply to single-category runs.
        """
        options = options or AggregationOptions()
        stats = AggregationStats(started_at=pendulum.now("UTC"))
        logger.info("Fetching category %s", category.value)

        articles = await self._fetch_primary(
            FetchOptions(category=category, limit=options.limit), stats
        )
        articles = [a for a in articles if a.category == category]

        if options.use_backup and not options.skip_backup:
            articles.extend(await self._fetch_backup(category, options.limit, stats))

        ranked = self._rank({category: articles}, options, stats)

        stats.articles_after_dedup = len(ranked[category])
        stats.finished_at = pendulum.now("UTC")
        return AggregationResult(categories=ranked, stats=stats)

    async def fetch_all_categories(
        self, options: Optional[AggregationOptions] = None
    ) -> AggregationResult:
        """
        Fetch every category, fill thin ones from the backup, rank, and make
        the lists globally unique.
        """
        options = options or AggregationOptions()
        stats = AggregationStats(started_at=pendulum.now("UTC"))
        logger.info("Fetching all categories from %d adapters", len(self.adapters))

        articles = await self._fetch_primary(FetchOptions(limit=options.limit), stats)
        category_map = self.partition(articles)

        if not options.skip_backup and self.backup is not None:
            await self._fill_thin_categories(category_map, options, stats)

        ranked = self._rank(category_map, options, stats)
        categories = dedup_across_categories(ranked)

        stats.articles_after_dedup = sum(len(items) for items in categories.values())
        stats.finished_at = pendulum.now("UTC")
        logger.info(
            "Aggregation done: %d articles before dedup, %d after",
            stats.articles_before_dedup,
            stats.articles_after_dedup,
        )
        return AggregationResult(categories=categories, stats=stats)


def print_aggregation_summary(result: AggregationResult) -> None:
    """Print per-adapter call outcomes and run totals."""
    stats = result.stats

    table = Table(title="Aggregation Summary")
    table.add_column("Adapter", style="cyan")
    table.add_column("Calls", justify="right")
    table.add_column("OK", style="green", justify="right")
    table.add_column("Failed", style="red", justify="right")
    table.add_column("Articles", style="yellow", justify="right")

    for kind, adapter_stats in stats.adapters.items():
        table.add_row(
            kind,
            str(adapter_stats.attempted),
            str(adapter_stats.succeeded),
            str(adapter_stats.failed),
            str(adapter_stats.articles),
        )

    console.print("\n")
    console.print(table)

    counts = ", ".join(
        f"{category.value}: {len(items)}" for category, items in result.categories.items()
    )
    failed = sum(s.failed for s in stats.adapters.values())
    style = "green" if failed == 0 else "yellow"
    console.print(Panel(
        f"Articles before dedup: {stats.articles_before_dedup}\n"
        f"Articles after dedup: {stats.articles_after_dedup}\n"
        f"Backup calls: {stats.backup_calls}\n"
        f"Per category: {counts or 'none'}\n"
        f"Duration: {stats.duration:.1f} seconds",
        style=style,
    ))
