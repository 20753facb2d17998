"""Category ranker: date filter, dedup, score and truncate."""

import logging
from typing import List, Optional

import pendulum
from pendulum import DateTime
from rich.console import Console
from rich.table import Table

from ..models import CATEGORY_PRIORITY, AggregationResult, Article, Category
from .dedup import dedup_within_category
from .scorers import RelevanceScorer

logger = logging.getLogger(__name__)
console = Console()


def filter_by_date(articles: List[Article], from_date: Optional[DateTime]) -> List[Article]:
    """
    Drop articles published before ``from_date``.

    Articles whose date cannot be parsed are kept.
    """
    if from_date is None:
        return articles

    kept = []
    for article in articles:
        published = article.published_at
        if published is not None and published < from_date:
            continue
        kept.append(article)
    return kept


class CategoryRanker:
    """Turn one category's raw articles into its final ranked list."""

    def __init__(
        self,
        limit: int = 15,
        scorer: Optional[RelevanceScorer] = None,
        now: Optional[DateTime] = None,
    ) -> None:
        """
        Initialize category ranker.

        Args:
            limit: Maximum articles kept per category
            scorer: Relevance scorer (default components if None)
            now: Reference time for recency (current time if None)
        """
        self.limit = limit
        self.scorer = scorer or RelevanceScorer()
        self.now = now

    def rank(self, articles: List[Article], category: Category) -> List[Article]:
        """
        Rank one category's date-filtered articles.

        Dedup happens before truncation so duplicates never take a slot.
        The sort is stable: equal scores keep their combined order.
        """
        now = self.now or pendulum.now("UTC")
        unique = dedup_within_category(articles)

        scored = [
            article.with_derived(score=self.scorer.score(article, now), category=category)
            for article in unique
        ]
        scored.sort(key=lambda a: a.score, reverse=True)

        logger.info(
            "%s: %d articles, %d unique, keeping %d",
            category.value,
            len(articles),
            len(unique),
            min(len(scored), self.limit),
        )
        return scored[: self.limit]


def print_ranking_summary(result: AggregationResult, top: int = 10) -> None:
    """Print the top articles of each category."""
    for category in CATEGORY_PRIORITY:
        if category not in result.categories:
            continue
        articles = result.categories[category]

        table = Table(title=f"{category.value.title()} ({len(articles)} articles)")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Score", style="yellow", justify="right")
        table.add_column("Title", style="bold")
        table.add_column("Source", style="cyan")
        table.add_column("Neighborhoods", style="green")

        for i, article in enumerate(articles[:top], 1):
            title = article.title
            if article.has_alert:
                title = f"[red]![/red] {title}"
            table.add_row(
                str(i),
                str(article.score if article.score is not None else "-"),
                title,
                article.source,
                ", ".join(article.neighborhoods),
            )

        console.print(table)
