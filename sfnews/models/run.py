"""Run models for tracking one aggregation run."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .article import Article
from .category import Category


class AdapterStats(BaseModel):
    """Call outcomes for one adapter kind during a run."""

    attempted: int = Field(0, description="Provider calls attempted")
    succeeded: int = Field(0, description="Provider calls that returned a usable payload")
    failed: int = Field(0, description="Provider calls that failed")
    articles: int = Field(0, description="Articles produced")

    def record_success(self, articles: int = 0) -> None:
        """Record a successful call."""
        self.attempted += 1
        self.succeeded += 1
        self.articles += articles

    def record_failure(self) -> None:
        """Record a failed call."""
        self.attempted += 1
        self.failed += 1


class AggregationStats(BaseModel):
    """Aggregate run statistics."""

    adapters: Dict[str, AdapterStats] = Field(default_factory=dict, description="Stats by adapter kind")
    articles_before_dedup: int = Field(0, description="Articles after date filter, before dedup")
    articles_after_dedup: int = Field(0, description="Articles in the final category lists")
    backup_calls: int = Field(0, description="Backup search calls made this run")
    started_at: Optional[datetime] = Field(None, description="When the run started")
    finished_at: Optional[datetime] = Field(None, description="When the run finished")

    def for_adapter(self, kind: str) -> AdapterStats:
        """Get (or create) the stats entry for an adapter kind."""
        if kind not in self.adapters:
            self.adapters[kind] = AdapterStats()
        return self.adapters[kind]

    @property
    def duration(self) -> float:
        """Run duration in seconds."""
        if self.started_at and self.finished_at:
            return (self.finished_at - self.started_at).total_seconds()
        return 0.0


class AggregationResult(BaseModel):
    """Final per-category article lists plus run statistics."""

    categories: Dict[Category, List[Article]] = Field(default_factory=dict)
    stats: AggregationStats = Field(default_factory=AggregationStats)

    def articles(self, category: Category) -> List[Article]:
        """Articles for one category (empty if none)."""
        return self.categories.get(category, [])

    @property
    def total(self) -> int:
        """Total articles across categories."""
        return sum(len(items) for items in self.categories.values())
