"""Configuration models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..models import Category, SourceType


class SourceKind(str, Enum):
    """Which adapter handles a source."""

    FEED = "feed"
    DISCUSSION = "discussion"
    LINK_AGGREGATOR = "link_aggregator"
    BACKUP = "backup"


class FetchSettings(BaseModel):
    """HTTP and pacing settings shared by adapters."""

    timeout: float = Field(10.0, description="Per-call timeout in seconds", gt=0.0, le=120.0)
    retry_backoff: float = Field(1.0, description="Seconds before the single feed retry", ge=0.0)
    community_delay: float = Field(1.0, description="Seconds between discussion listing calls", ge=0.0)
    user_agent: str = Field("SF-Narrative/1.0 (news aggregator)", description="User-Agent header")
    snippet_length: int = Field(300, description="Maximum snippet length", ge=50, le=2000)
    feed_max_items: int = Field(20, description="Items taken from each feed", ge=1, le=200)
    top_story_count: int = Field(100, description="Top story IDs inspected", ge=1, le=500)
    story_batch_size: int = Field(20, description="Story details fetched per batch", ge=1, le=100)
    story_max_results: int = Field(15, description="Locale-relevant stories kept", ge=1, le=100)


class BackupConfig(BaseModel):
    """Backup search API configuration."""

    api_key_env: Optional[str] = Field("THENEWSAPI_KEY", description="Environment variable for API key")
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    daily_limit: int = Field(100, description="Provider daily call quota", ge=1)
    safety_margin: int = Field(5, description="Calls held back from the daily quota", ge=0)
    results_per_call: int = Field(10, description="Articles requested per call", ge=1, le=50)

    @field_validator("safety_margin")
    @classmethod
    def validate_margin(cls, v: int, info) -> int:
        """Validate that the margin leaves some quota usable."""
        limit = info.data.get("daily_limit", 100)
        if v >= limit:
            raise ValueError(f"safety_margin ({v}) must be below daily_limit ({limit})")
        return v


class RankingDefaults(BaseModel):
    """Default aggregation parameters."""

    limit: int = Field(15, description="Articles kept per category", ge=1, le=100)
    days: int = Field(7, description="Default look-back window in days", ge=1, le=60)
    min_articles_per_category: int = Field(
        3, description="Below this count a category triggers the backup source", ge=0, le=50
    )


class ConfigModel(BaseModel):
    """Main configuration model."""

    fetch: FetchSettings = Field(default_factory=FetchSettings)
    backup: BackupConfig = Field(default_factory=BackupConfig)
    defaults: RankingDefaults = Field(default_factory=RankingDefaults)


class SourceConfig(BaseModel):
    """Source configuration from sources.yaml."""

    name: str = Field(..., description="Source name")
    url: str = Field(..., description="Endpoint URL (feed, community listing or API base)")
    kind: SourceKind = Field(SourceKind.FEED, description="Adapter that handles this source")
    category: Optional[Category] = Field(None, description="Fixed category, or None to infer from content")
    source_type: SourceType = Field(SourceType.PREMIUM_LOCAL, description="Source tier")
    priority: int = Field(7, description="Source priority weight", ge=1, le=10)
    enabled: bool = Field(True, description="Whether source is enabled")
    min_score: int = Field(10, description="Minimum post score (discussion listings)", ge=0)
    parser: str = Field("tolerant", description="Feed parser: tolerant or feedparser")

    class Config:
        """Pydantic config."""

        frozen = True

    @field_validator("parser")
    @classmethod
    def validate_parser(cls, v: str) -> str:
        """Validate the feed parser name."""
        if v not in ("tolerant", "feedparser"):
            raise ValueError(f"Unknown feed parser: {v}")
        return v


def _google_news(query: str) -> str:
    return f"https://news.google.com/rss/search?q={query}&hl=en-US&gl=US&ceid=US:en"


def default_sources() -> List[SourceConfig]:
    """Built-in source list used when no sources.yaml exists."""
    return [
        SourceConfig(
            name="SF Standard",
            url="https://sfstandard.com/feed/",
            source_type=SourceType.PREMIUM_LOCAL,
            priority=9,
        ),
        SourceConfig(
            name="Mission Local",
            url="https://missionlocal.org/feed/",
            source_type=SourceType.PREMIUM_LOCAL,
            priority=9,
        ),
        SourceConfig(
            name="SFMTA News",
            url=_google_news("SFMTA+San+Francisco"),
            source_type=SourceType.OFFICIAL,
            priority=10,
            category=Category.LOCAL,
        ),
        SourceConfig(
            name="SF Board of Supervisors",
            url=_google_news("%22Board+of+Supervisors%22+San+Francisco"),
            source_type=SourceType.OFFICIAL,
            priority=10,
            category=Category.POLITICS,
        ),
        SourceConfig(
            name="r/sanfrancisco",
            url="https://www.reddit.com/r/sanfrancisco",
            kind=SourceKind.DISCUSSION,
            source_type=SourceType.COMMUNITY,
            priority=8,
            min_score=10,
        ),
        SourceConfig(
            name="r/bayarea",
            url="https://www.reddit.com/r/bayarea",
            kind=SourceKind.DISCUSSION,
            source_type=SourceType.COMMUNITY,
            priority=7,
            min_score=15,
        ),
        SourceConfig(
            name="Hacker News",
            url="https://hacker-news.firebaseio.com/v0",
            kind=SourceKind.LINK_AGGREGATOR,
            source_type=SourceType.AGGREGATOR,
            priority=6,
            category=Category.TECH,
        ),
        SourceConfig(
            name="TheNewsAPI",
            url="https://api.thenewsapi.com/v1/news/all",
            kind=SourceKind.BACKUP,
            source_type=SourceType.BACKUP,
            priority=5,
        ),
    ]
