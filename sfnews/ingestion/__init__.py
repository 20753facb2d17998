"""Source adapters and their shared plumbing."""

from .backup_fetcher import BackupSearchAdapter
from .base import SourceAdapter
from .budget import DailyBudget
from .hackernews_fetcher import LinkAggregatorAdapter
from .models import FeedItem, FetchOptions
from .pacing import FixedIntervalPacer
from .reddit_fetcher import DiscussionAdapter
from .rss_fetcher import FeedAdapter, parse_feed_document, parse_feed_with_feedparser

__all__ = [
    "SourceAdapter",
    "FeedAdapter",
    "DiscussionAdapter",
    "LinkAggregatorAdapter",
    "BackupSearchAdapter",
    "DailyBudget",
    "FixedIntervalPacer",
    "FeedItem",
    "FetchOptions",
    "parse_feed_document",
    "parse_feed_with_feedparser",
]
