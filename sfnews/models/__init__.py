"""Data models for the SF news aggregator."""

from .article import Article
from .category import CATEGORY_PRIORITY, Category, SourceType
from .run import AdapterStats, AggregationResult, AggregationStats

__all__ = [
    "Article",
    "Category",
    "CATEGORY_PRIORITY",
    "SourceType",
    "AdapterStats",
    "AggregationResult",
    "AggregationStats",
]
