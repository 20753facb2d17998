"""Article scoring, deduplication and ranking."""

from .dedup import dedup_across_categories, dedup_within_category, normalize_url
from .ranker import CategoryRanker, filter_by_date, print_ranking_summary
from .scorers import (
    BaseScorer,
    KeywordScorer,
    RecencyScorer,
    RelevanceScorer,
    SourceScorer,
    score_article,
)

__all__ = [
    "BaseScorer",
    "KeywordScorer",
    "RecencyScorer",
    "SourceScorer",
    "RelevanceScorer",
    "score_article",
    "normalize_url",
    "dedup_within_category",
    "dedup_across_categories",
    "CategoryRanker",
    "filter_by_date",
    "print_ranking_summary",
]
