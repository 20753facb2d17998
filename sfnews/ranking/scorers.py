"""Individual scoring components for article relevance."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

import pendulum
from pendulum import DateTime

from ..geo import METRO_ALIASES, PRIMARY_LOCALE, SCORING_NEIGHBORHOODS
from ..models import Article

# Outlets whose reporting is trusted for local news.
TRUSTED_OUTLETS = [
    "sf standard",
    "mission local",
    "sf chronicle",
    "san francisco chronicle",
    "sfgate",
    "kqed",
    "sf examiner",
    "san francisco examiner",
    "the frisc",
    "oaklandside",
    "sfist",
]


class BaseScorer(ABC):
    """Base class for scoring components."""

    @abstractmethod
    def score(self, article: Article, now: Optional[DateTime] = None) -> int:
        """
        Score an article.

        Args:
            article: Article to score
            now: Reference time (defaults to the current time)

        Returns:
            Non-negative integer contribution
        """


class KeywordScorer(BaseScorer):
    """Score how strongly an article is about the locale."""

    def __init__(
        self,
        primary_weight: int = 10,
        alias_weight: int = 5,
        neighborhood_weight: int = 3,
        aliases: Sequence[str] = METRO_ALIASES,
        neighborhoods: Sequence[str] = SCORING_NEIGHBORHOODS,
    ) -> None:
        """
        Initialize keyword scorer.

        Args:
            primary_weight: Weight of the primary locale name
            alias_weight: Weight of each metro-area alias found
            neighborhood_weight: Weight of each distinct neighborhood found
        """
        self.primary_weight = primary_weight
        self.alias_weight = alias_weight
        self.neighborhood_weight = neighborhood_weight
        self.aliases = [a.lower() for a in aliases]
        self.neighborhoods = [n.lower() for n in neighborhoods]

    def matches(self, article: Article) -> Dict[str, List[str]]:
        """Phrases found in the article, grouped by weight tier."""
        text = article.text.lower()
        return {
            "primary": [PRIMARY_LOCALE] if PRIMARY_LOCALE in text else [],
            "aliases": [a for a in self.aliases if a in text],
            "neighborhoods": [n for n in self.neighborhoods if n in text],
        }

    def score(self, article: Article, now: Optional[DateTime] = None) -> int:
        found = self.matches(article)
        return (
            len(found["primary"]) * self.primary_weight
            + len(found["aliases"]) * self.alias_weight
            + len(found["neighborhoods"]) * self.neighborhood_weight
        )


class RecencyScorer(BaseScorer):
    """Tiered bonus for recently published articles."""

    # (max age in hours, bonus), checked in order
    DEFAULT_TIERS = [(6, 10), (24, 5), (72, 2)]

    def __init__(self, tiers: Optional[List[tuple]] = None) -> None:
        """
        Initialize recency scorer.

        Args:
            tiers: (max_hours, bonus) pairs in ascending age order
        """
        self.tiers = tiers or self.DEFAULT_TIERS

    def age_hours(self, article: Article, now: Optional[DateTime] = None) -> Optional[float]:
        """Hours since publication, or None if the date does not parse."""
        published = article.published_at
        if published is None:
            return None
        now = now or pendulum.now("UTC")
        return (now - published).total_seconds() / 3600

    def score(self, article: Article, now: Optional[DateTime] = None) -> int:
        hours = self.age_hours(article, now)
        # Future-dated (or clock-skewed) articles get nothing.
        if hours is None or hours <= 0:
            return 0
        for max_hours, bonus in self.tiers:
            if hours < max_hours:
                return bonus
        return 0


class SourceScorer(BaseScorer):
    """Flat bonus for trusted local outlets."""

    def __init__(self, bonus: int = 5, outlets: Sequence[str] = TRUSTED_OUTLETS) -> None:
        """Initialize source scorer."""
        self.bonus = bonus
        self.outlets = [o.lower() for o in outlets]

    def score(self, article: Article, now: Optional[DateTime] = None) -> int:
        source = (article.source or "").lower()
        if source and any(outlet in source for outlet in self.outlets):
            return self.bonus
        return 0


class RelevanceScorer:
    """Sum of keyword, recency and source components."""

    def __init__(self, components: Optional[Sequence[BaseScorer]] = None) -> None:
        self.components = list(components) if components else [
            KeywordScorer(),
            RecencyScorer(),
            SourceScorer(),
        ]

    def breakdown(self, article: Article, now: Optional[DateTime] = None) -> Dict[str, int]:
        """Per-component scores, keyed by scorer class name."""
        return {type(c).__name__: c.score(article, now) for c in self.components}

    def score(self, article: Article, now: Optional[DateTime] = None) -> int:
        return sum(self.breakdown(article, now).values())


_default_scorer = RelevanceScorer()


def score_article(article: Article, now: Optional[DateTime] = None) -> int:
    """Relevance score of an article. Deterministic for a fixed ``now``."""
    return _default_scorer.score(article, now)
