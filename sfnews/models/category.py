"""Topical categories and source tiers."""

from enum import Enum
from typing import List


class Category(str, Enum):
    """Topical bucket an article is ranked in."""

    TECH = "tech"
    POLITICS = "politics"
    ECONOMY = "economy"
    LOCAL = "local"


# Most local first. Cross-category dedup keeps an article in the earliest
# bucket it appears in.
CATEGORY_PRIORITY: List[Category] = [
    Category.LOCAL,
    Category.POLITICS,
    Category.ECONOMY,
    Category.TECH,
]


class SourceType(str, Enum):
    """Tier of the provider an article came from."""

    OFFICIAL = "official"
    PREMIUM_LOCAL = "premium_local"
    COMMUNITY = "community"
    AGGREGATOR = "aggregator"
    BACKUP = "backup"
