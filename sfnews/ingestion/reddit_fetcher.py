"""Community discussion listing adapter (Reddit public JSON listings)."""

import logging
import re
from typing import Any, Dict, List, Optional, Sequence

import httpx
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..config import FetchSettings, SourceConfig
from ..models import AdapterStats, Article
from .base import SourceAdapter, filter_category
from .categorize import infer_category
from .models import FetchOptions
from .pacing import FixedIntervalPacer

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 10

# Moderator and meta posts: rules, recurring threads.
META_PATTERNS = [
    re.compile(r"\brules?\b", re.IGNORECASE),
    re.compile(r"\b(weekly|daily|monthly)\b.*\b(thread|discussion)\b", re.IGNORECASE),
    re.compile(r"\bmegathread\b", re.IGNORECASE),
    re.compile(r"^\s*\[?meta\]?\b", re.IGNORECASE),
]

QUESTION_PREFIXES = (
    "where",
    "how do i",
    "what is the best",
    "what's the best",
    "anyone know",
    "does anyone",
    "can anyone",
    "looking for",
)


class _Post(BaseModel):
    """Listing child payload (only the fields we read)."""

    id: str
    title: str = ""
    url: str = ""
    selftext: str = ""
    permalink: str = ""
    score: int = 0
    created_utc: float = 0.0
    num_comments: int = 0
    is_self: bool = False
    link_flair_text: Optional[str] = None
    subreddit: str = ""
    stickied: bool = False

    @field_validator("title", "url", "selftext", "permalink", "subreddit", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        """Listings send null for absent text fields."""
        return "" if v is None else v


class _ListingData(BaseModel):
    # Each post is validated on its own in fetch_community.
    children: List[Dict[str, Any]] = Field(default_factory=list)


class _Listing(BaseModel):
    data: _ListingData


def passes_quality_filter(post: _Post, min_score: int) -> bool:
    """Drop low-engagement, short, meta and question posts."""
    if post.score < min_score:
        return False

    title = post.title.strip()
    if len(title) < MIN_TITLE_LENGTH:
        return False

    if post.stickied or any(pattern.search(title) for pattern in META_PATTERNS):
        return False

    lowered = title.lower()
    if lowered.startswith(QUESTION_PREFIXES) or lowered.endswith("?"):
        return False

    return True


class DiscussionAdapter(SourceAdapter):
    """Fetch ranked listings for the configured communities, one at a time."""

    kind = "discussion"

    def __init__(
        self,
        communities: Sequence[SourceConfig],
        settings: Optional[FetchSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
        pacer: Optional[FixedIntervalPacer] = None,
        listing_limit: int = 25,
    ) -> None:
        """
        Initialize discussion adapter.

        Args:
            communities: One source config per community listing
            settings: Fetch settings
            client: Shared HTTP client
            pacer: Spacing between community requests
            listing_limit: Posts requested per listing
        """
        super().__init__(settings, client)
        self.communities = [c for c in communities if c.enabled]
        self.pacer = pacer or FixedIntervalPacer(self.settings.community_delay)
        self.listing_limit = listing_limit

    def listing_url(self, community: SourceConfig) -> str:
        return f"{community.url.rstrip('/')}/hot.json"

    def to_article(self, post: _Post, community: SourceConfig) -> Article:
        """Convert a listing post into an Article."""
        if post.is_self:
            url = f"https://www.reddit.com{post.permalink}"
        else:
            url = post.url or f"https://www.reddit.com{post.permalink}"

        subreddit = post.subreddit or community.name.split("/")[-1]
        if post.selftext:
            snippet = post.selftext.replace("\n", " ").strip()[: self.settings.snippet_length].strip()
        else:
            snippet = f"Discussion on r/{subreddit} with {post.num_comments} comments"

        if community.category is not None:
            category = community.category
        else:
            category = infer_category(f"{post.title} {post.selftext}", flair=post.link_flair_text)

        return self.build_article(
            community,
            title=post.title.strip(),
            url=url,
            snippet=snippet,
            published=post.created_utc or None,
            outlet=f"Reddit r/{subreddit}",
            category=category,
        )

    async def fetch_community(self, community: SourceConfig, stats: AdapterStats) -> List[Article]:
        """Fetch and convert one community listing. Failures yield []."""
        logger.info("Fetching %s", community.name)
        try:
            async with self.session() as client:
                response = await client.get(
                    self.listing_url(community),
                    params={"limit": self.listing_limit},
                    headers={"Accept": "application/json"},
                )
                response.raise_for_status()
            listing = _Listing.model_validate(response.json())
        except (httpx.HTTPError, ValidationError, ValueError) as e:
            stats.record_failure()
            logger.error("Failed to fetch %s: %s", community.name, e)
            return []

        articles = []
        for child in listing.data.children:
            try:
                post = _Post.model_validate(child.get("data"))
            except ValidationError as e:
                logger.warning("Skipping malformed post in %s: %s", community.name, e)
                continue
            if not post.title or not (post.url or post.permalink):
                continue
            if not passes_quality_filter(post, community.min_score):
                logger.debug("Filtered post %s: %r", post.id, post.title)
                continue
            articles.append(self.to_article(post, community))

        stats.record_success(len(articles))
        logger.info("Got %d posts from %s", len(articles), community.name)
        return articles

    async def _fetch(self, options: FetchOptions, stats: AdapterStats) -> List[Article]:
        results = await self.pacer.run(
            self.communities,
            lambda community: self.fetch_community(community, stats),
        )
        articles = [article for batch in results for article in batch]
        return filter_category(articles, options.category)

    async def _probe(self) -> bool:
        if not self.communities:
            return False
        async with self.session() as client:
            response = await client.get(
                self.listing_url(self.communities[0]),
                params={"limit": 1},
            )
        return response.is_success
