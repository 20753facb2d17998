"""Link aggregator adapter (Hacker News Firebase API)."""

import asyncio
import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel, ValidationError

from ..config import FetchSettings, SourceConfig
from ..geo import LOCAL_ORGANIZATIONS, SCORING_NEIGHBORHOODS, is_locale_relevant
from ..models import AdapterStats, Article, Category
from .base import SourceAdapter
from .models import FetchOptions
from .text import make_snippet

logger = logging.getLogger(__name__)


class _Story(BaseModel):
    """Item detail payload (only the fields we read)."""

    id: int
    type: str = ""
    title: str = ""
    url: Optional[str] = None
    text: Optional[str] = None
    score: int = 0
    time: int = 0
    descendants: int = 0


def story_relevance(story: _Story) -> float:
    """
    Order stories by how local they are.

    Only used to rank results inside this adapter; the pipeline rescoring
    does not see it.
    """
    text = f"{story.title} {story.url or ''}".lower()
    score = 0.0

    if "san francisco" in text:
        score += 20
    if "bay area" in text:
        score += 15
    if "sf " in text or " sf" in text:
        score += 10

    for neighborhood in SCORING_NEIGHBORHOODS:
        if neighborhood in text:
            score += 5

    if any(org in text for org in LOCAL_ORGANIZATIONS):
        score += 3

    # Popular stories are more newsworthy, up to a cap
    score += min(story.score / 50, 10)
    return score


class LinkAggregatorAdapter(SourceAdapter):
    """Fetch top stories and keep the locally relevant ones."""

    kind = "link_aggregator"

    def __init__(
        self,
        source: SourceConfig,
        settings: Optional[FetchSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize link aggregator adapter."""
        super().__init__(settings, client)
        self.source = source
        self.base_url = source.url.rstrip("/")

    @property
    def category(self) -> Category:
        return self.source.category or Category.TECH

    async def fetch_story(self, client: httpx.AsyncClient, story_id: int) -> Optional[_Story]:
        """Fetch one item. Anything but a well-formed story yields None."""
        try:
            response = await client.get(f"{self.base_url}/item/{story_id}.json")
            response.raise_for_status()
            payload = response.json()
            if not isinstance(payload, dict):
                return None
            story = _Story.model_validate(payload)
        except (httpx.HTTPError, ValidationError, ValueError) as e:
            logger.debug("Item %s skipped: %s", story_id, e)
            return None

        if story.type != "story" or not story.title:
            return None
        return story

    async def fetch_stories(self, client: httpx.AsyncClient) -> List[_Story]:
        """Fetch the top ID list, then item details in bounded batches."""
        response = await client.get(f"{self.base_url}/topstories.json")
        response.raise_for_status()
        ids = response.json()
        if not isinstance(ids, list):
            raise ValueError("Top stories payload is not a list")

        top_ids = ids[: self.settings.top_story_count]
        batch_size = self.settings.story_batch_size
        stories: List[_Story] = []

        for start in range(0, len(top_ids), batch_size):
            batch = top_ids[start:start + batch_size]
            results = await asyncio.gather(*(self.fetch_story(client, i) for i in batch))
            stories.extend(s for s in results if s is not None)

        return stories

    def to_article(self, story: _Story) -> Article:
        """Convert a story into an Article."""
        if story.text:
            snippet = make_snippet(story.text, self.settings.snippet_length)
        else:
            snippet = (
                f"Hacker News discussion with {story.descendants} comments "
                f"and {story.score} points"
            )

        return self.build_article(
            self.source,
            title=story.title.strip(),
            url=story.url or f"https://news.ycombinator.com/item?id={story.id}",
            snippet=snippet,
            published=story.time or None,
            outlet=self.source.name,
            category=self.category,
        )

    async def _fetch(self, options: FetchOptions, stats: AdapterStats) -> List[Article]:
        if options.category is not None and options.category != self.category:
            return []

        logger.info("Fetching top stories from %s", self.source.name)
        async with self.session() as client:
            stories = await self.fetch_stories(client)

        relevant = [
            s for s in stories
            if is_locale_relevant(f"{s.title} {s.url or ''} {s.text or ''}")
        ]
        logger.info("Found %d locale-relevant stories out of %d", len(relevant), len(stories))

        relevant.sort(key=story_relevance, reverse=True)
        articles = [self.to_article(s) for s in relevant[: self.settings.story_max_results]]
        stats.record_success(len(articles))
        return articles

    async def _probe(self) -> bool:
        async with self.session() as client:
            response = await client.get(f"{self.base_url}/topstories.json", params={"limitToFirst": 1, "orderBy": '"$key"'})
        return response.is_success
