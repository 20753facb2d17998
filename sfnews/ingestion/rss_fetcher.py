"""Syndication feed adapter."""

import logging
import re
from typing import Callable, Dict, List, Optional

import feedparser
import httpx
import pendulum

from ..config import FetchSettings, SourceConfig
from ..models import AdapterStats, Article
from .base import SourceAdapter, filter_category
from .categorize import infer_category
from .http import get_with_retry
from .models import FeedItem, FetchOptions
from .text import decode_entities, make_snippet

logger = logging.getLogger(__name__)

_ITEM = re.compile(r"<item[\s>][\s\S]*?</item>", re.IGNORECASE)

FeedParser = Callable[[str], List[FeedItem]]


def _tag_pattern(tag: str, cdata: bool) -> "re.Pattern[str]":
    name = re.escape(tag)
    if cdata:
        return re.compile(rf"<{name}(?:\s[^>]*)?>\s*<!\[CDATA\[([\s\S]*?)\]\]>\s*</{name}>", re.IGNORECASE)
    return re.compile(rf"<{name}(?:\s[^>]*)?>([\s\S]*?)</{name}>", re.IGNORECASE)


def extract_tag(xml: str, tag: str) -> str:
    """Text of the first ``tag`` element, CDATA-wrapped or bare."""
    match = _tag_pattern(tag, cdata=True).search(xml)
    if match:
        return decode_entities(match.group(1).strip())
    match = _tag_pattern(tag, cdata=False).search(xml)
    return decode_entities(match.group(1).strip()) if match else ""


def extract_all_tags(xml: str, tag: str) -> List[str]:
    """Text of every ``tag`` element."""
    values = []
    for match in _tag_pattern(tag, cdata=False).finditer(xml):
        raw = match.group(1).strip()
        cdata = re.match(r"<!\[CDATA\[([\s\S]*?)\]\]>$", raw)
        value = decode_entities((cdata.group(1) if cdata else raw).strip())
        if value:
            values.append(value)
    return values


def parse_feed_document(xml: str) -> List[FeedItem]:
    """
    Tolerant tag-scoped extraction of feed items.

    Upstream documents are not always well-formed, so each ``<item>`` block
    is read independently. Items missing a title or link are skipped; an
    unterminated trailing item is ignored.
    """
    items = []
    for block in _ITEM.findall(xml):
        title = extract_tag(block, "title")
        link = extract_tag(block, "link")
        if not title or not link:
            logger.debug("Skipping feed item without title or link")
            continue
        items.append(
            FeedItem(
                title=title,
                link=link,
                description=extract_tag(block, "description"),
                content=extract_tag(block, "content:encoded"),
                pub_date=extract_tag(block, "pubDate") or None,
                categories=[c.lower() for c in extract_all_tags(block, "category")],
                source=extract_tag(block, "source") or None,
            )
        )
    return items


def parse_feed_with_feedparser(xml: str) -> List[FeedItem]:
    """Structured parsing with feedparser, for well-formed feeds."""
    feed = feedparser.parse(xml)
    if feed.bozo and not feed.entries:
        raise ValueError(f"Invalid feed: {feed.bozo_exception}")

    items = []
    for entry in feed.entries:
        title = entry.get("title")
        link = entry.get("link")
        if not title or not link:
            continue

        content = ""
        if entry.get("content"):
            content = entry.content[0].get("value", "")

        source = None
        if entry.get("source"):
            source = entry.source.get("title")

        items.append(
            FeedItem(
                title=title.strip(),
                link=link.strip(),
                description=entry.get("summary", "") or entry.get("description", ""),
                content=content,
                pub_date=entry.get("published") or entry.get("updated"),
                categories=[t.get("term", "").lower() for t in entry.get("tags", []) if t.get("term")],
                source=source,
            )
        )
    return items


PARSERS: Dict[str, FeedParser] = {
    "tolerant": parse_feed_document,
    "feedparser": parse_feed_with_feedparser,
}


class FeedAdapter(SourceAdapter):
    """Fetch and parse one syndication feed."""

    kind = "feed"

    def __init__(
        self,
        source: SourceConfig,
        settings: Optional[FetchSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize feed adapter."""
        super().__init__(settings, client)
        self.source = source
        self.parser = PARSERS[source.parser]

    @property
    def name(self) -> str:
        return f"feed:{self.source.name}"

    def to_article(self, item: FeedItem, fetched_at: pendulum.DateTime) -> Article:
        """Convert a parsed feed item into an Article."""
        raw_snippet = item.description or item.content or item.title
        snippet = make_snippet(raw_snippet, self.settings.snippet_length)

        if self.source.category is not None:
            category = self.source.category
        else:
            category = infer_category(f"{item.title} {snippet}", tags=item.categories)

        return self.build_article(
            self.source,
            title=item.title,
            url=item.link,
            snippet=snippet,
            published=item.pub_date,
            outlet=item.source or self.source.name,
            category=category,
            fetched_at=fetched_at,
        )

    async def fetch_items(self) -> List[FeedItem]:
        """Fetch the feed document and parse it."""
        async with self.session() as client:
            response = await get_with_retry(
                client,
                self.source.url,
                retries=1,
                backoff=self.settings.retry_backoff,
                headers={"Accept": "application/rss+xml, application/xml, text/xml"},
            )
        return self.parser(response.text)

    async def _fetch(self, options: FetchOptions, stats: AdapterStats) -> List[Article]:
        logger.info("Fetching feed: %s", self.source.name)
        items = await self.fetch_items()
        fetched_at = pendulum.now("UTC")

        articles = []
        for item in items[: self.settings.feed_max_items]:
            try:
                articles.append(self.to_article(item, fetched_at))
            except ValueError as e:
                logger.debug("%s: skipping item %r: %s", self.name, item.link, e)

        articles = filter_category(articles, options.category)
        stats.record_success(len(articles))
        logger.info("Parsed %d articles from %s", len(articles), self.source.name)
        return articles

    async def _probe(self) -> bool:
        async with self.session() as client:
            response = await client.head(self.source.url)
        return response.is_success
