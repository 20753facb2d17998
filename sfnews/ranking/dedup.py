"""URL-keyed deduplication of articles."""

import logging
import re
from typing import Dict, List, Set
from urllib.parse import parse_qsl, urlencode, urlsplit

from ..models import CATEGORY_PRIORITY, Article, Category

logger = logging.getLogger(__name__)

# Query parameters that only identify the referrer or campaign.
TRACKING_PARAMS = {
    "gclid",
    "fbclid",
    "dclid",
    "msclkid",
    "mc_cid",
    "mc_eid",
    "ref",
    "ref_src",
    "ref_url",
    "referrer",
    "source",
    "igshid",
    "_ga",
}
TRACKING_PREFIXES = ("utm_",)

_SCHEME = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)


def is_tracking_param(name: str) -> bool:
    """Whether a query parameter is a tracking parameter."""
    name = name.lower()
    return name in TRACKING_PARAMS or name.startswith(TRACKING_PREFIXES)


def _fallback_key(url: str) -> str:
    return url.split("#", 1)[0].lower()


def normalize_url(url: str) -> str:
    """
    Dedup key for a URL.

    Scheme, ``www.``, fragment, trailing slash and tracking parameters are
    dropped; the host is lowercased and the remaining query parameters are
    sorted. Strings that do not parse as a URL with a host are only
    lowercased and stripped of their fragment. Applying this to its own
    output returns the same string.

    Args:
        url: Article URL

    Returns:
        ``host/path`` with an optional ``?sorted-query``
    """
    raw = url.strip()
    # Our own keys carry no scheme (a path may still hold one); parse them
    # as network paths.
    candidate = raw if _SCHEME.match(raw) else f"//{raw}"
    try:
        parts = urlsplit(candidate)
        host = parts.netloc.lower()
    except ValueError:
        return _fallback_key(raw)
    if not host:
        return _fallback_key(raw)

    if host.startswith("www."):
        host = host[4:]
    path = parts.path.rstrip("/")

    params = [
        (name, value)
        for name, value in parse_qsl(parts.query, keep_blank_values=True)
        if not is_tracking_param(name)
    ]
    params.sort()
    query = urlencode(params)

    return f"{host}{path}?{query}" if query else f"{host}{path}"


def dedup_within_category(articles: List[Article]) -> List[Article]:
    """Keep the first article per normalized URL, preserving order."""
    seen: Set[str] = set()
    unique = []
    for article in articles:
        key = normalize_url(article.url)
        if key in seen:
            continue
        seen.add(key)
        unique.append(article)

    if len(unique) < len(articles):
        logger.debug("Dropped %d duplicate articles", len(articles) - len(unique))
    return unique


def dedup_across_categories(
    category_map: Dict[Category, List[Article]],
) -> Dict[Category, List[Article]]:
    """
    Make category lists globally unique by normalized URL.

    Categories are visited in ``CATEGORY_PRIORITY`` order; an article seen
    in an earlier category is dropped from later ones. Surviving articles
    have ``category`` set to the bucket they were kept in.
    """
    seen: Set[str] = set()
    result: Dict[Category, List[Article]] = {}

    for category in CATEGORY_PRIORITY:
        if category not in category_map:
            continue
        kept = []
        for article in category_map[category]:
            key = normalize_url(article.url)
            if key in seen:
                logger.debug("Dropping %s from %s, already listed", article.url, category.value)
                continue
            seen.add(key)
            if article.category != category:
                article = article.with_derived(category=category)
            kept.append(article)
        result[category] = kept

    return result
