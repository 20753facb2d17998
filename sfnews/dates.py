"""Date parsing shared by adapters, scoring and filtering."""

from email.utils import parsedate_to_datetime
from typing import Any, Optional

import pendulum
from pendulum import DateTime


def parse_date(value: Any) -> Optional[DateTime]:
    """
    Parse a publication date into an aware ``pendulum.DateTime``.

    Accepts ISO-8601 strings, RFC 822 strings as found in feed ``pubDate``
    tags, Unix timestamps and datetime objects. Naive values are taken as UTC.
    Returns None for anything that cannot be parsed.
    """
    if value is None or value == "":
        return None

    if isinstance(value, DateTime):
        return value

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return pendulum.from_timestamp(value, tz="UTC")
        except (ValueError, OverflowError, OSError):
            return None

    if hasattr(value, "tzinfo") and hasattr(value, "hour"):
        if value.tzinfo is None:
            return pendulum.instance(value, tz="UTC")
        return pendulum.instance(value)

    text = str(value).strip()
    if not text:
        return None

    try:
        parsed = pendulum.parse(text)
        if isinstance(parsed, DateTime):
            return parsed
    except (ValueError, TypeError, OverflowError):
        pass

    # RFC 822 (e.g. "Wed, 15 Jan 2025 12:00:00 GMT")
    try:
        parsed = parsedate_to_datetime(text)
    except (ValueError, TypeError, IndexError):
        return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        return pendulum.instance(parsed, tz="UTC")
    return pendulum.instance(parsed)


def to_iso(value: Any, fallback: Optional[DateTime] = None) -> str:
    """
    Render a publication date as ISO-8601.

    Unparseable input falls back to ``fallback`` (fetch time by default) so
    every article carries some date.
    """
    parsed = parse_date(value)
    if parsed is None:
        parsed = fallback or pendulum.now("UTC")
    return parsed.in_timezone("UTC").to_iso8601_string()
