"""Build an Article from the newest entry of a parsed feed."""

import logging
from datetime import datetime
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit

from common.datetime import TimestampParseError, format_display, parse_timestamp

from aggregate_feeds.error_log import ErrorLog
from aggregate_feeds.errors import DomainError, TimestampError
from aggregate_feeds.models import Article

logger = logging.getLogger(__name__)

UNKNOWN_DOMAIN = "unknown"


def resolve_published(entry: Mapping[str, Any]) -> datetime:
    """Parse an entry's `published` date, falling back to `updated`.

    Raises:
        TimestampParseError: If neither field parses.
    """
    try:
        return parse_timestamp(entry.get("published"))
    except TimestampParseError as published_error:
        updated = entry.get("updated")
        if not updated:
            raise published_error
        return parse_timestamp(updated)


def extract_domain(link: Optional[str]) -> str:
    """Reduce a site link to ``scheme://host``; the scheme defaults to https.

    Raises:
        DomainError: If the link cannot be parsed or has no host.
    """
    value = (link or "").strip()
    try:
        parts = urlsplit(value)
        if not parts.scheme and not parts.netloc and value:
            # "example.com/blog" parses as a bare path
            parts = urlsplit(f"//{value}")
        host = parts.hostname
    except ValueError as e:
        raise DomainError(value, e) from e

    if not host:
        raise DomainError(value, "no host in feed link")

    scheme = parts.scheme or "https"
    return f"{scheme}://{host}"


def extract_article(
    feed: Mapping[str, Any],
    error_log: ErrorLog,
    now: datetime,
    track_domain: bool = True,
) -> Optional[Article]:
    """Return the feed's latest entry as an Article, or None if it has none.

    The first entry is taken as the newest, in feed order. A bad date falls
    back to `now` and a bad site link to "unknown"; both are recorded in the
    error log and never stop the feed from producing an Article.
    """
    entries = feed.get("entries") or []
    if not entries:
        return None

    info = feed.get("feed") or {}
    entry = entries[0]
    title = entry.get("title", "")

    domain_name = None
    if track_domain:
        try:
            domain_name = extract_domain(info.get("link"))
        except DomainError as e:
            error_log.record(e)
            domain_name = UNKNOWN_DOMAIN

    try:
        published = resolve_published(entry)
    except TimestampParseError as e:
        error_log.record(TimestampError(title, e))
        published = now

    return Article(
        source_name=info.get("title", ""),
        title=title,
        link=entry.get("link", ""),
        published_display=format_display(published),
        domain_name=domain_name,
    )
