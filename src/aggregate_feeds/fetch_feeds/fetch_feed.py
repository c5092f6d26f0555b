"""Download and parse a single feed."""

import logging

import feedparser
import requests

from aggregate_feeds.errors import FetchError, ParseError
from aggregate_feeds.fetch_feeds.sanitize import sanitize

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "feed-aggregator/1.0 (RSS reader)"


def fetch_feed(url: str, timeout: int = 30, user_agent: str = DEFAULT_USER_AGENT) -> bytes:
    """GET a feed once and return the full body.

    Raises:
        FetchError: On transport failure, timeout or a non-2xx status.
    """
    try:
        response = requests.get(
            url,
            timeout=timeout,
            headers={"User-Agent": user_agent},
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(url, e) from e

    return response.content


def parse_feed(url: str, body: bytes) -> feedparser.FeedParserDict:
    """Sanitize a raw body and parse it as RSS/Atom.

    feedparser is lenient and sets ``bozo`` on recoverable problems; only a
    document it cannot identify as any feed format is treated as a failure.

    Raises:
        ParseError: If the body is not a recognizable feed.
    """
    # bytes, so feedparser never mistakes the body for a URL or filename.
    # The body is re-encoded as UTF-8 whatever its XML declaration says.
    feed = feedparser.parse(
        sanitize(body).encode("utf-8"),
        response_headers={"content-type": "application/xml; charset=utf-8"},
    )

    if not feed.get("version"):
        cause = feed.get("bozo_exception") or "unrecognised feed format"
        raise ParseError(url, cause)

    if feed.get("bozo"):
        logger.debug("Feed %s parsed with warnings: %s", url, feed.get("bozo_exception"))

    return feed
