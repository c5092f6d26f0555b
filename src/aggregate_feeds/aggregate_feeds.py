"""Collect the latest article of every feed and publish the sorted aggregate."""

import logging

from common.datetime import now_local
from common.object_store import ObjectStore

from aggregate_feeds.config import AggregatorConfig
from aggregate_feeds.error_log import ErrorLog
from aggregate_feeds.errors import FeedListError, FetchError, ParseError, PublishError
from aggregate_feeds.feed_list import FeedList
from aggregate_feeds.fetch_feeds.extract_article import extract_article
from aggregate_feeds.fetch_feeds.fetch_feed import DEFAULT_USER_AGENT, fetch_feed, parse_feed
from aggregate_feeds.models import Article
from aggregate_feeds.publish import publish
from aggregate_feeds.sort_articles import sort_articles

logger = logging.getLogger(__name__)

CLOSING_MESSAGE = "Stop writing code and go ride a road bike now!"


def aggregate_feeds(
    feed_urls: list[str],
    error_log: ErrorLog,
    fetch_timeout: int = 30,
    user_agent: str = DEFAULT_USER_AGENT,
    track_domain: bool = True,
    utc_offset_hours: int = 8,
) -> list[Article]:
    """Fetch each feed in order and return their latest articles, newest first.

    A feed that fails to download or parse is logged and skipped.
    """
    logger.info("Aggregating %d feeds", len(feed_urls))
    articles = []

    for url in feed_urls:
        logger.info("Fetching %s", url)

        try:
            body = fetch_feed(url, timeout=fetch_timeout, user_agent=user_agent)
            feed = parse_feed(url, body)
        except (FetchError, ParseError) as e:
            error_log.record(e)
            continue

        article = extract_article(
            feed,
            error_log,
            now=now_local(utc_offset_hours),
            track_domain=track_domain,
        )
        if article is None:
            logger.info("No entries in %s", url)
            continue

        articles.append(article)

    logger.info("Total articles collected: %d", len(articles))
    return sort_articles(articles)


def run(config: AggregatorConfig, store: ObjectStore, feed_list: FeedList) -> int:
    """Run the whole pipeline once. Returns the process exit code."""
    error_log = ErrorLog(store, config.error_log_path, config.utc_offset_hours)

    try:
        feed_urls = feed_list.list_feeds()
    except FeedListError as e:
        error_log.record(e)
        logger.error("Error reading RSS feeds: %s", e)
        return 1

    articles = aggregate_feeds(
        feed_urls,
        error_log,
        fetch_timeout=config.fetch_timeout,
        user_agent=config.user_agent,
        track_domain=config.track_domain,
        utc_offset_hours=config.utc_offset_hours,
    )

    try:
        publish(store, config.output_path, articles)
    except PublishError as e:
        error_log.record(e)
        logger.error("Error saving data to %s store: %s", store.name, e)
        return 1

    print(CLOSING_MESSAGE)
    return 0
