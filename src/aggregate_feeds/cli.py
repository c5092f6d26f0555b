"""CLI entry point for feed aggregation."""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

from common.cli_helpers import setup_logging

from aggregate_feeds.aggregate_feeds import run
from aggregate_feeds.config import load_config
from aggregate_feeds.feed_list import build_feed_list
from aggregate_feeds.stores import build_store

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Publish the latest article of every configured RSS/Atom feed"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config name (prod/cos/local/test) or path to YAML file. Defaults to CONFIG_ENV or 'prod'",
    )
    parser.add_argument(
        "--feeds",
        default=None,
        help="Read feed URLs from this local file instead of the configured source.",
    )
    parser.add_argument(
        "--no-domain",
        action="store_true",
        help="Leave domainName out of the published articles.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    setup_logging()
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        logger.error("%s", e)
        sys.exit(1)

    if args.feeds:
        config.feeds.source = "file"
        config.feeds.path = args.feeds
    if args.no_domain:
        config.track_domain = False

    try:
        store = build_store(config.storage)
        feed_list = build_feed_list(config.feeds, store)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    sys.exit(run(config, store, feed_list))


if __name__ == "__main__":
    main()
