"""Sources for the list of feed URLs."""

import logging
from pathlib import Path
from typing import Protocol

from common.object_store import ObjectNotFoundError, ObjectStore, ObjectStoreError

from aggregate_feeds.config import FeedsConfig
from aggregate_feeds.errors import FeedListError

logger = logging.getLogger(__name__)


class FeedList(Protocol):
    def list_feeds(self) -> list[str]:
        ...


def split_feed_lines(text: str) -> list[str]:
    """One candidate URL per line. Blank lines are kept, not filtered."""
    lines = text.split("\n")
    if lines[-1] == "":
        # a trailing newline ends the last line, it does not start a new one
        lines.pop()
    return [line.rstrip("\r") for line in lines]


class FileFeedList:
    """Newline-delimited feed URLs in a local file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def list_feeds(self) -> list[str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FeedListError(f"error opening file {self.path}", e) from e
        feeds = split_feed_lines(text)
        logger.info("Read %d feeds from %s", len(feeds), self.path)
        return feeds


class StoreFeedList:
    """Newline-delimited feed URLs in an object of the store."""

    def __init__(self, store: ObjectStore, path: str):
        self.store = store
        self.path = path

    def list_feeds(self) -> list[str]:
        try:
            content = self.store.get(self.path).content
        except ObjectNotFoundError as e:
            raise FeedListError(f"{self.path} not found in {self.store.name} store") from e
        except ObjectStoreError as e:
            raise FeedListError(f"error fetching {self.path} from {self.store.name} store", e) from e

        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FeedListError(f"error decoding {self.path} content", e) from e

        feeds = split_feed_lines(text)
        logger.info("Read %d feeds from %s", len(feeds), self.path)
        return feeds


def build_feed_list(feeds: FeedsConfig, store: ObjectStore) -> FeedList:
    if feeds.source == "file":
        return FileFeedList(feeds.path)
    if feeds.source == "store":
        return StoreFeedList(store, feeds.path)
    raise ValueError(f"Unknown feeds source: {feeds.source}")
