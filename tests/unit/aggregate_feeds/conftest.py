"""Shared fixtures for aggregate_feeds tests."""

import pytest

from common.object_store import MemoryObjectStore

from aggregate_feeds.error_log import ErrorLog

RSS_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Example Blog</title>
    <link>https://example.com/</link>
    <description>Posts</description>
    <item>
      <title>Newest post</title>
      <link>https://example.com/newest</link>
      <pubDate>Fri, 26 Jul 2024 10:00:00 +0800</pubDate>
    </item>
    <item>
      <title>Older post</title>
      <link>https://example.com/older</link>
      <pubDate>Mon, 01 Jan 2024 10:00:00 +0800</pubDate>
    </item>
  </channel>
</rss>
"""

ATOM_FEED = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom Blog</title>
  <link href="https://atom.example.org/"/>
  <id>urn:atom-blog</id>
  <updated>2024-01-05T08:00:00Z</updated>
  <entry>
    <title>Atom post</title>
    <link href="https://atom.example.org/post"/>
    <id>urn:atom-blog:post</id>
    <updated>2024-01-05T08:00:00Z</updated>
  </entry>
</feed>
"""

EMPTY_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Quiet Blog</title>
    <link>https://quiet.example.com/</link>
    <description>Nothing yet</description>
  </channel>
</rss>
"""


def _log_entries(store: MemoryObjectStore, path: str = "api/error.log") -> list[str]:
    content = store.objects.get(path, b"").decode("utf-8")
    return [entry for entry in content.split("\n\n") if entry]


@pytest.fixture
def store() -> MemoryObjectStore:
    return MemoryObjectStore()


@pytest.fixture
def error_log(store) -> ErrorLog:
    return ErrorLog(store, "api/error.log")


@pytest.fixture
def log_entries():
    """Entries written to a MemoryObjectStore error log."""
    return _log_entries


@pytest.fixture
def rss_feed() -> bytes:
    return RSS_FEED


@pytest.fixture
def atom_feed() -> bytes:
    return ATOM_FEED


@pytest.fixture
def empty_feed() -> bytes:
    return EMPTY_FEED
