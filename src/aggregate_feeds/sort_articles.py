"""Order articles across feeds by publish date."""

from datetime import datetime

from common.datetime import parse_display

from aggregate_feeds.models import Article


def _sort_key(article: Article) -> datetime:
    try:
        return parse_display(article.published_display)
    except ValueError:
        return datetime.min


def sort_articles(articles: list[Article]) -> list[Article]:
    """Newest first; equal dates keep their feed-list order.

    An unreadable date sorts last instead of failing the whole list.
    """
    return sorted(articles, key=_sort_key, reverse=True)
