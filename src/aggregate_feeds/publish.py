"""Publish the aggregate as a JSON artifact."""

import json
import logging

from common.object_store import ObjectNotFoundError, ObjectStore, ObjectStoreError

from aggregate_feeds.errors import PublishError
from aggregate_feeds.models import Article

logger = logging.getLogger(__name__)


def article_to_record(article: Article) -> dict:
    """Serialize an Article with the published field names and order."""
    record = {}
    if article.domain_name is not None:
        record["domainName"] = article.domain_name
    record["name"] = article.source_name
    record["title"] = article.title
    record["link"] = article.link
    record["date"] = article.published_display
    return record


def serialize_articles(articles: list[Article]) -> bytes:
    """JSON array of article records; ``[]`` when there are none."""
    records = [article_to_record(a) for a in articles]
    return json.dumps(records, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def publish(store: ObjectStore, path: str, articles: list[Article]) -> None:
    """Create the artifact, or replace it wholesale if it already exists.

    Raises:
        PublishError: If the store cannot be read or written.
    """
    content = serialize_articles(articles)

    try:
        current = store.get(path)
    except ObjectNotFoundError:
        try:
            store.create(path, content)
        except ObjectStoreError as e:
            raise PublishError(f"error creating {path} in {store.name} store", e, backend=store.name) from e
        logger.info("Created %s with %d articles", path, len(articles))
        return
    except ObjectStoreError as e:
        raise PublishError(f"error checking {path} in {store.name} store", e, backend=store.name) from e

    try:
        store.update(path, content, current.version)
    except ObjectStoreError as e:
        raise PublishError(f"error updating {path} in {store.name} store", e, backend=store.name) from e
    logger.info("Updated %s with %d articles", path, len(articles))
