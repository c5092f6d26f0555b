"""Append-only error log kept in the object store."""

import logging

from common.datetime import format_log_timestamp, now_local
from common.object_store import ObjectNotFoundError, ObjectStore, ObjectStoreError

from aggregate_feeds.errors import AggregatorError, LogAppendError

logger = logging.getLogger(__name__)

ENTRY_TERMINATOR = "\n\n"


def append_log(store: ObjectStore, path: str, line: str) -> None:
    """Append one entry to the log object at `path`.

    Reads the current object, then either creates it with the entry or
    updates it with the entry appended, guarded by the version from the read.
    A writer that slips in between the read and the update can be lost.

    Raises:
        LogAppendError: If the log cannot be read, decoded or written.
    """
    entry = line + ENTRY_TERMINATOR

    try:
        current = store.get(path)
    except ObjectNotFoundError:
        try:
            store.create(path, entry.encode("utf-8"))
        except ObjectStoreError as e:
            raise LogAppendError(f"error creating {path}", e) from e
        return
    except ObjectStoreError as e:
        raise LogAppendError(f"error checking {path}", e) from e

    try:
        existing = current.content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise LogAppendError(f"error decoding {path} content", e) from e

    try:
        store.update(path, (existing + entry).encode("utf-8"), current.version)
    except ObjectStoreError as e:
        raise LogAppendError(f"error updating {path}", e) from e


class ErrorLog:
    """Records classified pipeline errors to the remote log, best effort."""

    def __init__(self, store: ObjectStore, path: str, utc_offset_hours: int = 8):
        self.store = store
        self.path = path
        self.utc_offset_hours = utc_offset_hours

    def format_entry(self, stage: str, detail: str) -> str:
        timestamp = format_log_timestamp(now_local(self.utc_offset_hours))
        return f"[{timestamp}] [{stage}] {detail}"

    def record(self, error: AggregatorError) -> str:
        """Write `error` to the log; a failed write is only reported locally."""
        line = self.format_entry(error.stage, str(error))
        logger.warning("%s", line)
        try:
            append_log(self.store, self.path, line)
        except LogAppendError as e:
            logger.error("Failed to write error log %s: %s", self.path, e)
        return line
