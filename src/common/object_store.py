"""Object store interface shared by the storage backends."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class ObjectStoreError(Exception):
    """Raised when a storage backend cannot complete a request."""


class ObjectNotFoundError(ObjectStoreError):
    """Raised by get() when nothing exists at the path yet."""


class VersionConflictError(ObjectStoreError):
    """Raised when a create or update is rejected because the object changed."""


@dataclass(frozen=True)
class StoredObject:
    """Object content plus the opaque version token needed to update it."""
    content: bytes
    version: str


class ObjectStore(Protocol):
    """Key-path blob storage with conditional create and update."""

    name: str

    def get(self, path: str) -> StoredObject:
        ...

    def create(self, path: str, content: bytes) -> None:
        ...

    def update(self, path: str, content: bytes, version: str) -> None:
        ...


def content_version(content: bytes) -> str:
    """Version token for backends without native object versions."""
    return hashlib.sha256(content).hexdigest()


class MemoryObjectStore:
    """In-process object store, used for dry runs."""

    name = "memory"

    def __init__(self, objects: dict[str, bytes] | None = None):
        self.objects: dict[str, bytes] = dict(objects or {})

    def get(self, path: str) -> StoredObject:
        if path not in self.objects:
            raise ObjectNotFoundError(f"{path} not found")
        content = self.objects[path]
        return StoredObject(content=content, version=content_version(content))

    def create(self, path: str, content: bytes) -> None:
        if path in self.objects:
            raise VersionConflictError(f"{path} already exists")
        self.objects[path] = content

    def update(self, path: str, content: bytes, version: str) -> None:
        current = self.objects.get(path)
        if current is None or content_version(current) != version:
            raise VersionConflictError(f"{path} changed since it was read")
        self.objects[path] = content


class LocalObjectStore:
    """Object store backed by a local directory."""

    name = "local"

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        return self.root / path.lstrip("/")

    def get(self, path: str) -> StoredObject:
        filepath = self._resolve(path)
        try:
            content = filepath.read_bytes()
        except FileNotFoundError as e:
            raise ObjectNotFoundError(f"{filepath} not found") from e
        except OSError as e:
            raise ObjectStoreError(f"error reading {filepath}: {e}") from e
        return StoredObject(content=content, version=content_version(content))

    def create(self, path: str, content: bytes) -> None:
        filepath = self._resolve(path)
        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            with filepath.open("xb") as f:
                f.write(content)
        except FileExistsError as e:
            raise VersionConflictError(f"{filepath} already exists") from e
        except OSError as e:
            raise ObjectStoreError(f"error creating {filepath}: {e}") from e
        logger.debug("Created %s (%d bytes)", filepath, len(content))

    def update(self, path: str, content: bytes, version: str) -> None:
        current = self.get(path)
        if current.version != version:
            raise VersionConflictError(f"{self._resolve(path)} changed since it was read")
        filepath = self._resolve(path)
        try:
            filepath.write_bytes(content)
        except OSError as e:
            raise ObjectStoreError(f"error updating {filepath}: {e}") from e
        logger.debug("Updated %s (%d bytes)", filepath, len(content))
