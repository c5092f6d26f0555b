"""Tests for common.object_store module."""

import pytest

from common.object_store import (
    LocalObjectStore,
    MemoryObjectStore,
    ObjectNotFoundError,
    VersionConflictError,
    content_version,
)


class TestMemoryObjectStore:
    def test_get_missing_raises_not_found(self) -> None:
        with pytest.raises(ObjectNotFoundError):
            MemoryObjectStore().get("api/error.log")

    def test_create_then_get(self) -> None:
        store = MemoryObjectStore()
        store.create("api/error.log", b"hello")
        result = store.get("api/error.log")
        assert result.content == b"hello"
        assert result.version == content_version(b"hello")

    def test_create_existing_conflicts(self) -> None:
        store = MemoryObjectStore({"a": b"x"})
        with pytest.raises(VersionConflictError):
            store.create("a", b"y")

    def test_update_with_current_version(self) -> None:
        store = MemoryObjectStore({"a": b"x"})
        version = store.get("a").version
        store.update("a", b"y", version)
        assert store.objects["a"] == b"y"

    def test_update_with_stale_version_conflicts(self) -> None:
        store = MemoryObjectStore({"a": b"x"})
        stale = store.get("a").version
        store.update("a", b"y", stale)
        with pytest.raises(VersionConflictError):
            store.update("a", b"z", stale)


class TestLocalObjectStore:
    def test_get_missing_raises_not_found(self, tmp_path) -> None:
        with pytest.raises(ObjectNotFoundError):
            LocalObjectStore(tmp_path).get("api/rss_data.json")

    def test_create_makes_parent_dirs(self, tmp_path) -> None:
        store = LocalObjectStore(tmp_path)
        store.create("api/rss_data.json", b"[]")
        assert (tmp_path / "api" / "rss_data.json").read_bytes() == b"[]"

    def test_create_existing_conflicts(self, tmp_path) -> None:
        store = LocalObjectStore(tmp_path)
        store.create("a.txt", b"x")
        with pytest.raises(VersionConflictError):
            store.create("a.txt", b"y")

    def test_update_round_trip(self, tmp_path) -> None:
        store = LocalObjectStore(tmp_path)
        store.create("a.txt", b"x")
        store.update("a.txt", b"y", store.get("a.txt").version)
        assert store.get("a.txt").content == b"y"

    def test_update_after_external_change_conflicts(self, tmp_path) -> None:
        store = LocalObjectStore(tmp_path)
        store.create("a.txt", b"x")
        version = store.get("a.txt").version
        (tmp_path / "a.txt").write_bytes(b"changed")
        with pytest.raises(VersionConflictError):
            store.update("a.txt", b"y", version)

    def test_leading_slash_stays_under_root(self, tmp_path) -> None:
        store = LocalObjectStore(tmp_path)
        store.create("/api/error.log", b"x")
        assert (tmp_path / "api" / "error.log").exists()
