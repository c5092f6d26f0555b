"""Tests for common.aws module."""

from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from common.aws import S3ObjectStore, build_s3_key
from common.object_store import ObjectNotFoundError, ObjectStoreError, VersionConflictError


def _client_error(code: str, operation: str = "GetObject") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class TestBuildS3Key:
    def test_no_prefix(self) -> None:
        assert build_s3_key("", "/rss/rss_data.json") == "rss/rss_data.json"

    def test_with_prefix(self) -> None:
        assert build_s3_key("site/", "api/error.log") == "site/api/error.log"


class TestS3ObjectStore:
    def test_get_returns_content_and_etag(self) -> None:
        client = Mock()
        client.get_object.return_value = {
            "Body": Mock(read=Mock(return_value=b"[]")),
            "ETag": '"abc123"',
        }
        store = S3ObjectStore("bucket", client=client)

        result = store.get("rss/rss_data.json")

        assert result.content == b"[]"
        assert result.version == '"abc123"'
        client.get_object.assert_called_once_with(Bucket="bucket", Key="rss/rss_data.json")

    def test_get_missing_key_raises_not_found(self) -> None:
        client = Mock()
        client.get_object.side_effect = _client_error("NoSuchKey")
        store = S3ObjectStore("bucket", client=client)

        with pytest.raises(ObjectNotFoundError):
            store.get("rss/error.log")

    def test_get_access_denied_raises_store_error(self) -> None:
        client = Mock()
        client.get_object.side_effect = _client_error("AccessDenied")
        store = S3ObjectStore("bucket", client=client)

        with pytest.raises(ObjectStoreError) as exc_info:
            store.get("rss/error.log")
        assert not isinstance(exc_info.value, ObjectNotFoundError)

    def test_get_connection_failure_raises_store_error(self) -> None:
        client = Mock()
        client.get_object.side_effect = EndpointConnectionError(endpoint_url="https://s3")
        store = S3ObjectStore("bucket", client=client)

        with pytest.raises(ObjectStoreError):
            store.get("rss/error.log")

    def test_create_sends_if_none_match(self) -> None:
        client = Mock()
        store = S3ObjectStore("bucket", prefix="site", client=client)

        store.create("rss/rss_data.json", b"[]")

        kwargs = client.put_object.call_args.kwargs
        assert kwargs["Key"] == "site/rss/rss_data.json"
        assert kwargs["Body"] == b"[]"
        assert kwargs["IfNoneMatch"] == "*"
        assert kwargs["ContentType"] == "application/json"

    def test_update_sends_if_match(self) -> None:
        client = Mock()
        store = S3ObjectStore("bucket", client=client)

        store.update("rss/error.log", b"log", '"etag"')

        kwargs = client.put_object.call_args.kwargs
        assert kwargs["IfMatch"] == '"etag"'
        assert "IfNoneMatch" not in kwargs

    def test_conditional_writes_disabled(self) -> None:
        client = Mock()
        store = S3ObjectStore("bucket", client=client, conditional_writes=False)

        store.create("a", b"x")
        store.update("a", b"y", '"etag"')

        for call in client.put_object.call_args_list:
            assert "IfMatch" not in call.kwargs
            assert "IfNoneMatch" not in call.kwargs

    def test_precondition_failed_raises_conflict(self) -> None:
        client = Mock()
        client.put_object.side_effect = _client_error("PreconditionFailed", "PutObject")
        store = S3ObjectStore("bucket", client=client)

        with pytest.raises(VersionConflictError):
            store.update("a", b"y", '"stale"')

    def test_other_put_error_raises_store_error(self) -> None:
        client = Mock()
        client.put_object.side_effect = _client_error("InternalError", "PutObject")
        store = S3ObjectStore("bucket", client=client)

        with pytest.raises(ObjectStoreError) as exc_info:
            store.create("a", b"x")
        assert not isinstance(exc_info.value, VersionConflictError)
