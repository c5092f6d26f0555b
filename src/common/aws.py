"""S3 object store backend."""

import logging

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from common.object_store import (
    ObjectNotFoundError,
    ObjectStoreError,
    StoredObject,
    VersionConflictError,
)

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}
CONFLICT_CODES = {"PreconditionFailed", "ConditionalRequestConflict", "412", "409"}


def get_s3_client(
    endpoint_url: str | None = None,
    region: str | None = None,
    timeout: int = 30,
    access_key_id: str | None = None,
    secret_access_key: str | None = None,
):
    """Create S3 client.

    Credentials left as None fall back to the default boto3 chain.
    """
    return boto3.client(
        "s3",
        endpoint_url=endpoint_url,
        region_name=region,
        aws_access_key_id=access_key_id,
        aws_secret_access_key=secret_access_key,
        config=BotoConfig(connect_timeout=timeout, read_timeout=timeout),
    )


def build_s3_key(prefix: str, path: str) -> str:
    """Join an optional key prefix and an object path."""
    path = path.lstrip("/")
    if not prefix:
        return path
    return f"{prefix.rstrip('/')}/{path}"


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class S3ObjectStore:
    """Object store on an S3 (or S3-compatible, e.g. Tencent COS) bucket.

    The object's ETag is its version token. With ``conditional_writes`` on,
    create sends ``If-None-Match: *`` and update sends ``If-Match: <etag>``
    so a concurrent writer is rejected instead of overwritten. Turn it off
    for S3-compatible services that do not honour conditional PUTs.
    """

    name = "s3"

    def __init__(
        self,
        bucket: str,
        prefix: str = "",
        client=None,
        conditional_writes: bool = True,
    ):
        self.bucket = bucket
        self.prefix = prefix
        self.client = client if client is not None else get_s3_client()
        self.conditional_writes = conditional_writes

    def get(self, path: str) -> StoredObject:
        key = build_s3_key(self.prefix, path)
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            content = response["Body"].read()
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                raise ObjectNotFoundError(f"s3://{self.bucket}/{key} not found") from e
            raise ObjectStoreError(f"error downloading s3://{self.bucket}/{key}: {e}") from e
        except BotoCoreError as e:
            raise ObjectStoreError(f"error downloading s3://{self.bucket}/{key}: {e}") from e
        return StoredObject(content=content, version=response.get("ETag", ""))

    def create(self, path: str, content: bytes) -> None:
        extra = {"IfNoneMatch": "*"} if self.conditional_writes else {}
        self._put(path, content, **extra)

    def update(self, path: str, content: bytes, version: str) -> None:
        extra = {"IfMatch": version} if self.conditional_writes and version else {}
        self._put(path, content, **extra)

    def _put(self, path: str, content: bytes, **extra) -> None:
        key = build_s3_key(self.prefix, path)
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=_content_type(key),
                **extra,
            )
        except ClientError as e:
            if _error_code(e) in CONFLICT_CODES:
                raise VersionConflictError(f"s3://{self.bucket}/{key} changed since it was read") from e
            raise ObjectStoreError(f"error saving s3://{self.bucket}/{key}: {e}") from e
        except BotoCoreError as e:
            raise ObjectStoreError(f"error saving s3://{self.bucket}/{key}: {e}") from e

        logger.info("Uploaded %d bytes to s3://%s/%s", len(content), self.bucket, key)


def _content_type(key: str) -> str:
    if key.endswith(".json"):
        return "application/json"
    return "text/plain; charset=utf-8"
