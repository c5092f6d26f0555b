"""Build the object store selected by the storage config."""

from common.aws import S3ObjectStore, get_s3_client
from common.github import GitHubObjectStore
from common.object_store import LocalObjectStore, MemoryObjectStore, ObjectStore

from aggregate_feeds.config import StorageConfig


def build_store(storage: StorageConfig) -> ObjectStore:
    """Construct the configured backend.

    Raises:
        ValueError: If the backend name is unknown or required settings are missing.
    """
    if storage.backend == "s3":
        if not storage.bucket:
            raise ValueError("storage.bucket (or S3_BUCKET_NAME) is required for the s3 backend")
        client = get_s3_client(
            endpoint_url=storage.endpoint_url,
            region=storage.region,
            timeout=storage.timeout,
            access_key_id=storage.access_key_id,
            secret_access_key=storage.secret_access_key,
        )
        return S3ObjectStore(
            storage.bucket,
            prefix=storage.prefix,
            client=client,
            conditional_writes=storage.conditional_writes,
        )

    if storage.backend == "github":
        if not storage.owner or not storage.repository:
            raise ValueError("storage.owner and storage.repository are required for the github backend")
        return GitHubObjectStore(
            storage.owner,
            storage.repository,
            token=storage.token,
            branch=storage.branch,
            api_url=storage.api_url,
            timeout=storage.timeout,
        )

    if storage.backend == "local":
        return LocalObjectStore(storage.local_path)

    if storage.backend == "memory":
        return MemoryObjectStore()

    raise ValueError(f"Unknown storage backend: {storage.backend}")
