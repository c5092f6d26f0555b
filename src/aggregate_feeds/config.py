"""Configuration loader for aggregate_feeds."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from common.config import find_config_path, load_yaml

CONFIG_DIR = Path(__file__).parent / "configs"


@dataclass
class StorageConfig:
    backend: str = "s3"  # "s3", "github", "local" or "memory"
    timeout: int = 30
    # s3
    bucket: str = ""
    prefix: str = ""
    endpoint_url: str | None = None
    region: str | None = None
    conditional_writes: bool = True
    access_key_id: str | None = None
    secret_access_key: str | None = None
    # github
    owner: str = ""
    repository: str = ""
    branch: str = "master"
    api_url: str = "https://api.github.com"
    token: str | None = None
    # local
    local_path: str = "output"


@dataclass
class FeedsConfig:
    source: str = "file"  # "file" or "store"
    path: str = "rss_feeds.txt"


@dataclass
class AggregatorConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    feeds: FeedsConfig = field(default_factory=FeedsConfig)
    output_path: str = "api/rss_data.json"
    error_log_path: str = "api/error.log"
    fetch_timeout: int | None = None
    user_agent: str = "feed-aggregator/1.0 (RSS reader)"
    track_domain: bool = True
    utc_offset_hours: int = 8

    def __post_init__(self):
        # Feed fetches share the storage client's timeout unless set
        if self.fetch_timeout is None:
            self.fetch_timeout = self.storage.timeout


def load_config(config_name: str | None = None) -> AggregatorConfig:
    """Load configuration from a YAML file and the environment.

    This is the only place the environment is read. Secrets are looked up
    through the env var names given in the YAML (``token_env``,
    ``access_key_env``, ``secret_key_env``).

    Args:
        config_name: Name of config file (without .yaml extension) or a
                    path to one. If None, uses CONFIG_ENV env var or "prod".

    Returns:
        Loaded AggregatorConfig object
    """
    config_path = find_config_path(config_name, CONFIG_DIR, env_var="CONFIG_ENV")
    return parse_config(load_yaml(config_path), os.environ)


def parse_config(data: dict, env: dict | None = None) -> AggregatorConfig:
    """Parse config dictionary into AggregatorConfig object."""
    env = env or {}
    storage_data = data.get("storage", {}) or {}
    feeds_data = data.get("feeds", {}) or {}

    storage = StorageConfig(
        backend=storage_data.get("backend", "s3"),
        timeout=storage_data.get("timeout", 30),
        bucket=env.get("S3_BUCKET_NAME") or storage_data.get("bucket", ""),
        prefix=storage_data.get("prefix", ""),
        endpoint_url=storage_data.get("endpoint_url"),
        region=storage_data.get("region"),
        conditional_writes=storage_data.get("conditional_writes", True),
        access_key_id=_from_env(env, storage_data.get("access_key_env")),
        secret_access_key=_from_env(env, storage_data.get("secret_key_env")),
        owner=storage_data.get("owner", ""),
        repository=storage_data.get("repository", ""),
        branch=storage_data.get("branch", "master"),
        api_url=storage_data.get("api_url", "https://api.github.com"),
        token=_from_env(env, storage_data.get("token_env", "GITHUB_TOKEN")),
        local_path=storage_data.get("local_path", "output"),
    )

    feeds = FeedsConfig(
        source=feeds_data.get("source", "file"),
        path=feeds_data.get("path", "rss_feeds.txt"),
    )

    return AggregatorConfig(
        storage=storage,
        feeds=feeds,
        output_path=data.get("output_path", "api/rss_data.json"),
        error_log_path=data.get("error_log_path", "api/error.log"),
        fetch_timeout=data.get("fetch_timeout"),
        user_agent=data.get("user_agent", "feed-aggregator/1.0 (RSS reader)"),
        track_domain=data.get("track_domain", True),
        utc_offset_hours=data.get("utc_offset_hours", 8),
    )


def _from_env(env, name: str | None) -> str | None:
    if not name:
        return None
    return env.get(name) or None
