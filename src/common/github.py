"""GitHub repository contents as an object store."""

import base64
import logging
from posixpath import basename
from urllib.parse import quote

import requests

from common.object_store import (
    ObjectNotFoundError,
    ObjectStoreError,
    StoredObject,
    VersionConflictError,
)

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"


class GitHubObjectStore:
    """Object store on top of the GitHub contents API.

    Each create or update is a commit on ``branch``. The blob SHA returned by
    a read is the version token; GitHub rejects an update whose SHA is stale.
    """

    name = "github"

    def __init__(
        self,
        owner: str,
        repository: str,
        token: str | None = None,
        branch: str = "master",
        api_url: str = GITHUB_API_URL,
        timeout: int = 30,
        session: requests.Session | None = None,
    ):
        self.owner = owner
        self.repository = repository
        self.branch = branch
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({"Accept": "application/vnd.github+json"})
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

    def _contents_url(self, path: str) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.repository}/contents/{quote(path.lstrip('/'))}"

    def get(self, path: str) -> StoredObject:
        try:
            response = self.session.get(
                self._contents_url(path),
                params={"ref": self.branch},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ObjectStoreError(f"error checking {path} in GitHub: {e}") from e

        if response.status_code == 404:
            raise ObjectNotFoundError(f"{path} not found in GitHub repository")
        if not response.ok:
            raise ObjectStoreError(
                f"error checking {path} in GitHub: {response.status_code} {response.text[:200]}"
            )

        data = response.json()
        if data.get("type") != "file":
            raise ObjectStoreError(f"{path} in GitHub is not a file")

        sha = data["sha"]
        # Files over 1 MB come back with encoding "none" and no inline content
        if data.get("encoding", "base64") != "base64":
            data = self._get_blob(path, sha)
        return StoredObject(content=self._decode(path, data), version=sha)

    def _get_blob(self, path: str, sha: str) -> dict:
        url = f"{self.api_url}/repos/{self.owner}/{self.repository}/git/blobs/{sha}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ObjectStoreError(f"error fetching blob for {path} from GitHub: {e}") from e

        if not response.ok:
            raise ObjectStoreError(
                f"error fetching blob for {path} from GitHub: "
                f"{response.status_code} {response.text[:200]}"
            )
        return response.json()

    @staticmethod
    def _decode(path: str, data: dict) -> bytes:
        encoding = data.get("encoding", "base64")
        if encoding != "base64":
            raise ObjectStoreError(f"unsupported encoding {encoding!r} for {path} in GitHub")
        try:
            return base64.b64decode(data.get("content", ""))
        except ValueError as e:
            raise ObjectStoreError(f"error decoding {path} content: {e}") from e

    def create(self, path: str, content: bytes) -> None:
        self._put(path, content, message=f"Create {basename(path)}")

    def update(self, path: str, content: bytes, version: str) -> None:
        self._put(path, content, message=f"Update {basename(path)}", sha=version)

    def _put(self, path: str, content: bytes, message: str, sha: str | None = None) -> None:
        payload = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": self.branch,
        }
        if sha is not None:
            payload["sha"] = sha

        action = "updating" if sha else "creating"
        try:
            response = self.session.put(self._contents_url(path), json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise ObjectStoreError(f"error {action} {path} in GitHub: {e}") from e

        # 409 for a stale sha, 422 when creating over an existing file
        if response.status_code in (409, 422):
            raise VersionConflictError(
                f"error {action} {path} in GitHub: {response.status_code} {response.text[:200]}"
            )
        if not response.ok:
            raise ObjectStoreError(
                f"error {action} {path} in GitHub: {response.status_code} {response.text[:200]}"
            )

        logger.info("%s %s in %s/%s", message, path, self.owner, self.repository)
