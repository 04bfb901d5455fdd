"""
specsync — GitHub Releases API client.

Base URL: https://api.github.com
Auth: `Authorization: Bearer ...` plus the v3 Accept header on every request.

Key endpoints used:
  GET  /repos/{org}/{repo}/releases/latest  — newest published release
  POST /repos/{org}/{repo}/releases         — create a release for a tag
"""

import httpx
from pydantic import ValidationError

from specsync.errors import GitHubAPIError, ReleaseResponseError
from specsync.github.auth import GitHubCredentials
from specsync.models.run import ReleaseInfo
from specsync.utils.logging import logger, step_timer

BASELINE_TAG = "v0"


def increment_version(tag: str) -> str:
    """`v4` -> `v5`. Input is trusted to be `v<int>`."""
    return f"v{int(tag[1:]) + 1}"


class ReleasesClient:
    """Thin blocking wrapper around the GitHub releases endpoints."""

    def __init__(
        self,
        credentials: GitHubCredentials,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.credentials = credentials
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            headers=self.credentials.as_headers(),
            timeout=self.timeout,
            transport=self.transport,
        )

    def latest_tag(self, org: str, repo: str) -> str:
        """Return the newest release tag, or BASELINE_TAG if there are none yet."""
        with step_timer("GitHub — fetch latest release"):
            with self._client() as client:
                resp = client.get(f"/repos/{org}/{repo}/releases/latest")
            if resp.status_code == 404:
                logger.info("  No releases yet for %s/%s, starting from %s", org, repo, BASELINE_TAG)
                return BASELINE_TAG
            if not resp.is_success:
                logger.error("  GitHub latest release returned %d: %s", resp.status_code, resp.text)
                raise GitHubAPIError("latest release", resp.status_code, resp.text)
            try:
                tag = resp.json()["tag_name"]
            except (ValueError, KeyError, TypeError) as exc:
                raise ReleaseResponseError(f"latest release has no tag_name ({exc})") from exc
            logger.info("  Latest release: %s", tag)
            return tag

    def create_release(self, org: str, repo: str, tag: str) -> ReleaseInfo:
        """Create a release for `tag` and return the parsed response."""
        with step_timer(f"GitHub — create release {tag}"):
            with self._client() as client:
                resp = client.post(
                    f"/repos/{org}/{repo}/releases",
                    json={"tag_name": tag},
                )
            if not resp.is_success:
                logger.error("  GitHub create release returned %d: %s", resp.status_code, resp.text)
                raise GitHubAPIError("create release", resp.status_code, resp.text)
            try:
                return ReleaseInfo.model_validate(resp.json())
            except (ValueError, ValidationError) as exc:
                raise ReleaseResponseError(str(exc)) from exc
