"""
GitLab VCS provider implementation for GitGrade.

This module implements the GitLab-specific content provider using the GitLab
REST API (v4).
"""

import os
from urllib.parse import quote

import httpx
from dotenv import load_dotenv

from gitgrade.http_client import _get_async_http_client
from gitgrade.vcs.base import BaseVCSProvider

# Load environment variables
load_dotenv()

# GitLab API endpoint
GITLAB_REST_API = "https://gitlab.com/api/v4"

# GitLab has no "primary readme" endpoint, so candidates are tried in order
README_CANDIDATES = ("README.md", "README.rst", "README.txt", "README", "readme.md")

# Tree pagination bounds
TREE_PAGE_SIZE = 100
TREE_MAX_PAGES = 10


class GitLabProvider(BaseVCSProvider):
    """GitLab content provider using the REST API."""

    def __init__(self, token: str | None = None, host: str = "gitlab.com"):
        """
        Initialize GitLab provider.

        Args:
            token: GitLab Personal Access Token. If not provided, reads from
                   GITLAB_TOKEN environment variable. Optional for public projects.
            host: GitLab host name (default: gitlab.com).
        """
        self.token = token or os.getenv("GITLAB_TOKEN")
        self.host = host
        self.api_base = (
            GITLAB_REST_API if host == "gitlab.com" else f"https://{host}/api/v4"
        )

    async def get_readme(self, owner: str, repo: str) -> str | None:
        """Fetch the first README candidate present on the default branch."""
        for candidate in README_CANDIDATES:
            text = await self.get_file(owner, repo, candidate)
            if text is not None:
                return text
        return None

    async def get_file(self, owner: str, repo: str, path: str) -> str | None:
        """
        Fetch a raw file from the default branch.

        Raises:
            httpx.HTTPStatusError: If GitLab API returns a non-404 error
            httpx.RequestError: If GitLab cannot be reached
        """
        response = await self._get(
            f"/projects/{self._project_id(owner, repo)}"
            f"/repository/files/{quote(path, safe='')}/raw",
            params={"ref": "HEAD"},
        )
        return None if response is None else response.text

    async def get_tree(
        self, owner: str, repo: str, branch: str = "HEAD"
    ) -> list[str] | None:
        """
        Fetch blob paths of a branch, following pagination up to TREE_MAX_PAGES.

        Raises:
            httpx.HTTPStatusError: If GitLab API returns a non-404 error
            httpx.RequestError: If GitLab cannot be reached
        """
        paths: list[str] = []
        for page in range(1, TREE_MAX_PAGES + 1):
            response = await self._get(
                f"/projects/{self._project_id(owner, repo)}/repository/tree",
                params={
                    "recursive": "true",
                    "ref": branch,
                    "per_page": str(TREE_PAGE_SIZE),
                    "page": str(page),
                },
            )
            if response is None:
                return paths or None

            entries = response.json()
            paths.extend(
                entry["path"]
                for entry in entries
                if entry.get("type") == "blob" and entry.get("path")
            )
            if not response.headers.get("x-next-page"):
                break

        return paths

    def _project_id(self, owner: str, repo: str) -> str:
        return quote(f"{owner}/{repo}", safe="")

    async def _get(
        self, endpoint: str, params: dict[str, str] | None = None
    ) -> httpx.Response | None:
        """
        Execute a GET against the GitLab REST API.

        Returns:
            The response, or None when the resource does not exist.
        """
        headers = {}
        if self.token:
            headers["PRIVATE-TOKEN"] = self.token

        client = await _get_async_http_client()
        response = await client.get(
            f"{self.api_base}{endpoint}", headers=headers, params=params
        )
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response
