"""
GitHub VCS provider implementation for GitGrade.

This module implements the GitHub-specific content provider using the GitHub
REST API to fetch the readme, single files and the recursive file tree.
"""

import os
from urllib.parse import quote

import httpx
from dotenv import load_dotenv

from gitgrade.http_client import _get_async_http_client
from gitgrade.vcs.base import BaseVCSProvider

# Load environment variables
load_dotenv()

# GitHub API endpoint
GITHUB_REST_API = "https://api.github.com"

# Status codes meaning "this artifact does not exist"
# 409 is returned for the tree of an empty repository
_ABSENT_STATUS_CODES = {404, 409}


class GitHubProvider(BaseVCSProvider):
    """GitHub content provider using the REST API."""

    def __init__(self, token: str | None = None, host: str = "github.com"):
        """
        Initialize GitHub provider.

        Args:
            token: GitHub Personal Access Token. If not provided, reads from
                   GITHUB_TOKEN environment variable. Public repositories can
                   be read anonymously, at a much lower rate limit.
            host: GitHub host name (default: github.com). Other hosts are
                  treated as GitHub Enterprise Server instances.
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        self.host = host
        self.api_base = (
            GITHUB_REST_API if host == "github.com" else f"https://{host}/api/v3"
        )

    async def get_readme(self, owner: str, repo: str) -> str | None:
        """
        Fetch the README GitHub shows on the repository page.

        Returns:
            README text, or None if the repository has no README.

        Raises:
            httpx.HTTPStatusError: If GitHub API returns a non-404 error
            httpx.RequestError: If GitHub cannot be reached
        """
        response = await self._get(
            f"/repos/{owner}/{repo}/readme", accept="application/vnd.github.raw+json"
        )
        return None if response is None else response.text

    async def get_file(self, owner: str, repo: str, path: str) -> str | None:
        """
        Fetch a file from the default branch.

        Returns:
            File text, or None if the path does not exist.

        Raises:
            httpx.HTTPStatusError: If GitHub API returns a non-404 error
            httpx.RequestError: If GitHub cannot be reached
        """
        response = await self._get(
            f"/repos/{owner}/{repo}/contents/{quote(path)}",
            accept="application/vnd.github.raw+json",
        )
        return None if response is None else response.text

    async def get_tree(
        self, owner: str, repo: str, branch: str = "HEAD"
    ) -> list[str] | None:
        """
        Fetch every blob path of a branch, in the order GitHub returns them.

        Returns:
            List of file paths, or None if the branch or repository is empty.

        Raises:
            httpx.HTTPStatusError: If GitHub API returns a non-404 error
            httpx.RequestError: If GitHub cannot be reached
        """
        response = await self._get(
            f"/repos/{owner}/{repo}/git/trees/{quote(branch)}",
            params={"recursive": "1"},
        )
        if response is None:
            return None

        data = response.json()
        return [
            entry["path"]
            for entry in data.get("tree", [])
            if entry.get("type") == "blob" and entry.get("path")
        ]

    async def _get(
        self,
        endpoint: str,
        accept: str = "application/vnd.github+json",
        params: dict[str, str] | None = None,
    ) -> httpx.Response | None:
        """
        Execute a GET against the GitHub REST API.

        Returns:
            The response, or None when the resource does not exist.
        """
        headers = {
            "Accept": accept,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        client = await _get_async_http_client()
        response = await client.get(
            f"{self.api_base}{endpoint}", headers=headers, params=params
        )
        if response.status_code in _ABSENT_STATUS_CODES:
            return None
        response.raise_for_status()
        return response
