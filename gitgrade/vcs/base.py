"""
Base interface for repository host content providers.
"""

from abc import ABC, abstractmethod


class BaseVCSProvider(ABC):
    """
    Read-only access to the content of a hosted repository.

    Providers are constructed with keyword arguments ``token`` and ``host``;
    the fetcher passes the host of the repository being analyzed so one
    provider class can serve self-hosted instances.

    Each read returns None when the artifact does not exist. Any other
    failure (access denied, server error, transport error) is raised as an
    httpx exception so callers can tell a missing file from an unreachable
    host.
    """

    token: str | None = None

    @abstractmethod
    async def get_readme(self, owner: str, repo: str) -> str | None:
        """Fetch the repository's primary README as text."""

    @abstractmethod
    async def get_file(self, owner: str, repo: str, path: str) -> str | None:
        """Fetch a file from the default branch as text."""

    @abstractmethod
    async def get_tree(
        self, owner: str, repo: str, branch: str = "HEAD"
    ) -> list[str] | None:
        """Fetch the recursive list of file paths on a branch."""

    def validate_credentials(self) -> bool:
        """Whether an access token is configured. Public repositories work without one."""
        return bool(self.token)
