"""
Repository reference parsing.
"""

import re
from typing import NamedTuple

from gitgrade.errors import InvalidReference
from gitgrade.vcs import get_platform_for_host, list_supported_hosts, normalize_host

# owner/name segments as accepted by GitHub and GitLab
_SEGMENT = re.compile(r"^[A-Za-z0-9_.-]+$")
_SSH_URL = re.compile(r"^git@(?P<host>[^:]+):(?P<path>.+)$")


class RepositoryRef(NamedTuple):
    """A repository identified by host, owner and name."""

    host: str
    owner: str
    name: str

    @property
    def platform(self) -> str:
        """VCS platform identifier ('github', 'gitlab') registered for the host."""
        platform = get_platform_for_host(self.host)
        if platform is None:
            raise InvalidReference(f"No repository provider is registered for {self.host}.")
        return platform

    @property
    def url(self) -> str:
        """Canonical https URL of the repository."""
        return f"https://{self.host}/{self.owner}/{self.name}"

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


def parse_repository_url(url: str) -> RepositoryRef:
    """
    Resolve a repository URL into a RepositoryRef.

    Accepts https/http URLs, scheme-less ``host/owner/name`` strings and
    ``git@host:owner/name.git`` SSH URLs. Extra path segments such as
    ``/tree/main/docs`` are ignored.

    Args:
        url: Repository URL as typed by the user.

    Returns:
        The parsed reference with a normalized host.

    Raises:
        InvalidReference: If the URL does not match a host/owner/name shape.
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidReference("Please enter a repository URL.")

    raw = url.strip()
    ssh_match = _SSH_URL.match(raw)
    if ssh_match:
        host = ssh_match.group("host")
        path = ssh_match.group("path")
    else:
        without_scheme = re.sub(r"^[a-zA-Z][a-zA-Z0-9+.-]*://", "", raw)
        host, _, path = without_scheme.partition("/")

    host = normalize_host(host.split("@")[-1].split(":")[0])
    if get_platform_for_host(host) is None:
        supported = ", ".join(list_supported_hosts())
        raise InvalidReference(
            f"Unsupported repository host in '{url}'. "
            f"Please enter a repository URL on one of: {supported} "
            "(e.g., https://github.com/owner/repo)."
        )

    path = path.split("?", 1)[0].split("#", 1)[0]
    segments = [segment for segment in path.split("/") if segment]
    if len(segments) < 2:
        raise InvalidReference(
            f"'{url}' does not point to a repository. "
            "Expected a URL like https://github.com/owner/repo."
        )

    owner, name = segments[0], segments[1]
    if name.endswith(".git"):
        name = name[: -len(".git")]

    if not _SEGMENT.match(owner) or not _SEGMENT.match(name) or name in (".", ".."):
        raise InvalidReference(f"'{url}' contains an invalid owner or repository name.")

    return RepositoryRef(host, owner, name)
