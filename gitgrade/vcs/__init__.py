"""
Repository host providers for GitGrade.

A provider reads repository content from one hosting platform. The registry
maps platform names to provider classes and host names to platforms, so
repository URLs are accepted for exactly the hosts registered here.
"""

from collections.abc import Iterable

from gitgrade.vcs.base import BaseVCSProvider
from gitgrade.vcs.github import GitHubProvider
from gitgrade.vcs.gitlab import GitLabProvider

__all__ = [
    "BaseVCSProvider",
    "GitHubProvider",
    "GitLabProvider",
    "get_platform_for_host",
    "get_vcs_provider",
    "list_supported_hosts",
    "normalize_host",
    "register_vcs_provider",
]

_PROVIDERS: dict[str, type[BaseVCSProvider]] = {
    "github": GitHubProvider,
    "gitlab": GitLabProvider,
}

# Keys are lowercase without a "www." prefix
_HOSTS: dict[str, str] = {
    "github.com": "github",
    "gitlab.com": "gitlab",
}


def normalize_host(host: str) -> str:
    """Lowercase a host name and drop a leading 'www.'."""
    return host.strip().lower().removeprefix("www.")


def get_vcs_provider(platform: str = "github", **kwargs) -> BaseVCSProvider:
    """
    Factory function to get VCS provider instance.

    Args:
        platform: VCS platform name ('github', 'gitlab', etc.). Default: 'github'
        **kwargs: Provider configuration (token, host)

    Returns:
        Initialized VCS provider instance

    Raises:
        ValueError: If platform is not supported

    Example:
        >>> provider = get_vcs_provider("gitlab", host="git.example.org")
        >>> readme = await provider.get_readme("owner", "repo")
    """
    provider_class = _PROVIDERS.get(platform.lower())
    if provider_class is None:
        supported = ", ".join(sorted(_PROVIDERS))
        raise ValueError(
            f"Unsupported VCS platform: {platform}. Supported platforms: {supported}"
        )
    return provider_class(**kwargs)


def register_vcs_provider(
    platform: str,
    provider_class: type[BaseVCSProvider],
    hosts: Iterable[str] = (),
) -> None:
    """
    Register a provider class and the hosts it serves.

    Registering an existing platform with new hosts adds a self-hosted
    instance, e.g. ``register_vcs_provider("gitlab", GitLabProvider,
    hosts=["git.example.org"])``.

    Args:
        platform: Platform identifier (e.g., 'bitbucket', 'gitea')
        provider_class: Class implementing BaseVCSProvider; constructed with
                        a ``host`` keyword argument.
        hosts: Host names whose repository URLs this platform accepts.

    Raises:
        TypeError: If provider_class doesn't inherit from BaseVCSProvider
    """
    if not isinstance(provider_class, type) or not issubclass(
        provider_class, BaseVCSProvider
    ):
        raise TypeError(
            f"Provider class must inherit from BaseVCSProvider, "
            f"got {provider_class!r}"
        )

    platform = platform.lower()
    _PROVIDERS[platform] = provider_class
    for host in hosts:
        _HOSTS[normalize_host(host)] = platform


def get_platform_for_host(host: str) -> str | None:
    """Return the platform serving a host, or None if no provider is registered for it."""
    return _HOSTS.get(normalize_host(host))


def list_supported_hosts() -> list[str]:
    """
    List every host with a registered provider.

    Example:
        >>> list_supported_hosts()
        ['github.com', 'gitlab.com']
    """
    return sorted(_HOSTS)
