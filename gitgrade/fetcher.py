"""
Content fetching for GitGrade.

Retrieves a bounded snapshot of repository metadata (readme, one manifest,
flat file listing). Each artifact is fetched independently; a missing or
unreachable artifact becomes an absent field plus a warning. The fetch as a
whole fails only when the host itself is down.
"""

import asyncio
from typing import Awaitable, Callable, NamedTuple

import httpx
from rich.console import Console

from gitgrade.config import get_request_timeout, is_content_cache_enabled
from gitgrade.errors import UpstreamHostFailure
from gitgrade.models import ContentSnapshot
from gitgrade.repository import RepositoryRef
from gitgrade.vcs import BaseVCSProvider, get_vcs_provider

console = Console(stderr=True)

# --- Constants ---

# Checked in order; the first file that exists is the manifest
MANIFEST_CANDIDATES = (
    "package.json",
    "pyproject.toml",
    "requirements.txt",
    "setup.py",
    "Cargo.toml",
    "go.mod",
    "pom.xml",
    "build.gradle",
    "Gemfile",
    "composer.json",
)

MAX_README_CHARS = 20_000
MAX_MANIFEST_CHARS = 10_000
MAX_TREE_ENTRIES = 1_000


class _SubFetch(NamedTuple):
    """Outcome of one artifact request."""

    value: object = None
    error: Exception | None = None


def is_host_failure(error: BaseException) -> bool:
    """
    Whether an error means the host itself is unavailable.

    Transport errors, timeouts and 5xx responses count; 4xx responses
    (access denied, rate limited, not found) only mean the artifact is
    unavailable to us.
    """
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code >= 500
    return isinstance(error, (httpx.RequestError, TimeoutError))


class ContentCache:
    """
    Process-scoped snapshot cache keyed by RepositoryRef.

    Entries are written once and never evicted. Concurrent requests for a
    reference that is still being fetched await the same in-flight fetch.
    """

    def __init__(self) -> None:
        self._entries: dict[RepositoryRef, ContentSnapshot] = {}
        self._in_flight: dict[RepositoryRef, asyncio.Future] = {}

    def __contains__(self, ref: object) -> bool:
        return ref in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, ref: RepositoryRef) -> ContentSnapshot | None:
        """Return the cached snapshot for a reference, if any."""
        return self._entries.get(ref)

    def clear(self) -> None:
        """Drop every completed entry. In-flight fetches are unaffected."""
        self._entries.clear()

    async def get_or_fetch(
        self,
        ref: RepositoryRef,
        fetch: Callable[[], Awaitable[ContentSnapshot]],
    ) -> ContentSnapshot:
        """
        Return the cached snapshot, joining or starting a fetch when needed.

        A failed fetch is not cached; the error is raised to every waiter.
        """
        cached = self._entries.get(ref)
        if cached is not None:
            return cached

        pending = self._in_flight.get(ref)
        if pending is not None:
            return await asyncio.shield(pending)

        future = asyncio.get_running_loop().create_future()
        self._in_flight[ref] = future
        try:
            snapshot = await fetch()
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as e:
            future.set_exception(e)
            # Mark retrieved so an unawaited future does not log a warning
            future.exception()
            raise
        else:
            self._entries[ref] = snapshot
            future.set_result(snapshot)
            return snapshot
        finally:
            self._in_flight.pop(ref, None)


_default_cache: ContentCache | None = None


def get_default_cache() -> ContentCache:
    """Get the process-wide cache, creating it empty on first use."""
    global _default_cache
    if _default_cache is None:
        _default_cache = ContentCache()
    return _default_cache


def reset_default_cache() -> None:
    """Discard the process-wide cache. The next use starts empty."""
    global _default_cache
    _default_cache = None


class ContentFetcher:
    """Fetches ContentSnapshots through the provider matching each reference's host.

    Only HTTP errors and timeouts make an artifact absent. Any other error
    propagates, so a broken fetch is never cached as an empty snapshot.
    """

    def __init__(
        self,
        cache: ContentCache | None = None,
        providers: dict[str, BaseVCSProvider] | None = None,
        use_cache: bool | None = None,
        timeout: float | None = None,
    ):
        """
        Args:
            cache: Snapshot cache. Defaults to the process-wide cache.
            providers: Provider instances keyed by host ('github.com').
                       Missing hosts are served by a provider created from
                       the VCS registry.
            use_cache: Override the configured cache setting.
            timeout: Per request timeout in seconds. Defaults to the configured value.
        """
        self.cache = cache if cache is not None else get_default_cache()
        self._providers: dict[str, BaseVCSProvider] = dict(providers or {})
        self.use_cache = is_content_cache_enabled() if use_cache is None else use_cache
        self.timeout = timeout

    def _provider_for(self, ref: RepositoryRef) -> BaseVCSProvider:
        provider = self._providers.get(ref.host)
        if provider is None:
            provider = get_vcs_provider(ref.platform, host=ref.host)
            if not provider.validate_credentials():
                console.print(
                    f"[dim]No access token for {ref.host}; "
                    "anonymous requests are heavily rate limited.[/dim]"
                )
            self._providers[ref.host] = provider
        return provider

    async def fetch(
        self, ref: RepositoryRef, timeout: float | None = None
    ) -> ContentSnapshot:
        """
        Fetch the snapshot for a repository, at most once per process.

        Args:
            ref: Repository to fetch.
            timeout: Per request timeout in seconds for this fetch. Defaults
                     to the fetcher's timeout, then the configured value.

        Returns:
            ContentSnapshot whose fields are None where an artifact was unavailable.

        Raises:
            UpstreamHostFailure: If every request failed because the host was unreachable.
        """
        if timeout is None:
            timeout = self.timeout if self.timeout is not None else get_request_timeout()
        if not self.use_cache:
            return await self._fetch_snapshot(ref, timeout)
        return await self.cache.get_or_fetch(
            ref, lambda: self._fetch_snapshot(ref, timeout)
        )

    async def _fetch_snapshot(self, ref: RepositoryRef, timeout: float) -> ContentSnapshot:
        provider = self._provider_for(ref)
        console.print(f"[dim]Fetching content for {ref}...[/dim]")

        readme, manifest, tree = await asyncio.gather(
            self._fetch_readme(provider, ref, timeout),
            self._fetch_manifest(provider, ref, timeout),
            self._fetch_tree(provider, ref, timeout),
        )

        errors = [sub.error for sub in (readme, manifest, tree)]
        if all(error is not None and is_host_failure(error) for error in errors):
            raise UpstreamHostFailure(
                f"Repository host for {ref.url} is unavailable: {errors[0]!r}",
                cause=errors[0],
            ) from errors[0]

        manifest_path, manifest_text = manifest.value or (None, None)
        snapshot = ContentSnapshot(
            readme=readme.value,
            manifest=manifest_text,
            manifest_path=manifest_path,
            file_tree=tree.value,
        )
        for field in snapshot.missing_fields:
            console.print(
                f"  [yellow]⚠️  {field} unavailable for {ref}; scoring without it[/yellow]"
            )
        return snapshot

    async def _fetch_readme(
        self, provider: BaseVCSProvider, ref: RepositoryRef, timeout: float
    ) -> _SubFetch:
        try:
            text = await asyncio.wait_for(
                provider.get_readme(ref.owner, ref.name), timeout=timeout
            )
        except (httpx.HTTPError, TimeoutError) as e:
            console.print(f"  [yellow]⚠️  README request failed for {ref}: {e!r}[/yellow]")
            return _SubFetch(error=e)
        if text is None:
            return _SubFetch()
        return _SubFetch(value=text[:MAX_README_CHARS])

    async def _fetch_manifest(
        self, provider: BaseVCSProvider, ref: RepositoryRef, timeout: float
    ) -> _SubFetch:
        for path in MANIFEST_CANDIDATES:
            try:
                text = await asyncio.wait_for(
                    provider.get_file(ref.owner, ref.name, path), timeout=timeout
                )
            except (httpx.HTTPError, TimeoutError) as e:
                console.print(
                    f"  [yellow]⚠️  Manifest request failed for {ref} ({path}): {e!r}[/yellow]"
                )
                return _SubFetch(error=e)
            if text is not None:
                return _SubFetch(value=(path, text[:MAX_MANIFEST_CHARS]))
        return _SubFetch()

    async def _fetch_tree(
        self, provider: BaseVCSProvider, ref: RepositoryRef, timeout: float
    ) -> _SubFetch:
        try:
            paths = await asyncio.wait_for(
                provider.get_tree(ref.owner, ref.name), timeout=timeout
            )
        except (httpx.HTTPError, TimeoutError) as e:
            console.print(f"  [yellow]⚠️  File tree request failed for {ref}: {e!r}[/yellow]")
            return _SubFetch(error=e)
        if paths is None:
            return _SubFetch()
        return _SubFetch(value=tuple(paths[:MAX_TREE_ENTRIES]))
