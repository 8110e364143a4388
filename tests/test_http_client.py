"""
Tests for the shared HTTP client.
"""

import asyncio

import httpx
import pytest

from gitgrade.config import set_verify_ssl
from gitgrade.fetcher import ContentCache, ContentFetcher
from gitgrade.http_client import _get_async_http_client, close_http_client
from gitgrade.repository import parse_repository_url
from gitgrade.vcs.github import GitHubProvider


@pytest.fixture(autouse=True)
def reset_client():
    asyncio.run(close_http_client())
    yield
    asyncio.run(close_http_client())
    set_verify_ssl(True)


def _github_api(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/repos/octo/app/readme":
        return httpx.Response(200, text="# app\n")
    if path == "/repos/octo/app/contents/package.json":
        return httpx.Response(200, text='{"name": "app"}')
    if path == "/repos/octo/app/git/trees/HEAD":
        return httpx.Response(200, json={"tree": [{"path": "README.md", "type": "blob"}]})
    return httpx.Response(404)


@pytest.fixture
def mock_github(monkeypatch):
    """Route the shared client to an in-process GitHub API."""
    real_client = httpx.AsyncClient

    def _client(**kwargs):
        return real_client(transport=httpx.MockTransport(_github_api), **kwargs)

    monkeypatch.setattr("gitgrade.http_client.httpx.AsyncClient", _client)


def test_client_reused_within_event_loop():
    async def _twice():
        return await _get_async_http_client(), await _get_async_http_client()

    first, second = asyncio.run(_twice())
    assert first is second


def test_client_rebuilt_for_new_event_loop():
    """Each asyncio.run gets a client bound to its own loop."""
    first = asyncio.run(_get_async_http_client())
    second = asyncio.run(_get_async_http_client())

    assert second is not first
    assert not second.is_closed


def test_client_rebuilt_when_ssl_setting_changes():
    async def _toggle():
        first = await _get_async_http_client()
        set_verify_ssl(False)
        second = await _get_async_http_client()
        return first, second

    first, second = asyncio.run(_toggle())
    assert second is not first
    assert first.is_closed


def test_close_http_client():
    async def _open_and_close():
        client = await _get_async_http_client()
        await close_http_client()
        return client

    assert asyncio.run(_open_and_close()).is_closed


def test_fetches_in_consecutive_event_loops(mock_github):
    """Back-to-back asyncio.run calls both read real content."""
    ref = parse_repository_url("https://github.com/octo/app")
    fetcher = ContentFetcher(
        cache=ContentCache(),
        providers={"github.com": GitHubProvider(token="t")},
        use_cache=False,
    )

    first = asyncio.run(fetcher.fetch(ref))
    second = asyncio.run(fetcher.fetch(ref))

    for snapshot in (first, second):
        assert snapshot.readme == "# app\n"
        assert snapshot.manifest_path == "package.json"
        assert snapshot.file_tree == ("README.md",)
