"""Shared HTTP client handling."""

import asyncio

import httpx

from gitgrade.config import get_request_timeout, get_verify_ssl

_async_http_client: httpx.AsyncClient | None = None
_async_http_client_verify_ssl: bool | None = None
_async_http_client_loop: asyncio.AbstractEventLoop | None = None


async def _get_async_http_client() -> httpx.AsyncClient:
    """Get or create a global async HTTP client with connection pooling.

    Recreates the client if SSL verification setting has changed, or if it
    was created on another event loop (each ``asyncio.run`` starts a new one
    and pooled connections cannot outlive their loop).
    """
    global _async_http_client, _async_http_client_verify_ssl, _async_http_client_loop
    current_verify_ssl = get_verify_ssl()
    current_loop = asyncio.get_running_loop()

    # Recreate client if setting or loop changed or client is closed/None
    if (
        _async_http_client is None
        or _async_http_client.is_closed
        or _async_http_client_verify_ssl != current_verify_ssl
        or _async_http_client_loop is not current_loop
    ):
        # A client bound to another loop is dropped, not closed: its
        # connections belong to that loop and may not be awaitable here
        if (
            _async_http_client is not None
            and not _async_http_client.is_closed
            and _async_http_client_loop is current_loop
        ):
            await _async_http_client.aclose()

        _async_http_client = httpx.AsyncClient(
            verify=current_verify_ssl,
            timeout=get_request_timeout(),
            follow_redirects=True,
            limits=httpx.Limits(
                max_connections=20,
                max_keepalive_connections=10,
                keepalive_expiry=30.0,
            ),
        )
        _async_http_client_verify_ssl = current_verify_ssl
        _async_http_client_loop = current_loop
    return _async_http_client


async def close_http_client() -> None:
    """Close the global HTTP client. Call this when shutting down."""
    global _async_http_client, _async_http_client_verify_ssl, _async_http_client_loop
    if (
        _async_http_client is not None
        and not _async_http_client.is_closed
        and _async_http_client_loop is asyncio.get_running_loop()
    ):
        await _async_http_client.aclose()
    _async_http_client = None
    _async_http_client_verify_ssl = None
    _async_http_client_loop = None
