"""
Ghost Cache - Default Request Primitive

A fetch-like coroutine built on httpx. This module attribute is the default
install target of the generic interception layer: code that calls
``ghost_cache.http.fetch(...)`` is served from cache while a context is enabled.

Example:
    from ghost_cache import http

    response = await http.fetch("https://api.example.com/items", params={"page": 1})
    items = response.json()
"""

from typing import Any

import httpx

DEFAULT_TIMEOUT = 30.0


async def fetch(
    url: str | httpx.URL,
    *,
    method: str = "GET",
    params: Any = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
    **kwargs: Any,
) -> httpx.Response:
    """
    Issue one HTTP request and return the fully read response.

    Args:
        url: Request URL
        method: HTTP method
        params: Query parameters
        headers: Request headers
        timeout: Total timeout in seconds
        transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        **kwargs: Forwarded to httpx.AsyncClient.request (json, content, data, ...)

    Returns:
        The httpx.Response with its body already loaded
    """
    async with httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True) as client:
        return await client.request(method, url, params=params, headers=headers, **kwargs)
