"""
Ghost Cache - Module-Level API

Convenience functions operating on a lazily created default GhostCache.
The default context starts from options loaded by ghost_cache.config.load_options().

Usage:
    import ghost_cache
    from ghost_cache import http

    ghost_cache.enable(ttl=5000)
    response = await http.fetch("https://api.example.com/items")
    await ghost_cache.set_cache("greeting", {"msg": "hello"})
    await ghost_cache.disable()
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config.loader import get_options
from .config.schemas import GhostCacheOptions
from .context import GhostCache

logger = logging.getLogger(__name__)

_default_context: GhostCache | None = None


def get_context() -> GhostCache:
    """
    Get the default caching context, creating it on first access.

    Raises:
        ConfigurationError: If the environment holds invalid options
    """
    global _default_context

    if _default_context is None:
        logger.debug("Creating default Ghost Cache context")
        _default_context = GhostCache(get_options())
    return _default_context


def reset_context() -> None:
    """
    Drop the default context reference without disabling it.

    Used for testing. Call disable() first to restore the request primitive.
    """
    global _default_context
    _default_context = None


def enable(options: GhostCacheOptions | dict[str, Any] | None = None, **overrides: Any) -> None:
    """Enable interception on the default context. See GhostCache.enable()."""
    get_context().enable(options, **overrides)


async def disable() -> None:
    """Disable interception and clear the default context's cache."""
    await get_context().disable()


async def clear() -> None:
    """Empty the default context's cache (memory and persistent)."""
    await get_context().clear()


async def set_cache(key: str, value: Any) -> None:
    """Store a JSON-serializable value under an application key."""
    await get_context().set(key, value)


async def get_cache(key: str) -> Any | None:
    """Read a value stored with set_cache(); None when missing or expired."""
    return await get_context().get(key)


def register(client: httpx.AsyncClient) -> None:
    """Queue an httpx.AsyncClient for instrumentation on the next enable()."""
    get_context().register(client)
