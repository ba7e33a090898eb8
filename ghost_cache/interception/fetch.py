"""
Ghost Cache - Fetch Interceptor

Routes a fetch-like primitive through the cache.

A fetch-like primitive is any coroutine function called as
``await fetch(url, method=..., params=..., **kwargs)`` that returns an
httpx.Response. Two ways to intercept one:

- wrap_fetch(store, fetch): explicit opt-in wrapper, no global state touched
- FetchInterceptor.install(target, "fetch"): replaces an attribute of a
  module or object for the lifetime of a caching context

Install discipline: the true original is captured exactly once. Installing
again from the same interceptor is a no-op, and installing over a wrapper
owned by another interceptor raises InterceptionError instead of capturing
the wrapper as the "original".
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from ..cache.keys import RequestDescriptor, build_cache_key
from ..cache.store import CacheStore
from ..errors import ConfigurationError, InterceptionError
from .base import Interceptor

logger = logging.getLogger(__name__)

FetchCallable = Callable[..., Awaitable[httpx.Response]]

# Attribute marking wrappers produced by this module
OWNER_ATTRIBUTE = "__ghost_cache_interceptor__"


class FetchInterceptor(Interceptor):
    """Captures a fetch-like primitive and serves repeated calls from the cache."""

    def __init__(self, store: CacheStore):
        super().__init__(store)
        self._original: FetchCallable | None = None
        self._wrapper: FetchCallable | None = None
        self._target: Any = None
        self._attribute: str | None = None

    @property
    def installed(self) -> bool:
        return self._original is not None

    @property
    def original(self) -> FetchCallable | None:
        return self._original

    async def fetch(self, primitive: FetchCallable, url: str | httpx.URL, **kwargs: Any) -> httpx.Response:
        """
        Serve one call from the cache or through primitive.

        Fresh hit: a synthesized 200 application/json response, primitive not called.
        Miss: primitive's response, with a 2xx body stored in the background.
        """
        method = kwargs.get("method") or "GET"
        params = kwargs.get("params")
        key = build_cache_key(RequestDescriptor.from_call(url, method, params))

        entry = await self._lookup(key)
        if entry is not None:
            return httpx.Response(
                status_code=200,
                headers={"content-type": "application/json"},
                content=entry.data.encode("utf-8"),
                request=httpx.Request(method, url, params=params),
                extensions={"ghost_cache": "hit"},
            )

        response = await primitive(url, **kwargs)
        # Loads the body once; the caller can still read it afterwards
        await response.aread()
        if response.is_success:
            self._store.set_background(key, response.text)
        else:
            logger.debug(
                "Not caching unsuccessful response",
                extra={"key": key, "status_code": response.status_code},
            )
        return response

    def install(self, target: Any, attribute: str = "fetch") -> None:
        """
        Replace target.<attribute> with a caching wrapper.

        Raises:
            ConfigurationError: If target has no callable primitive to capture
            InterceptionError: If the attribute already holds another interceptor's
                wrapper, or this interceptor is installed elsewhere
        """
        if self._original is not None:
            if target is self._target and attribute == self._attribute:
                logger.debug("Fetch interceptor already installed", extra={"attribute": attribute})
                return
            raise InterceptionError(
                "Fetch interceptor is already installed on another target",
                details={"attribute": self._attribute, "requested": attribute},
            )

        current = getattr(target, attribute, None)
        if current is None or not callable(current):
            raise ConfigurationError(
                f"No request primitive available at {attribute!r}",
                details={"target": repr(target), "attribute": attribute},
            )

        owner = getattr(current, OWNER_ATTRIBUTE, None)
        if owner is not None:
            raise InterceptionError(
                f"Request primitive {attribute!r} is already intercepted by another context",
                details={"target": repr(target), "attribute": attribute},
            )

        self._original = current
        self._target = target
        self._attribute = attribute

        @functools.wraps(current)
        async def cached_fetch(url: str | httpx.URL, **kwargs: Any) -> httpx.Response:
            original = self._original
            if original is None:
                raise InterceptionError(
                    "Original request primitive is missing; the interceptor was uninstalled",
                    details={"attribute": attribute},
                )
            return await self.fetch(original, url, **kwargs)

        setattr(cached_fetch, OWNER_ATTRIBUTE, self)
        self._wrapper = cached_fetch
        setattr(target, attribute, cached_fetch)
        logger.info("Installed fetch interceptor", extra={"attribute": attribute})

    def uninstall(self) -> None:
        """Restore the captured primitive and forget the capture."""
        original, target, attribute = self._original, self._target, self._attribute
        if original is None or attribute is None:
            return

        current = getattr(target, attribute, None)
        if current is not self._wrapper:
            logger.warning(
                "Request primitive was replaced after install; restoring the captured original anyway",
                extra={"attribute": attribute},
            )
        setattr(target, attribute, original)
        logger.info("Uninstalled fetch interceptor", extra={"attribute": attribute})

        self._original = None
        self._wrapper = None
        self._target = None
        self._attribute = None


def wrap_fetch(store: CacheStore, primitive: FetchCallable) -> FetchCallable:
    """
    Return a caching wrapper around primitive.

    The wrapper is independent of any install: it serves from store as long
    as the caller keeps using it.

    Example:
        cached = wrap_fetch(store, http.fetch)
        response = await cached("https://api.example.com/items")
    """
    interceptor = FetchInterceptor(store)

    @functools.wraps(primitive)
    async def cached_fetch(url: str | httpx.URL, **kwargs: Any) -> httpx.Response:
        return await interceptor.fetch(primitive, url, **kwargs)

    return cached_fetch
