"""
Ghost Cache - Interception Module

Substitutes caching wrappers for request primitives.

- fetch.py: Fetch-like coroutine functions (opt-in wrapper or scoped install)
- client.py: httpx.AsyncClient event hooks plus send() short-circuit
- sentinel.py: Dedicated exception that carries a cached body past the transport
"""

from .client import ClientInterceptor
from .fetch import FetchCallable, FetchInterceptor, wrap_fetch
from .sentinel import CachedResponseSignal

__all__ = [
    "CachedResponseSignal",
    "ClientInterceptor",
    "FetchCallable",
    "FetchInterceptor",
    "wrap_fetch",
]
