"""
Ghost Cache - Cache Key Builder

Derives canonical cache keys from request descriptors.

Keys are compact JSON objects with the fixed field order url, method, params
so that identical logical requests always collide:

- the method is upper-cased and defaults to GET
- query parameters embedded in the URL are merged with explicit params
- params are rendered as [name, value] pairs sorted by name, or null when empty;
  repeated values of one name keep their request order (?a=1&a=2 and
  ?a=2&a=1 are different requests)

Request bodies and headers never take part in the key.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import httpx


@dataclass(frozen=True)
class RequestDescriptor:
    """Normalized (url, method, params) triple used for key derivation."""

    url: str
    method: str = "GET"
    params: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_call(
        cls,
        url: str | httpx.URL,
        method: str | None = None,
        params: Any = None,
    ) -> RequestDescriptor:
        """
        Build a descriptor from the arguments of a fetch-like call.

        Args:
            url: Absolute or relative URL, optionally with a query string
            method: HTTP method (None means GET)
            params: Anything httpx accepts as query params

        Returns:
            Normalized RequestDescriptor
        """
        parsed = httpx.URL(str(url))
        if params:
            parsed = parsed.copy_merge_params(params)
        return cls._from_url(parsed, method)

    @classmethod
    def from_request(cls, request: httpx.Request) -> RequestDescriptor:
        """Build a descriptor from an outgoing httpx request."""
        return cls._from_url(request.url, request.method)

    @classmethod
    def _from_url(cls, url: httpx.URL, method: str | None) -> RequestDescriptor:
        params = tuple(sorted(url.params.multi_items(), key=lambda item: item[0]))
        base = url.copy_with(query=None, fragment=None)
        return cls(url=str(base), method=(method or "GET").upper(), params=params)


def build_cache_key(descriptor: RequestDescriptor) -> str:
    """
    Serialize a descriptor into its canonical cache key.

    Args:
        descriptor: Normalized request descriptor

    Returns:
        Compact JSON string, e.g. {"url":"https://x/a","method":"GET","params":[["b","1"]]}
    """
    payload = {
        "url": descriptor.url,
        "method": descriptor.method,
        "params": [list(pair) for pair in descriptor.params] or None,
    }
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def manual_key(key: str) -> str:
    """
    Map an application-chosen key into the manual key namespace.

    Manual keys are JSON strings ("k" becomes "\\"k\\"") while request keys are
    JSON objects, so the two namespaces share one map without overlapping.
    Code that writes to the store directly bypasses this mapping.
    """
    return json.dumps(key, ensure_ascii=False)
