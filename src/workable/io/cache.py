# src/workable/io/cache.py
"""
Key-value cache used by the Workable client.

The client only needs four things from a cache: has / get / set / clear.
Anything with those methods works (a Redis wrapper, a Django cache adapter, ...).
`InMemoryCache` is the default: a dict that lives as long as the process.

Entries are grouped into named namespaces. `get_cache_namespace("workable")`
always hands back the same `CacheNamespace`, so flushing it clears what every
client sharing that namespace has cached.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Dict, Mapping, Optional, Protocol


DEFAULT_NAMESPACE = "workable"


class Cache(Protocol):
    def has(self, key: str) -> bool: ...

    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def clear(self) -> None: ...


class InMemoryCache:
    """Process-local cache. No TTL: entries live until `clear()`."""

    def __init__(self) -> None:
        self._rows: Dict[str, Any] = {}
        self._lock = Lock()

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._rows

    def get(self, key: str) -> Any:
        with self._lock:
            return self._rows.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._rows[key] = value

    def clear(self) -> None:
        with self._lock:
            self._rows.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)


@dataclass
class CacheNamespace:
    """Handle for one logical partition of the shared cache."""

    name: str
    cache: Cache = field(default_factory=InMemoryCache)

    def flush(self) -> None:
        self.cache.clear()


class CacheNamespaceError(RuntimeError):
    """Raised when a namespace cannot be registered."""


_REGISTRY: Dict[str, CacheNamespace] = {}
_LOCK = Lock()


def _normalize(name: str) -> str:
    key = name.strip().lower()
    if not key:
        raise CacheNamespaceError("Cache namespace name must be non-empty")
    return key


def register_cache_namespace(name: str, cache: Cache, *, overwrite: bool = False) -> CacheNamespace:
    """Plug a specific cache backend in under `name`."""
    key = _normalize(name)
    with _LOCK:
        if key in _REGISTRY and not overwrite:
            raise CacheNamespaceError(f"Cache namespace already registered: {key}")
        namespace = CacheNamespace(name=key, cache=cache)
        _REGISTRY[key] = namespace
        return namespace


def get_cache_namespace(name: str = DEFAULT_NAMESPACE) -> CacheNamespace:
    """Return the shared namespace for `name`, creating an in-memory one on first use."""
    key = _normalize(name)
    with _LOCK:
        namespace = _REGISTRY.get(key)
        if namespace is None:
            namespace = CacheNamespace(name=key)
            _REGISTRY[key] = namespace
        return namespace


def cache_key(prefix: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Build the cache key for one query: prefix + param *values* joined by "-".

    Only values go in (not the names), in the order the caller gave them, so
    {"state": "draft"} and {"status": "draft"} share a key.
    """
    values = (params or {}).values()
    return prefix + "-".join(str(v) for v in values)
