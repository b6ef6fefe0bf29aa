from __future__ import annotations

import pytest

from workable.io.cache import (
    CacheNamespace,
    CacheNamespaceError,
    InMemoryCache,
    cache_key,
    get_cache_namespace,
    register_cache_namespace,
)


def test_in_memory_cache_roundtrip_and_clear():
    cache = InMemoryCache()
    assert not cache.has("k")
    assert cache.get("k") is None

    cache.set("k", [])
    assert cache.has("k")
    assert cache.get("k") == []

    cache.clear()
    assert not cache.has("k")
    assert len(cache) == 0


def test_cache_key_uses_values_in_caller_order():
    assert cache_key("Jobs", {}) == "Jobs"
    assert cache_key("Jobs", None) == "Jobs"
    assert cache_key("Jobs", {"state": "draft"}) == "Jobsdraft"
    assert cache_key("Job-GROOV001", {"state": "draft", "limit": 5}) == "Job-GROOV001draft-5"
    assert cache_key("Jobs", {"a": "1", "b": "2"}) != cache_key("Jobs", {"b": "2", "a": "1"})


def test_cache_key_ignores_param_names():
    # known collision: only values are part of the key
    assert cache_key("Jobs", {"state": "x"}) == cache_key("Jobs", {"other": "x"})


def test_get_cache_namespace_is_shared_per_name():
    first = get_cache_namespace("registry-test")
    again = get_cache_namespace("  Registry-Test ")
    assert first is again
    assert isinstance(first.cache, InMemoryCache)


def test_namespace_flush_clears_backend():
    namespace = CacheNamespace(name="flush-test")
    namespace.cache.set("k", 1)
    namespace.flush()
    assert not namespace.cache.has("k")


def test_register_cache_namespace():
    backend = InMemoryCache()
    namespace = register_cache_namespace("custom-backend", backend)
    assert namespace.cache is backend
    assert get_cache_namespace("custom-backend") is namespace

    with pytest.raises(CacheNamespaceError):
        register_cache_namespace("custom-backend", InMemoryCache())

    replaced = register_cache_namespace("custom-backend", InMemoryCache(), overwrite=True)
    assert get_cache_namespace("custom-backend") is replaced


def test_namespace_name_must_be_non_empty():
    with pytest.raises(CacheNamespaceError):
        get_cache_namespace("  ")
