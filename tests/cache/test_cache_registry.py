from __future__ import annotations

import asyncio

import pytest

from fetchkit import (
    CacheStoreError,
    CoordinatorSettings,
    InMemoryCacheStore,
    RequestCoordinator,
    RequestOptions,
    create_cache_store,
    list_cache_stores,
    register_cache_store,
    unregister_cache_store,
)


def run_async(coro):
    return asyncio.run(coro)


def test_default_resolution_creates_private_stores():
    first = create_cache_store()
    second = create_cache_store()
    assert isinstance(first, InMemoryCacheStore)
    assert first is not second


def test_instance_is_returned_as_is():
    store = InMemoryCacheStore()
    assert create_cache_store(store) is store


def test_register_resolve_and_list():
    store = InMemoryCacheStore()
    register_cache_store("Registry-Test", store)
    try:
        assert create_cache_store("registry-test") is store
        assert create_cache_store("  REGISTRY-TEST ") is store
        assert "registry-test" in list_cache_stores()
    finally:
        unregister_cache_store("registry-test")
    assert "registry-test" not in list_cache_stores()


def test_duplicate_registration_requires_overwrite():
    register_cache_store("registry-dup", InMemoryCacheStore())
    try:
        with pytest.raises(CacheStoreError):
            register_cache_store("registry-dup", InMemoryCacheStore())

        replacement = InMemoryCacheStore()
        register_cache_store("registry-dup", replacement, overwrite=True)
        assert create_cache_store("registry-dup") is replacement
    finally:
        unregister_cache_store("registry-dup")


def test_unknown_and_empty_ids_are_rejected():
    with pytest.raises(CacheStoreError, match="Unknown cache store"):
        create_cache_store("registry-missing")
    with pytest.raises(CacheStoreError):
        register_cache_store("   ", InMemoryCacheStore())


def test_named_store_is_shared_between_coordinators():
    calls: list[tuple] = []

    async def producer(index):
        calls.append((index,))
        return {"id": index}

    register_cache_store("registry-shared", InMemoryCacheStore())
    try:
        settings = CoordinatorSettings(cache_store="registry-shared")
        options = RequestOptions(default_params=(0,), cache_key="fetcher-[0]")

        async def scenario() -> None:
            first = RequestCoordinator(producer, options, settings=settings)
            task = first.activate()
            assert task is not None
            await task

            second = RequestCoordinator(producer, options, settings=settings)
            assert second.cache is first.cache
            assert second.activate() is None
            assert second.current_state().data == {"id": 0}

        run_async(scenario())
        assert calls == [(0,)]
    finally:
        unregister_cache_store("registry-shared")
