from __future__ import annotations

import asyncio

import pytest

from fetchkit import InMemoryCacheStore, RequestCoordinator, RequestOptions
from fetchkit.cache import default_cache_key


def run_async(coro):
    return asyncio.run(coro)


def test_store_get_set_has_and_overwrite():
    store = InMemoryCacheStore()
    assert store.get("fetcher-[0]") is None
    assert not store.has("fetcher-[0]")
    assert len(store) == 0

    store.set("fetcher-[0]", {"id": 0})
    store.set("fetcher-[1]", {"id": 1})
    store.set("fetcher-[0]", {"id": 0, "rev": 2})

    assert store.get("fetcher-[0]") == {"id": 0, "rev": 2}
    assert store.has("fetcher-[1]")
    assert "fetcher-[1]" in store
    assert len(store) == 2
    assert sorted(store.keys()) == ["fetcher-[0]", "fetcher-[1]"]


def test_stores_are_independent_by_default():
    first = InMemoryCacheStore()
    second = InMemoryCacheStore()
    first.set("k", 1)
    assert not second.has("k")


def test_cached_none_is_a_hit():
    calls: list[tuple] = []

    async def producer(*args):
        calls.append(args)
        return None

    async def scenario() -> None:
        coordinator = RequestCoordinator(producer, RequestOptions(default_params=(0,)))
        task = coordinator.activate()
        assert task is not None
        await task
        assert coordinator.cache.has("[0]")

        assert coordinator.refresh() is None
        assert coordinator.current_state().status == "success"
        assert calls == [(0,)]

    run_async(scenario())


@pytest.mark.parametrize(
    ("params", "expected"),
    [
        ((), "[]"),
        ((0,), "[0]"),
        ([1, "a"], '[1,"a"]'),
        ((None, True, 1.5), "[null,true,1.5]"),
        (({"b": 1},), '[{"b":1}]'),
        (("héllo",), '["héllo"]'),
    ],
)
def test_default_cache_key_is_compact_json(params, expected):
    assert default_cache_key(params) == expected


def test_default_cache_key_falls_back_to_str_for_unknown_values():
    class Marker:
        def __str__(self) -> str:
            return "marker"

    assert default_cache_key([Marker()]) == '["marker"]'
