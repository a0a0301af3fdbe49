"""
cycle_index.py — Cycle through three keys with a suspense-enabled coordinator.

Each "click" advances the index modulo 3. The first visit to an index
fetches, later visits are answered from the cache. Rendering waits on
the readiness gate instead of printing a loading placeholder.

Usage:
    python examples/cycle_index.py
"""

import asyncio
import logging

from fetchkit import RequestCoordinator, RequestOptions, read_when_ready


async def fetcher(index: int) -> dict[str, int]:
    await asyncio.sleep(0.2)
    return {"id": index}


def options_for(index: int) -> dict[str, object]:
    return {"default_params": (index,), "cache_key": f"fetcher-{index}"}


def render(coordinator: RequestCoordinator) -> str:
    result = coordinator.result()
    if result.loading:
        return "loading..."
    if result.error is not None:
        return f"error:{result.error}"
    return f"data: {result.data}"


async def main() -> None:
    coordinator = RequestCoordinator(
        fetcher,
        RequestOptions(
            on_success=lambda: print("success"),
            on_error=lambda: print("error"),
            suspense=True,
            **options_for(0),
        ),
    )

    async with coordinator:
        index = 0
        for _ in range(6):
            await read_when_ready(coordinator)
            print(f"[{index}] {render(coordinator)}")
            index = (index + 1) % 3
            coordinator.update(**options_for(index))


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    asyncio.run(main())
