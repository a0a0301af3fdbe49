#!/usr/bin/env python3
"""
Key-switching stress utility for coordinator race behavior and latency.

Rapidly re-keys one coordinator while producer calls settle in random
order, then checks that only the last key's result is visible.

Usage examples:
  PYTHONPATH=src python scripts/race_benchmark.py
  PYTHONPATH=src python scripts/race_benchmark.py --switches 500 --keys 3 --max-latency-ms 40
"""

from __future__ import annotations

import argparse
import asyncio
import random
import statistics
import time
from collections.abc import Mapping

from fetchkit import RequestCoordinator, RequestOptions


class CountingMetrics:
    def __init__(self) -> None:
        self.counts: dict[str, int] = {}

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        _ = tags
        self.counts[name] = self.counts.get(name, 0) + value


async def run_benchmark(
    *,
    switches: int,
    keys: int,
    max_latency_ms: float,
    switch_interval_ms: float,
    seed: int,
) -> None:
    rng = random.Random(seed)
    settle_latencies: list[float] = []

    async def producer(index: int) -> dict[str, int]:
        await asyncio.sleep(rng.uniform(0, max_latency_ms) / 1000.0)
        return {"id": index}

    metrics = CountingMetrics()
    coordinator = RequestCoordinator(
        producer,
        RequestOptions(default_params=(0,), cache_key="fetcher-0"),
        metrics=metrics,
    )

    started = time.time()
    tasks: list[asyncio.Task[None]] = []
    first = coordinator.activate()
    if first is not None:
        tasks.append(first)

    index = 0
    for _ in range(switches):
        index = rng.randrange(keys)
        switched_at = time.monotonic()
        task = coordinator.update(default_params=(index,), cache_key=f"fetcher-{index}")
        if task is not None:
            tasks.append(task)
            task.add_done_callback(
                lambda _t, t0=switched_at: settle_latencies.append(time.monotonic() - t0)
            )
        await asyncio.sleep(switch_interval_ms / 1000.0)

    await asyncio.gather(*tasks)
    elapsed = time.time() - started

    state = coordinator.current_state()
    if state.loading:
        raise RuntimeError("coordinator still loading after all attempts settled")
    if state.data != {"id": index}:
        raise RuntimeError(f"stale result leaked: expected id={index}, got {state.data!r}")

    p50 = statistics.median(settle_latencies) if settle_latencies else 0.0
    p95 = (
        sorted(settle_latencies)[int(0.95 * (len(settle_latencies) - 1))]
        if settle_latencies
        else 0.0
    )

    print(f"switches={switches}")
    print(f"keys={keys}")
    print(f"elapsed_s={elapsed:.3f}")
    for name in sorted(metrics.counts):
        print(f"{name}={metrics.counts[name]}")
    print(f"producer_calls={len(tasks)}")
    print(f"settle_p50_ms={p50 * 1000:.2f}")
    print(f"settle_p95_ms={p95 * 1000:.2f}")
    print(f"final_data={state.data}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Coordinator race stress utility")
    parser.add_argument("--switches", type=int, default=200)
    parser.add_argument("--keys", type=int, default=3)
    parser.add_argument("--max-latency-ms", type=float, default=25.0)
    parser.add_argument("--switch-interval-ms", type=float, default=1.0)
    parser.add_argument("--seed", type=int, default=0)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    asyncio.run(
        run_benchmark(
            switches=args.switches,
            keys=args.keys,
            max_latency_ms=args.max_latency_ms,
            switch_interval_ms=args.switch_interval_ms,
            seed=args.seed,
        )
    )


if __name__ == "__main__":
    main()
