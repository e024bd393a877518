"""Unit tests for the single-fire session done signal."""

from __future__ import annotations

import asyncio
import threading

from relay.handlers.session.done import DoneSignal


def test_first_fire_wins() -> None:
    done = DoneSignal()

    assert done.fire("client_closed") is True
    assert done.fire("keepalive_failed") is False
    assert done.reason == "client_closed"


def test_concurrent_fire_from_threads_fires_once() -> None:
    done = DoneSignal()
    results: list[bool] = []
    barrier = threading.Barrier(8)

    def _fire(i: int) -> None:
        barrier.wait()
        results.append(done.fire(f"source-{i}"))

    threads = [threading.Thread(target=_fire, args=(i,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(True) == 1


def test_every_waiter_observes_the_reason() -> None:
    async def _run() -> list[str]:
        done = DoneSignal()
        waiters = [asyncio.create_task(done.wait()) for _ in range(3)]
        await asyncio.sleep(0)
        done.fire("idle_timeout")
        return list(await asyncio.gather(*waiters))

    assert asyncio.run(_run()) == ["idle_timeout"] * 3
