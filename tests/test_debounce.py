"""Trailing-edge debounce."""

import asyncio

from stash.client.debounce import Debouncer


async def test_burst_delivers_only_last_value() -> None:
    seen: list[str] = []

    async def record(value: str) -> None:
        seen.append(value)

    debouncer = Debouncer(0.02, record)
    for value in ("p", "py", "pyt", "pyth"):
        debouncer.trigger(value)
        await asyncio.sleep(0.005)

    await debouncer.drain()
    assert seen == ["pyth"]


async def test_nothing_fires_before_quiet_period() -> None:
    seen: list[str] = []

    async def record(value: str) -> None:
        seen.append(value)

    debouncer = Debouncer(0.05, record)
    debouncer.trigger("a")
    await asyncio.sleep(0.01)
    assert seen == []
    assert debouncer.pending

    await debouncer.drain()
    assert seen == ["a"]
    assert not debouncer.pending


async def test_cancel_drops_scheduled_call() -> None:
    seen: list[str] = []

    async def record(value: str) -> None:
        seen.append(value)

    debouncer = Debouncer(0.01, record)
    debouncer.trigger("a")
    debouncer.cancel()
    await asyncio.sleep(0.03)
    await debouncer.drain()
    assert seen == []


async def test_failing_callback_does_not_escape() -> None:
    async def explode(value: str) -> None:
        raise RuntimeError("view torn down")

    debouncer = Debouncer(0.0, explode)
    debouncer.trigger("a")
    await debouncer.drain()
    assert not debouncer.pending
