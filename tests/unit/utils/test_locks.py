# -*- coding: utf-8 -*-
"""Unit tests for KeyedLocks."""

from __future__ import annotations

import asyncio

from bitcoin_tx_tracker.utils.locks import KeyedLocks


async def test_same_key_is_serialized() -> None:
    locks = KeyedLocks()
    order: list[str] = []

    async def work(name: str) -> None:
        async with locks.hold("user"):
            order.append(f"{name}-start")
            await asyncio.sleep(0)
            order.append(f"{name}-end")

    await asyncio.gather(work("a"), work("b"))

    assert order == ["a-start", "a-end", "b-start", "b-end"]


async def test_other_keys_stay_concurrent() -> None:
    locks = KeyedLocks()
    entered = asyncio.Event()

    async def first() -> None:
        async with locks.hold(1):
            await entered.wait()

    async def second() -> None:
        async with locks.hold(2):
            entered.set()

    await asyncio.wait_for(asyncio.gather(first(), second()), timeout=1)


async def test_lock_is_forgotten_once_nobody_holds_or_waits() -> None:
    locks = KeyedLocks()

    async with locks.hold(1):
        assert len(locks) == 1

    assert len(locks) == 0


async def test_waiter_keeps_lock_alive_after_holder_leaves() -> None:
    locks = KeyedLocks()
    release = asyncio.Event()
    order: list[str] = []

    async def holder() -> None:
        async with locks.hold(1):
            order.append("holder")
            await release.wait()

    async def waiter() -> None:
        async with locks.hold(1):
            order.append("waiter")
            await asyncio.sleep(0)
            order.append("waiter-done")

    async def late() -> None:
        async with locks.hold(1):
            order.append("late")

    first = asyncio.create_task(holder())
    await asyncio.sleep(0)
    second = asyncio.create_task(waiter())
    await asyncio.sleep(0)
    release.set()
    await first
    # A newcomer arriving between the holder's release and the waiter's wakeup
    # must queue on the same lock rather than get a fresh one.
    third = asyncio.create_task(late())
    await asyncio.gather(second, third)

    assert order == ["holder", "waiter", "waiter-done", "late"]
    assert len(locks) == 0
