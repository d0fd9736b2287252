"""Shared test helpers."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest

from k1s0_ctrlsocket import CtrlSocket, InMemoryTransportFactory


async def settle() -> None:
    """Let callbacks queued with call_soon run."""
    for _ in range(3):
        await asyncio.sleep(0)


async def wait_until(predicate: Callable[[], object], timeout: float = 2.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met before timeout")
        await asyncio.sleep(0.005)


@pytest.fixture
def factory() -> InMemoryTransportFactory:
    return InMemoryTransportFactory()


@pytest.fixture
def sock(factory: InMemoryTransportFactory) -> CtrlSocket:
    return CtrlSocket("ws://test.local/stream", transport_factory=factory)
