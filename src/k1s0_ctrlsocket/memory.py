"""In-memory transport for testing."""

from __future__ import annotations

import asyncio
from typing import Any

from .exceptions import TransportError
from .transport import Transport, TransportCallbacks
from .types import ABNORMAL_CLOSURE, CloseEvent, ErrorEvent, MessageEvent, OpenEvent


class InMemoryTransport(Transport):
    """Transport double. Records what it is asked to do.

    accept(), receive(), fail() and drop() deliver notifications
    synchronously, standing in for the peer.
    """

    def __init__(
        self,
        address: str,
        callbacks: TransportCallbacks,
        auto_open: bool = True,
        reachable: bool = True,
    ) -> None:
        super().__init__(address, callbacks)
        self.auto_open = auto_open
        self.reachable = reachable
        self.opened = False
        self.closed = False
        self.close_code: int | None = None
        self.close_reason: str | None = None
        self.sent: list[Any] = []

    def open(self) -> None:
        loop = asyncio.get_running_loop()
        if not self.reachable:
            loop.call_soon(self._refuse)
        elif self.auto_open:
            loop.call_soon(self.accept)

    def send(self, data: Any) -> None:
        if self.closed:
            raise TransportError("Transport is closed")
        self.sent.append(data)

    def close(self, code: int, reason: str) -> None:
        self.close_code = code
        self.close_reason = reason
        asyncio.get_running_loop().call_soon(self.drop, code, reason, True)

    def accept(self) -> None:
        if self.closed or self.opened:
            return
        self.opened = True
        self.callbacks.on_open(OpenEvent(address=self.address))

    def receive(self, data: str | bytes) -> None:
        if self.closed:
            return
        self.callbacks.on_message(MessageEvent(data=data))

    def fail(self, error: BaseException) -> None:
        if self.closed:
            return
        self.callbacks.on_error(ErrorEvent(error=error))

    def drop(self, code: int = ABNORMAL_CLOSURE, reason: str = "", was_clean: bool = False) -> None:
        if self.closed:
            return
        self.closed = True
        self.callbacks.on_close(CloseEvent(code=code, reason=reason, was_clean=was_clean))

    def _refuse(self) -> None:
        self.fail(TransportError(f"Connection refused: {self.address}"))
        self.drop(ABNORMAL_CLOSURE, "Connection refused")


class InMemoryTransportFactory:
    """TransportFactory that creates InMemoryTransport instances and keeps them."""

    def __init__(self, auto_open: bool = True, reachable: bool = True) -> None:
        self.auto_open = auto_open
        self.reachable = reachable
        self.transports: list[InMemoryTransport] = []

    def __call__(self, address: str, callbacks: TransportCallbacks) -> InMemoryTransport:
        transport = InMemoryTransport(
            address,
            callbacks,
            auto_open=self.auto_open,
            reachable=self.reachable,
        )
        self.transports.append(transport)
        return transport

    @property
    def latest(self) -> InMemoryTransport:
        if not self.transports:
            raise LookupError("No transport has been created")
        return self.transports[-1]
