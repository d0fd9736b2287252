"""WebSocket transport built on the websockets asyncio client."""

from __future__ import annotations

import asyncio
from typing import Any

import structlog
from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, WebSocketException

from .exceptions import TransportError
from .transport import Transport, TransportCallbacks
from .types import (
    ABNORMAL_CLOSURE,
    INTERNAL_ERROR,
    CloseEvent,
    ErrorEvent,
    MessageEvent,
    OpenEvent,
)

logger = structlog.stdlib.get_logger(__name__)


class WebSocketTransport(Transport):
    """Transport over a single websockets ClientConnection.

    Protocol-level keepalive pings are disabled by default; liveness is
    checked by HeartbeatMonitor at the application level.
    """

    def __init__(
        self,
        address: str,
        callbacks: TransportCallbacks,
        open_timeout: float | None = 10.0,
        **connect_kwargs: Any,
    ) -> None:
        super().__init__(address, callbacks)
        self._open_timeout = open_timeout
        self._connect_kwargs = {"ping_interval": None, **connect_kwargs}
        self._ws: ClientConnection | None = None
        self._reader: asyncio.Task[None] | None = None
        self._writer: asyncio.Task[None] | None = None
        self._closer: asyncio.Task[None] | None = None
        self._outbox: asyncio.Queue[Any] = asyncio.Queue()
        self._closed = False

    def open(self) -> None:
        loop = asyncio.get_running_loop()
        self._reader = loop.create_task(self._run(), name=f"ctrlsocket-reader:{self.address}")

    def send(self, data: Any) -> None:
        if self._closed:
            return
        if not isinstance(data, (str, bytes, bytearray, memoryview)):
            data = str(data)
        self._outbox.put_nowait(data)

    def close(self, code: int, reason: str) -> None:
        if self._closed:
            return
        loop = asyncio.get_running_loop()
        if self._ws is None:
            # handshake still in flight
            if self._reader is not None:
                self._reader.cancel()
            loop.call_soon(self._emit_close, CloseEvent(code=code, reason=reason))
            return
        self._closer = loop.create_task(self._ws.close(code, reason))

    async def _run(self) -> None:
        try:
            ws = await connect(
                self.address,
                open_timeout=self._open_timeout,
                **self._connect_kwargs,
            )
        except (OSError, TimeoutError, WebSocketException) as e:
            logger.warning("websocket connect failed", address=self.address, error=str(e))
            self.callbacks.on_error(
                ErrorEvent(error=TransportError(f"Failed to connect to {self.address}: {e}", cause=e))
            )
            self._emit_close(CloseEvent(code=ABNORMAL_CLOSURE, reason=str(e)))
            return

        self._ws = ws
        self._writer = asyncio.get_running_loop().create_task(self._drain(ws))
        try:
            self.callbacks.on_open(OpenEvent(address=self.address))
            async for data in ws:
                self.callbacks.on_message(MessageEvent(data=data))
        except ConnectionClosed:
            pass
        except Exception:
            await ws.close(INTERNAL_ERROR, "Listener failure")
            raise
        finally:
            self._writer.cancel()
            self._emit_close(self._close_event(ws))

    @staticmethod
    def _close_event(ws: ClientConnection) -> CloseEvent:
        # close_code stays None until the TCP connection is gone; the frame is known earlier
        rcvd = ws.protocol.close_rcvd
        if rcvd is None:
            return CloseEvent(code=ABNORMAL_CLOSURE)
        return CloseEvent(code=rcvd.code, reason=rcvd.reason, was_clean=True)

    async def _drain(self, ws: ClientConnection) -> None:
        while True:
            data = await self._outbox.get()
            try:
                await ws.send(data)
            except ConnectionClosed:
                logger.debug("send dropped, connection closed", address=self.address)
                return
            except WebSocketException as e:
                self.callbacks.on_error(
                    ErrorEvent(error=TransportError(f"Failed to send to {self.address}: {e}", cause=e))
                )

    def _emit_close(self, event: CloseEvent) -> None:
        if self._closed:
            return
        self._closed = True
        self.callbacks.on_close(event)
