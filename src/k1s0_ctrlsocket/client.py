"""Connection state machine with retry-on-close and heartbeat policies."""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import structlog

from .codec import encode_payload
from .config import HeartbeatConfig, RetryConfig
from .exceptions import InvalidArgumentError, InvalidStateError, NotConnectedError
from .heartbeat import HeartbeatMonitor
from .listeners import ListenerRegistry
from .metrics import (
    connections_closed_total,
    connections_opened_total,
    heartbeat_timeouts_total,
    reconnect_attempts_total,
)
from .retry import RetryPolicy
from .transport import Transport, TransportCallbacks, TransportFactory
from .types import (
    HEARTBEAT_TIMEOUT,
    NORMAL_CLOSURE,
    CloseEvent,
    ConnectionState,
    ErrorEvent,
    Listener,
    MessageEvent,
    OpenEvent,
    is_valid_close_code,
)
from .websocket import WebSocketTransport

if TYPE_CHECKING:
    from .settings import CtrlSocketSettings

logger = structlog.stdlib.get_logger(__name__)


class CtrlSocket:
    """Socket wrapper that tracks its own state, reconnects and checks liveness.

    All methods must be called from the thread running the event loop.
    connect(), disconnect() and send() return immediately; outcomes are
    reported through the subscribed listeners.
    """

    def __init__(self, address: str, transport_factory: TransportFactory | None = None) -> None:
        self._address = address
        self._transport_factory: TransportFactory = transport_factory or WebSocketTransport
        self._transport: Transport | None = None
        self._state = ConnectionState.CLOSED
        self._reconnect_task: asyncio.Task[None] | None = None
        self._listeners = ListenerRegistry()
        self._retry = RetryPolicy(RetryConfig())
        self._heartbeat_config = HeartbeatConfig()
        self._heartbeat = HeartbeatMonitor(
            self._heartbeat_config,
            send=self.send,
            on_timeout=self._on_heartbeat_timeout,
        )
        self._callbacks = TransportCallbacks(
            on_open=self._handle_open,
            on_message=self._handle_message,
            on_error=self._handle_error,
            on_close=self._handle_close,
        )

    @classmethod
    def from_settings(
        cls,
        settings: CtrlSocketSettings,
        transport_factory: TransportFactory | None = None,
    ) -> CtrlSocket:
        """Build a socket from loaded settings, applying retry and heartbeat sections."""
        if transport_factory is None:
            transport_factory = functools.partial(
                WebSocketTransport, open_timeout=settings.open_timeout_ms / 1000
            )
        sock = cls(settings.address, transport_factory)
        if settings.retry is not None:
            sock.retry(settings.retry.max_attempts, settings.retry.interval_ms)
        if settings.heartbeat is not None:
            sock.heartbeat(
                settings.heartbeat.idle_timeout_ms,
                settings.heartbeat.ping_payload,
                settings.heartbeat.pong_timeout_ms,
            )
        return sock

    @property
    def address(self) -> str:
        return self._address

    @property
    def ready_state(self) -> ConnectionState:
        return self._state

    @property
    def retry_config(self) -> RetryConfig:
        return self._retry.config

    @property
    def heartbeat_config(self) -> HeartbeatConfig:
        return self._heartbeat_config

    def __repr__(self) -> str:
        return f"CtrlSocket(address={self._address!r}, state={self._state.name})"

    def subscribe(
        self,
        listener: Listener | Mapping[str, Listener] | None = None,
        **callbacks: Listener,
    ) -> CtrlSocket:
        """Install listeners. A bare callable becomes on_message."""
        self._listeners.update(listener, **callbacks)
        return self

    def connect(self) -> CtrlSocket:
        if self._state is not ConnectionState.CLOSED:
            raise InvalidStateError("Connection is busy, please try again later.")
        self._state = ConnectionState.CONNECTING
        try:
            self._transport = self._transport_factory(self._address, self._callbacks)
            self._transport.open()
        except Exception:
            self._state = ConnectionState.CLOSED
            self._transport = None
            raise
        logger.debug("connecting", address=self._address)
        return self

    def disconnect(self, code: int = NORMAL_CLOSURE, reason: str = "Normal closure") -> CtrlSocket:
        if not is_valid_close_code(code):
            raise InvalidArgumentError(f"Invalid close code: {code}")
        if self._state is not ConnectionState.OPEN or self._transport is None:
            raise InvalidStateError("Connection has already been closed")
        self._state = ConnectionState.CLOSING
        self._retry.reset()
        self._heartbeat.reset()
        logger.debug("closing", address=self._address, code=code, reason=reason)
        self._transport.close(code, reason)
        return self

    def reconnect(self, interval_ms: int = 5000) -> None:
        """Poll every interval_ms and connect whenever the socket is CLOSED."""
        if interval_ms <= 0:
            raise InvalidArgumentError("Reconnect interval must be positive")
        self._retry.reset()
        self._arm_reconnect(interval_ms)

    def retry(self, max_attempts: int = 0, interval_ms: int = 5000) -> CtrlSocket:
        """Reconnect after abnormal closes. max_attempts=0 retries until OPEN."""
        self._retry.configure(max_attempts, interval_ms)
        return self

    def heartbeat(
        self,
        idle_timeout_ms: int = 30000,
        ping_payload: Any = None,
        pong_timeout_ms: int = 10000,
    ) -> CtrlSocket:
        """Enable the liveness check.

        After idle_timeout_ms without inbound traffic ping_payload is sent;
        if nothing arrives within pong_timeout_ms the connection is closed
        with code 4000. ping_payload=None keeps the configured payload.
        """
        if idle_timeout_ms <= 0:
            raise InvalidArgumentError("Heartbeat idle timeout must be positive")
        if pong_timeout_ms <= 0:
            raise InvalidArgumentError("Heartbeat pong timeout must be positive")
        cfg = self._heartbeat_config
        cfg.enabled = True
        cfg.idle_timeout_ms = idle_timeout_ms
        cfg.pong_timeout_ms = pong_timeout_ms
        if ping_payload is not None:
            cfg.ping_payload = ping_payload
        if self._state is ConnectionState.OPEN:
            self._heartbeat.start()
        return self

    def send(self, payload: Any) -> None:
        if self._state is ConnectionState.CONNECTING:
            raise NotConnectedError()
        if self._state is not ConnectionState.OPEN or self._transport is None:
            logger.debug("send dropped", address=self._address, state=self._state.name)
            return
        self._transport.send(encode_payload(payload))

    def _handle_open(self, event: OpenEvent) -> None:
        self._state = ConnectionState.OPEN
        self._retry.on_open()
        self._cancel_reconnect()
        connections_opened_total.add(1)
        logger.info("connection opened", address=self._address)
        try:
            self._listeners.emit_open(event)
        finally:
            if self._heartbeat_config.enabled and self._state is ConnectionState.OPEN:
                self._heartbeat.start()

    def _handle_message(self, event: MessageEvent) -> None:
        try:
            self._listeners.emit_message(event)
        finally:
            if self._heartbeat_config.enabled and self._state is ConnectionState.OPEN:
                self._heartbeat.reset().start()

    def _handle_error(self, event: ErrorEvent) -> None:
        logger.warning("transport error", address=self._address, error=str(event.error))
        self._listeners.emit_error(event)

    def _handle_close(self, event: CloseEvent) -> None:
        self._state = ConnectionState.CLOSED
        self._cancel_reconnect()
        self._transport = None
        self._heartbeat.reset()
        connections_closed_total.add(1, {"code": event.code})
        logger.info(
            "connection closed",
            address=self._address,
            code=event.code,
            reason=event.reason,
        )
        try:
            self._listeners.emit_close(event)
        finally:
            interval = self._retry.next_interval(event.code)
            if interval is not None:
                logger.info(
                    "reconnect scheduled",
                    address=self._address,
                    interval_ms=interval,
                    attempts_used=self._retry.config.attempts_used,
                )
                self._arm_reconnect(interval)

    def _on_heartbeat_timeout(self) -> None:
        if self._state is ConnectionState.OPEN:
            heartbeat_timeouts_total.add(1)
            self.disconnect(HEARTBEAT_TIMEOUT, "Loss connection")

    def _arm_reconnect(self, interval_ms: int) -> None:
        self._cancel_reconnect()
        loop = asyncio.get_running_loop()
        self._reconnect_task = loop.create_task(
            self._reconnect_loop(interval_ms),
            name=f"ctrlsocket-reconnect:{self._address}",
        )

    def _cancel_reconnect(self) -> None:
        if self._reconnect_task is not None:
            self._reconnect_task.cancel()
            self._reconnect_task = None

    async def _reconnect_loop(self, interval_ms: int) -> None:
        while True:
            await asyncio.sleep(interval_ms / 1000)
            if self._state is ConnectionState.CLOSED:
                reconnect_attempts_total.add(1)
                logger.debug("reconnecting", address=self._address)
                try:
                    self.connect()
                except Exception:
                    logger.exception("reconnect attempt failed", address=self._address)
