"""Application-level liveness check.

Transport close notifications do not arrive when a peer stalls silently
(NAT timeout, half-open TCP). The monitor sends a ping after a period of
inbound silence and gives up on the connection if nothing at all arrives
within the watchdog window. Any inbound message counts as proof of life,
not just a pong.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from enum import Enum
from typing import Any

import structlog

from .config import HeartbeatConfig

logger = structlog.stdlib.get_logger(__name__)


class HeartbeatPhase(str, Enum):
    """Monitor phases."""

    STOPPED = "stopped"
    IDLE_WAITING = "idle_waiting"
    PONG_WAITING = "pong_waiting"


class HeartbeatMonitor:
    """Two-timer liveness monitor. Must be driven from a running event loop."""

    def __init__(
        self,
        config: HeartbeatConfig,
        send: Callable[[Any], None],
        on_timeout: Callable[[], None],
    ) -> None:
        self._config = config
        self._send = send
        self._on_timeout = on_timeout
        self._phase = HeartbeatPhase.STOPPED
        self._idle_handle: asyncio.TimerHandle | None = None
        self._pong_handle: asyncio.TimerHandle | None = None

    @property
    def phase(self) -> HeartbeatPhase:
        return self._phase

    def start(self) -> HeartbeatMonitor:
        """Begin the idle countdown. Any running timers are replaced."""
        self.reset()
        loop = asyncio.get_running_loop()
        self._idle_handle = loop.call_later(self._config.idle_timeout_ms / 1000, self._on_idle)
        self._phase = HeartbeatPhase.IDLE_WAITING
        return self

    def reset(self) -> HeartbeatMonitor:
        """Cancel both timers. Safe to call in any phase."""
        if self._idle_handle is not None:
            self._idle_handle.cancel()
            self._idle_handle = None
        if self._pong_handle is not None:
            self._pong_handle.cancel()
            self._pong_handle = None
        self._phase = HeartbeatPhase.STOPPED
        return self

    def _on_idle(self) -> None:
        self._idle_handle = None
        logger.debug("heartbeat ping", idle_timeout_ms=self._config.idle_timeout_ms)
        # arm the watchdog first so a reset() triggered from inside send still clears it
        loop = asyncio.get_running_loop()
        self._pong_handle = loop.call_later(self._config.pong_timeout_ms / 1000, self._on_watchdog)
        self._phase = HeartbeatPhase.PONG_WAITING
        self._send(self._config.ping_payload)

    def _on_watchdog(self) -> None:
        self._pong_handle = None
        self._phase = HeartbeatPhase.STOPPED
        logger.warning(
            "heartbeat timed out",
            pong_timeout_ms=self._config.pong_timeout_ms,
        )
        self._on_timeout()
