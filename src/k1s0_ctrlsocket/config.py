"""Retry and heartbeat configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _default_ping() -> dict[str, Any]:
    return {"command": "ping"}


@dataclass
class RetryConfig:
    """Reconnect-on-close settings. Mutated in place by CtrlSocket.retry()."""

    enabled: bool = False
    max_attempts: int = 0  # 0 = unlimited
    interval_ms: int = 5000
    attempts_used: int = 0


@dataclass
class HeartbeatConfig:
    """Liveness probe settings. Mutated in place by CtrlSocket.heartbeat()."""

    enabled: bool = False
    idle_timeout_ms: int = 30000
    ping_payload: Any = field(default_factory=_default_ping)
    pong_timeout_ms: int = 10000
