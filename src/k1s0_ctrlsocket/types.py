"""Connection state, event and close-code types."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

NORMAL_CLOSURE: Final[int] = 1000
INTERNAL_ERROR: Final[int] = 1011
ABNORMAL_CLOSURE: Final[int] = 1006
HEARTBEAT_TIMEOUT: Final[int] = 4000

APPLICATION_CLOSE_MIN: Final[int] = 4000
APPLICATION_CLOSE_MAX: Final[int] = 4999


class ConnectionState(Enum):
    """Connection state. Values follow the WebSocket readyState numbering."""

    CONNECTING = 0
    OPEN = 1
    CLOSING = 2
    CLOSED = 3


@dataclass(frozen=True)
class OpenEvent:
    """The transport finished its opening handshake."""

    address: str


@dataclass(frozen=True)
class MessageEvent:
    """An inbound message."""

    data: str | bytes


@dataclass(frozen=True)
class ErrorEvent:
    """A transport-level error. Does not by itself end the connection."""

    error: BaseException


@dataclass(frozen=True)
class CloseEvent:
    """The connection is gone."""

    code: int
    reason: str = ""
    was_clean: bool = False

    @property
    def is_normal(self) -> bool:
        return self.code == NORMAL_CLOSURE


Listener = Callable[[Any], None]


def is_valid_close_code(code: int) -> bool:
    """Codes a caller may close with: 1000 or the 4000-4999 application range."""
    return code == NORMAL_CLOSURE or APPLICATION_CLOSE_MIN <= code <= APPLICATION_CLOSE_MAX
