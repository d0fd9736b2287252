"""Transport abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .types import CloseEvent, ErrorEvent, MessageEvent, OpenEvent


@dataclass(frozen=True)
class TransportCallbacks:
    """Notification channels a transport reports through."""

    on_open: Callable[[OpenEvent], None]
    on_message: Callable[[MessageEvent], None]
    on_error: Callable[[ErrorEvent], None]
    on_close: Callable[[CloseEvent], None]


class Transport(ABC):
    """A message-oriented full-duplex channel.

    None of the operations block. Their outcome is reported later through
    the callbacks, always on the event loop thread. A transport emits at
    most one close notification and nothing after it.
    """

    def __init__(self, address: str, callbacks: TransportCallbacks) -> None:
        self.address = address
        self.callbacks = callbacks

    @abstractmethod
    def open(self) -> None:
        ...

    @abstractmethod
    def send(self, data: Any) -> None:
        ...

    @abstractmethod
    def close(self, code: int, reason: str) -> None:
        ...


TransportFactory = Callable[[str, TransportCallbacks], Transport]
