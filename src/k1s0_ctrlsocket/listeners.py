"""User callback registry."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .exceptions import InvalidArgumentError
from .types import CloseEvent, ErrorEvent, Listener, MessageEvent, OpenEvent

LISTENER_NAMES = ("on_open", "on_message", "on_error", "on_close")


def _noop(event: Any) -> None:
    return None


class ListenerRegistry:
    """Holds the four user callbacks and forwards notifications to them.

    Forwarding never catches: an exception raised by a listener reaches
    whoever delivered the notification.
    """

    def __init__(self) -> None:
        self.on_open: Listener = _noop
        self.on_message: Listener = _noop
        self.on_error: Listener = _noop
        self.on_close: Listener = _noop

    def update(
        self,
        listener: Listener | Mapping[str, Listener] | None = None,
        **callbacks: Listener,
    ) -> None:
        """Install callbacks.

        A bare callable becomes on_message. A mapping and/or keyword
        arguments are merged field by field; fields not given keep their
        current callback.
        """
        merged: dict[str, Listener] = {}
        if callable(listener):
            merged["on_message"] = listener
        elif isinstance(listener, Mapping):
            merged.update(listener)
        elif listener is not None:
            raise InvalidArgumentError(
                f"Listener must be a callable or a mapping, got {type(listener).__name__}"
            )
        merged.update(callbacks)

        for name, fn in merged.items():
            if name not in LISTENER_NAMES:
                raise InvalidArgumentError(f"Unknown listener: {name}")
            if not callable(fn):
                raise InvalidArgumentError(f"Listener {name} is not callable")
        for name, fn in merged.items():
            setattr(self, name, fn)

    def emit_open(self, event: OpenEvent) -> None:
        self.on_open(event)

    def emit_message(self, event: MessageEvent) -> None:
        self.on_message(event)

    def emit_error(self, event: ErrorEvent) -> None:
        self.on_error(event)

    def emit_close(self, event: CloseEvent) -> None:
        self.on_close(event)
