"""ListenerRegistry unit tests."""

import pytest

from k1s0_ctrlsocket import (
    CloseEvent,
    InvalidArgumentError,
    ListenerRegistry,
    MessageEvent,
    OpenEvent,
)


def test_defaults_are_noops() -> None:
    registry = ListenerRegistry()
    registry.emit_open(OpenEvent(address="ws://x"))
    registry.emit_message(MessageEvent(data="x"))
    registry.emit_close(CloseEvent(code=1000))


def test_callable_installs_on_message_only() -> None:
    registry = ListenerRegistry()
    original_open = registry.on_open
    seen: list[MessageEvent] = []

    registry.update(seen.append)
    registry.emit_message(MessageEvent(data="payload"))

    assert seen == [MessageEvent(data="payload")]
    assert registry.on_open is original_open


def test_mapping_and_keywords_merge() -> None:
    registry = ListenerRegistry()
    opened: list[OpenEvent] = []
    closed: list[CloseEvent] = []

    registry.update({"on_open": opened.append})
    registry.update(on_close=closed.append)
    registry.emit_open(OpenEvent(address="ws://x"))
    registry.emit_close(CloseEvent(code=4001))

    assert len(opened) == 1
    assert closed[0].code == 4001


def test_unknown_listener_rejected() -> None:
    registry = ListenerRegistry()
    before = registry.on_message
    with pytest.raises(InvalidArgumentError):
        registry.update({"on_message": print, "onmessage": print})
    assert registry.on_message is before


def test_non_callable_rejected() -> None:
    registry = ListenerRegistry()
    with pytest.raises(InvalidArgumentError):
        registry.update(on_error="not a function")  # type: ignore[arg-type]


def test_invalid_listener_type_rejected() -> None:
    registry = ListenerRegistry()
    with pytest.raises(InvalidArgumentError):
        registry.update(42)  # type: ignore[arg-type]


def test_listener_exception_is_not_caught() -> None:
    registry = ListenerRegistry()

    def explode(event: object) -> None:
        raise KeyError("boom")

    registry.update(on_close=explode)
    with pytest.raises(KeyError):
        registry.emit_close(CloseEvent(code=1006))
