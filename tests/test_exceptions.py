"""CtrlSocketError unit tests."""

from k1s0_ctrlsocket import (
    CtrlSocketError,
    CtrlSocketErrorCodes,
    InvalidArgumentError,
    InvalidStateError,
    NotConnectedError,
    TransportError,
)


def test_error_str_includes_code() -> None:
    error = CtrlSocketError(code="INVALID_STATE", message="busy")
    assert str(error) == "INVALID_STATE: busy"


def test_error_with_cause() -> None:
    cause = OSError("refused")
    error = TransportError("connect failed", cause=cause)
    assert error.__cause__ is cause
    assert error.code == CtrlSocketErrorCodes.TRANSPORT_ERROR


def test_subclasses_carry_fixed_codes() -> None:
    assert InvalidStateError("x").code == CtrlSocketErrorCodes.INVALID_STATE
    assert InvalidArgumentError("x").code == CtrlSocketErrorCodes.INVALID_ARGUMENT
    assert NotConnectedError().code == CtrlSocketErrorCodes.NOT_CONNECTED


def test_subclasses_share_base() -> None:
    for error in (InvalidStateError("x"), InvalidArgumentError("x"), NotConnectedError()):
        assert isinstance(error, CtrlSocketError)
