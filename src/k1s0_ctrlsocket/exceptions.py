"""ctrlsocket library exception types."""

from __future__ import annotations


class CtrlSocketError(Exception):
    """Base class for ctrlsocket errors."""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class CtrlSocketErrorCodes:
    """CtrlSocketError code constants."""

    INVALID_STATE: str = "INVALID_STATE"
    INVALID_ARGUMENT: str = "INVALID_ARGUMENT"
    NOT_CONNECTED: str = "NOT_CONNECTED"
    SERIALIZATION_ERROR: str = "SERIALIZATION_ERROR"
    TRANSPORT_ERROR: str = "TRANSPORT_ERROR"
    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"


class InvalidStateError(CtrlSocketError):
    """The operation is not legal in the current connection state."""

    def __init__(self, message: str) -> None:
        super().__init__(CtrlSocketErrorCodes.INVALID_STATE, message)


class InvalidArgumentError(CtrlSocketError):
    """An argument is out of its permitted range."""

    def __init__(
        self,
        message: str,
        code: str = CtrlSocketErrorCodes.INVALID_ARGUMENT,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(code, message, cause)


class NotConnectedError(CtrlSocketError):
    """send() was called before the connection opened."""

    def __init__(self, message: str = "The connection has not been established yet") -> None:
        super().__init__(CtrlSocketErrorCodes.NOT_CONNECTED, message)


class TransportError(CtrlSocketError):
    """A failure reported by the underlying transport."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(CtrlSocketErrorCodes.TRANSPORT_ERROR, message, cause)


class SettingsError(CtrlSocketError):
    """Settings could not be read or validated."""
