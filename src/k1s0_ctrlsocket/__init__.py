"""k1s0 ctrlsocket library."""

from .client import CtrlSocket
from .codec import encode_payload
from .config import HeartbeatConfig, RetryConfig
from .exceptions import (
    CtrlSocketError,
    CtrlSocketErrorCodes,
    InvalidArgumentError,
    InvalidStateError,
    NotConnectedError,
    SettingsError,
    TransportError,
)
from .heartbeat import HeartbeatMonitor, HeartbeatPhase
from .listeners import ListenerRegistry
from .memory import InMemoryTransport, InMemoryTransportFactory
from .retry import RetryPolicy
from .settings import CtrlSocketSettings, HeartbeatSection, RetrySection, load_settings
from .transport import Transport, TransportCallbacks, TransportFactory
from .types import (
    ABNORMAL_CLOSURE,
    HEARTBEAT_TIMEOUT,
    NORMAL_CLOSURE,
    CloseEvent,
    ConnectionState,
    ErrorEvent,
    MessageEvent,
    OpenEvent,
)
from .websocket import WebSocketTransport

__all__ = [
    "ABNORMAL_CLOSURE",
    "HEARTBEAT_TIMEOUT",
    "NORMAL_CLOSURE",
    "CloseEvent",
    "ConnectionState",
    "CtrlSocket",
    "CtrlSocketError",
    "CtrlSocketErrorCodes",
    "CtrlSocketSettings",
    "ErrorEvent",
    "HeartbeatConfig",
    "HeartbeatMonitor",
    "HeartbeatPhase",
    "HeartbeatSection",
    "InMemoryTransport",
    "InMemoryTransportFactory",
    "InvalidArgumentError",
    "InvalidStateError",
    "ListenerRegistry",
    "MessageEvent",
    "NotConnectedError",
    "OpenEvent",
    "RetryConfig",
    "RetryPolicy",
    "RetrySection",
    "SettingsError",
    "Transport",
    "TransportCallbacks",
    "TransportError",
    "TransportFactory",
    "WebSocketTransport",
    "encode_payload",
    "load_settings",
]
