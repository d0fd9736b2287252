"""OpenTelemetry connection lifecycle metrics"""

from __future__ import annotations

from opentelemetry import metrics

_meter = metrics.get_meter("k1s0_ctrlsocket", version="0.1.0")

connections_opened_total = _meter.create_counter(
    name="ctrlsocket_connections_opened_total",
    description="Total number of connections that reached OPEN",
    unit="1",
)

connections_closed_total = _meter.create_counter(
    name="ctrlsocket_connections_closed_total",
    description="Total number of connection closes, by close code",
    unit="1",
)

reconnect_attempts_total = _meter.create_counter(
    name="ctrlsocket_reconnect_attempts_total",
    description="Total number of connect() calls made by the reconnect loop",
    unit="1",
)

heartbeat_timeouts_total = _meter.create_counter(
    name="ctrlsocket_heartbeat_timeouts_total",
    description="Total number of connections closed for missing heartbeat replies",
    unit="1",
)
