"""Outbound payload encoding."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from .exceptions import CtrlSocketErrorCodes, InvalidArgumentError


def encode_payload(payload: Any) -> Any:
    """Serialize structured payloads to JSON text; pass other scalars through unchanged."""
    if isinstance(payload, (str, bytes, bytearray)):
        return payload
    if isinstance(payload, BaseModel):
        return payload.model_dump_json()
    if dataclasses.is_dataclass(payload) and not isinstance(payload, type):
        return _dumps(dataclasses.asdict(payload))
    if payload is None or isinstance(payload, (Mapping, list, tuple)):
        return _dumps(payload)
    return payload


def _dumps(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(
            f"Payload is not JSON serializable: {e}",
            code=CtrlSocketErrorCodes.SERIALIZATION_ERROR,
            cause=e,
        ) from e
