"""Declarative settings (pydantic BaseModel, loaded from YAML)"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import CtrlSocketErrorCodes, SettingsError


class RetrySection(BaseModel):
    """Reconnect-on-close settings."""

    max_attempts: int = Field(default=0, ge=0)
    interval_ms: int = Field(default=5000, gt=0)


class HeartbeatSection(BaseModel):
    """Liveness check settings."""

    idle_timeout_ms: int = Field(default=30000, gt=0)
    pong_timeout_ms: int = Field(default=10000, gt=0)
    ping_payload: Any = Field(default_factory=lambda: {"command": "ping"})


class CtrlSocketSettings(BaseModel):
    """Settings for one CtrlSocket."""

    address: str = Field(min_length=1)
    open_timeout_ms: int = Field(default=10000, gt=0)
    retry: RetrySection | None = None
    heartbeat: HeartbeatSection | None = None


def load_settings(path: Path) -> CtrlSocketSettings:
    """Read a YAML file and return validated CtrlSocketSettings."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SettingsError(
            code=CtrlSocketErrorCodes.READ_FILE,
            message=f"Failed to read settings file: {path}",
            cause=e,
        ) from e
    try:
        data: dict[str, Any] = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise SettingsError(
            code=CtrlSocketErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    try:
        return CtrlSocketSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(
            code=CtrlSocketErrorCodes.VALIDATION,
            message=f"Settings validation failed: {e}",
            cause=e,
        ) from e
