"""Settings loader unit tests."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from k1s0_ctrlsocket import CtrlSocketErrorCodes, CtrlSocketSettings, SettingsError, load_settings


def test_load_minimal_settings(tmp_path: Path) -> None:
    path = tmp_path / "ctrlsocket.yaml"
    path.write_text("address: ws://localhost:8080/ws\n")
    settings = load_settings(path)
    assert settings.address == "ws://localhost:8080/ws"
    assert settings.open_timeout_ms == 10000
    assert settings.retry is None
    assert settings.heartbeat is None


def test_load_full_settings(tmp_path: Path) -> None:
    path = tmp_path / "ctrlsocket.yaml"
    path.write_text(
        "address: wss://example.com/stream\n"
        "retry:\n"
        "  max_attempts: 3\n"
        "  interval_ms: 1000\n"
        "heartbeat:\n"
        "  idle_timeout_ms: 15000\n"
        "  ping_payload:\n"
        "    command: heartbeat\n"
    )
    settings = load_settings(path)
    assert settings.retry is not None
    assert settings.retry.max_attempts == 3
    assert settings.heartbeat is not None
    assert settings.heartbeat.idle_timeout_ms == 15000
    assert settings.heartbeat.pong_timeout_ms == 10000
    assert settings.heartbeat.ping_payload == {"command": "heartbeat"}


def test_load_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(SettingsError) as exc_info:
        load_settings(tmp_path / "missing.yaml")
    assert exc_info.value.code == CtrlSocketErrorCodes.READ_FILE


def test_load_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("address: {invalid: yaml: content:\n")
    with pytest.raises(SettingsError) as exc_info:
        load_settings(path)
    assert exc_info.value.code == CtrlSocketErrorCodes.PARSE_YAML


def test_load_negative_retry_count(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("address: ws://x\nretry:\n  max_attempts: -1\n")
    with pytest.raises(SettingsError) as exc_info:
        load_settings(path)
    assert exc_info.value.code == CtrlSocketErrorCodes.VALIDATION


def test_missing_address_rejected() -> None:
    with pytest.raises(ValidationError):
        CtrlSocketSettings.model_validate({})


def test_zero_interval_rejected() -> None:
    with pytest.raises(ValidationError):
        CtrlSocketSettings.model_validate({"address": "ws://x", "retry": {"interval_ms": 0}})
