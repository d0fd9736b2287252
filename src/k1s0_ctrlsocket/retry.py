"""Reconnect-on-close decision."""

from __future__ import annotations

import structlog

from .config import RetryConfig
from .exceptions import InvalidArgumentError
from .types import NORMAL_CLOSURE

logger = structlog.stdlib.get_logger(__name__)


class RetryPolicy:
    """Decides, once per close, whether to arm the reconnect loop.

    Intervals are constant; there is no backoff.
    """

    def __init__(self, config: RetryConfig | None = None) -> None:
        self._config = config or RetryConfig()

    @property
    def config(self) -> RetryConfig:
        return self._config

    def configure(self, max_attempts: int = 0, interval_ms: int = 5000) -> None:
        """Enable retry. max_attempts=0 retries until the connection opens."""
        if max_attempts < 0:
            raise InvalidArgumentError("Retry count must not be less than 0")
        if interval_ms <= 0:
            raise InvalidArgumentError("Retry interval must be positive")
        self._config.enabled = True
        self._config.max_attempts = max_attempts
        self._config.interval_ms = interval_ms

    def next_interval(self, close_code: int) -> int | None:
        """Return the reconnect interval to arm, or None to stay closed."""
        cfg = self._config
        if not cfg.enabled or close_code == NORMAL_CLOSURE:
            return None
        if cfg.max_attempts == 0:
            return cfg.interval_ms
        if cfg.attempts_used < cfg.max_attempts - 1:
            cfg.attempts_used += 1
            return cfg.interval_ms
        logger.info(
            "retry attempts exhausted",
            max_attempts=cfg.max_attempts,
            close_code=close_code,
        )
        cfg.attempts_used = 0
        return None

    def on_open(self) -> None:
        self._config.attempts_used = 0

    def reset(self) -> None:
        self._config.attempts_used = 0
