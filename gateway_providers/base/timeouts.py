"""Unified timeout configuration for upstream calls.

Every upstream HTTP call is bounded by a per-attempt timeout. Values are
centralized here so adapters never hard-code their own.

get_timeout_config()
    Returns a process-cached :class:`TimeoutConfig`, parsing environment
    overrides on first use (and again whenever they change). Supported
    environment variables (all optional):
        GATEWAY_TIMEOUT_HTTP_SECONDS
        GATEWAY_TIMEOUT_CONNECT_SECONDS

A timed-out attempt surfaces as a ``ProviderError`` with code ``timeout``,
which the chat orchestrator treats as retryable.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx

from ..config.defaults import DEFAULT_CONNECT_TIMEOUT, DEFAULT_HTTP_TIMEOUT


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Upper bound for one upstream request attempt
            (read, write and pool phases).
        connect_timeout_seconds: Upper bound for establishing the connection.
    """

    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT
    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT

    def as_httpx(self) -> httpx.Timeout:
        """Return the equivalent ``httpx.Timeout``."""
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read a positive float from the environment, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(
        [
            os.getenv("GATEWAY_TIMEOUT_HTTP_SECONDS", ""),
            os.getenv("GATEWAY_TIMEOUT_CONNECT_SECONDS", ""),
        ]
    )
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float("GATEWAY_TIMEOUT_HTTP_SECONDS", DEFAULT_HTTP_TIMEOUT),
        connect_timeout_seconds=_parse_env_float("GATEWAY_TIMEOUT_CONNECT_SECONDS", DEFAULT_CONNECT_TIMEOUT),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
]
