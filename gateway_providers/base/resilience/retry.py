"""Bounded retry policy for upstream chat calls.

Fixed delay between attempts, no jitter. Every ``ProviderError`` is retried
unless its status is listed in ``non_retryable_statuses`` (the request or
the credential is wrong, so repeating it cannot help). When attempts run
out, the last error is re-raised unchanged. Waits use ``asyncio.sleep`` via
the module-level ``_sleep`` hook so the event loop is never blocked.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Mapping, Optional, Protocol, TypeVar

from ...config.defaults import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_DELAY_SECONDS,
    NON_RETRYABLE_STATUSES,
)
from ..errors import ProviderError

T = TypeVar("T")

_sleep = asyncio.sleep


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = DEFAULT_MAX_RETRIES
    delay_seconds: float = DEFAULT_RETRY_DELAY_SECONDS
    non_retryable_statuses: tuple[int, ...] = NON_RETRYABLE_STATUSES
    attempt_logger: AttemptLogger | None = None

    @property
    def max_attempts(self) -> int:
        return max(self.max_retries, 0) + 1

    def delays(self) -> Iterable[float]:
        for _ in range(max(self.max_retries, 0)):
            yield self.delay_seconds

    def is_retryable(self, error: ProviderError) -> bool:
        return error.status_code not in self.non_retryable_statuses

    @classmethod
    def from_settings(
        cls, settings: Mapping[str, Any], *, attempt_logger: Optional[AttemptLogger] = None
    ) -> "RetryConfig":
        """Build a config from ``get_gateway_config()``-style settings."""
        return cls(
            max_retries=int(settings.get("max_retries", DEFAULT_MAX_RETRIES)),
            delay_seconds=float(settings.get("retry_delay_seconds", DEFAULT_RETRY_DELAY_SECONDS)),
            attempt_logger=attempt_logger,
        )


DEFAULT_RETRY_CONFIG = RetryConfig()


async def call_with_retry(
    func: Callable[[], Awaitable[T]], config: RetryConfig = DEFAULT_RETRY_CONFIG
) -> T:
    """Await ``func()`` under ``config``; return its result or raise the last error."""
    last_exc: ProviderError | None = None
    # final attempt has delay None
    for attempt, delay in enumerate([*config.delays(), None]):
        try:
            result = await func()
        except ProviderError as e:
            last_exc = e
            will_retry = delay is not None and config.is_retryable(e)
            if config.attempt_logger:
                config.attempt_logger(
                    attempt=attempt,
                    max_attempts=config.max_attempts,
                    delay=delay if will_retry else None,
                    error=e,
                )
            if not will_retry:
                raise
            await _sleep(delay)
            continue
        if config.attempt_logger:
            config.attempt_logger(
                attempt=attempt,
                max_attempts=config.max_attempts,
                delay=None,
                error=None,
            )
        return result
    if last_exc is None:  # pragma: no cover - unreachable
        raise RuntimeError("retry: reached terminal state without captured exception")
    raise last_exc


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "call_with_retry",
]
