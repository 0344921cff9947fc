"""Resilience policies (bounded retry) for upstream calls."""

from .retry import DEFAULT_RETRY_CONFIG, RetryConfig, call_with_retry

__all__ = ["DEFAULT_RETRY_CONFIG", "RetryConfig", "call_with_retry"]
