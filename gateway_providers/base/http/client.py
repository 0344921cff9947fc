"""Per-call async HTTP clients for adapters.

Purpose:
    Build a fresh ``httpx.AsyncClient`` for each upstream call. Clients are
    used as ``async with`` blocks and closed when the call completes; no pool
    is shared between requests, so concurrent requests share no mutable
    state.

Timeout strategy:
    When the caller passes no explicit timeout, the value derives from
    :func:`get_timeout_config`. No numeric literals are introduced here.

Testing seam:
    An optional ``transport`` (for example ``httpx.MockTransport``) replaces
    the network layer without touching adapter code.
"""

from __future__ import annotations

from typing import Mapping, Optional, Union

import httpx

from ..timeouts import get_timeout_config

TimeoutLike = Union[float, httpx.Timeout, None]


def resolve_timeout(timeout: TimeoutLike = None) -> httpx.Timeout:
    """Return an ``httpx.Timeout`` from a number, a Timeout, or the config default."""
    if isinstance(timeout, httpx.Timeout):
        return timeout
    if timeout is not None:
        return httpx.Timeout(float(timeout))
    return get_timeout_config().as_httpx()


def build_async_client(
    base_url: str,
    *,
    headers: Optional[Mapping[str, str]] = None,
    timeout: TimeoutLike = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` bound to ``base_url``.

    Parameters:
        base_url: Upstream API root; request paths are relative to it.
        headers: Default headers (authentication, API version).
        timeout: Per-attempt timeout override.
        transport: Optional transport replacing the network layer.

    Returns:
        A new client; callers own it and must close it (``async with``).
    """
    kwargs = {
        "base_url": base_url,
        "headers": dict(headers or {}),
        "timeout": resolve_timeout(timeout),
    }
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(**kwargs)


__all__ = ["build_async_client", "resolve_timeout", "TimeoutLike"]
