"""HTTP utilities package for adapters.

Exposes the per-call async client builder.
"""

from .client import build_async_client, resolve_timeout

__all__ = ["build_async_client", "resolve_timeout"]
