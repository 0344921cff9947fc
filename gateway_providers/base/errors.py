"""Gateway error taxonomy facade.

Stable import location for the error types used across adapters, the
orchestrators and the HTTP layer:

- ``ErrorCode``: normalized failure category.
- ``ProviderError``: upstream failure tagged with provider identity and status.
- ``InvalidRequestError``: local validation failure (no upstream call made).
- ``classify_exception`` / ``code_for_status``: mapping helpers.
"""
from __future__ import annotations

from .errors_parts import (
    ErrorCode,
    InvalidRequestError,
    ProviderError,
    classify_exception,
    code_for_status,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "InvalidRequestError",
    "classify_exception",
    "code_for_status",
]
