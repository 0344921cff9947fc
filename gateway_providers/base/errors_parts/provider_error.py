"""
Structured upstream failure raised by provider adapters.

Every non-2xx upstream response, transport failure or malformed payload is
surfaced as a `ProviderError` tagged with the adapter identity, the HTTP
status and a normalized `ErrorCode`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message (upstream ``error.message`` when
            the provider sent one).
        provider: Provider identity where the error originated.
        status_code: HTTP status of the upstream response; 500 when the call
            never produced a response.
        upstream_code: Provider-reported error code string, when present.
        details: Raw upstream error payload for diagnostics. Never persisted.
        model: Optional model name associated with the failure.
    """

    code: ErrorCode
    message: str
    provider: str
    status_code: int = 500
    upstream_code: Optional[str] = None
    details: Optional[Any] = None
    model: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider}:{self.model or '-'} {self.code.value} ({self.status_code}): {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly view used by the HTTP error envelope."""
        return {
            "message": self.message,
            "code": self.upstream_code or self.code.value,
            "statusCode": self.status_code,
        }


__all__ = ["ProviderError"]
