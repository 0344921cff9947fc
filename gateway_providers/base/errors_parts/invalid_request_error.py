"""Local validation failure raised before any upstream call is made."""
from __future__ import annotations

from typing import Any, Dict


class InvalidRequestError(Exception):
    """Raised when a gateway request is rejected locally.

    Attributes:
        message: Human-readable reason.
        code: Stable uppercase code such as ``MISSING_API_KEY`` or
            ``UNSUPPORTED_PROVIDER``.
        status_code: HTTP status reported to callers (400 by default).
    """

    def __init__(self, message: str, code: str = "INVALID_REQUEST", status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "code": self.code, "statusCode": self.status_code}


__all__ = ["InvalidRequestError"]
