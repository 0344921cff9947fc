"""ValidationResult DTO returned by API key validation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ValidationResult:
    """Outcome of validating an upstream API key.

    An invalid key is a normal result (``valid=False``), not an exception.
    ``details`` may carry ``models`` (count), ``organization`` or
    ``availableModels`` depending on the provider.
    """

    valid: bool
    provider: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "valid": self.valid,
            "provider": self.provider,
            "message": self.message,
        }
        if self.details is not None:
            data["details"] = self.details
        return data


__all__ = ["ValidationResult"]
