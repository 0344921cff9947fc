"""Provider-agnostic DTOs for the gateway.

Facade over ``models_parts``: adapters, orchestrators and the HTTP layer
import data types from here. Dataclasses only; HTTP body validation lives in
the service layer.
"""
from __future__ import annotations

from .models_parts import (
    VALID_ROLES,
    ChatCompletionRequest,
    ChatCompletionResult,
    ChatMessage,
    ModelDescriptor,
    ModelFetchResult,
    ModelPricing,
    Role,
    Usage,
    ValidationResult,
)

__all__ = [
    "ChatMessage",
    "Role",
    "VALID_ROLES",
    "ChatCompletionRequest",
    "ChatCompletionResult",
    "Usage",
    "ModelDescriptor",
    "ModelFetchResult",
    "ModelPricing",
    "ValidationResult",
]
