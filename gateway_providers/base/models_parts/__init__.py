"""Model DTO parts (one class family per module)."""

from .message import ChatMessage, Role, VALID_ROLES
from .chat_request import ChatCompletionRequest
from .chat_result import ChatCompletionResult, Usage
from .model_info import ModelDescriptor, ModelFetchResult, ModelPricing
from .validation_result import ValidationResult

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
