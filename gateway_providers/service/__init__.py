"""HTTP service layer and request orchestrators."""

from .chat_completion import ChatCompletionService
from .model_fetching import ModelFetchingService
from .provider_validation import ProviderValidationService

__all__ = ["ChatCompletionService", "ModelFetchingService", "ProviderValidationService"]
