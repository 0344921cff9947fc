"""gateway_providers package

Multi-provider AI chat gateway: one request/response contract in front of
OpenAI, Anthropic, Google (Gemini) and Perplexity.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`,
      :class:`InvalidRequestError`
    - Factory: :class:`ProviderFactory`, :func:`create_adapter`
    - DTOs: :class:`ChatMessage`, :class:`ChatCompletionRequest`,
      :class:`ChatCompletionResult`
    - Orchestrators: :class:`ChatCompletionService`,
      :class:`ProviderValidationService`, :class:`ModelFetchingService`
"""

from .base.errors import ErrorCode, InvalidRequestError, ProviderError
from .base.factory import ProviderFactory, UnknownProviderError, create_adapter
from .base.models import ChatCompletionRequest, ChatCompletionResult, ChatMessage
from .config import ProviderName
from .service.chat_completion import ChatCompletionService
from .service.model_fetching import ModelFetchingService
from .service.provider_validation import ProviderValidationService

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ErrorCode",
    "InvalidRequestError",
    "ProviderError",
    "ProviderFactory",
    "UnknownProviderError",
    "create_adapter",
    "ChatCompletionRequest",
    "ChatCompletionResult",
    "ChatMessage",
    "ProviderName",
    "ChatCompletionService",
    "ModelFetchingService",
    "ProviderValidationService",
]
