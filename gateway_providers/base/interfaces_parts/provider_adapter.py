"""ProviderAdapter Protocol (single-class module).

Defines the contract every upstream adapter fulfils.
"""

from __future__ import annotations

from typing import Any, List, NoReturn, Optional, Protocol, runtime_checkable

from ..models import ChatCompletionResult, ChatMessage, ModelFetchResult, ValidationResult


@runtime_checkable
class ProviderAdapter(Protocol):
    """Uniform interface over one upstream chat API.

    Implementations translate canonical requests into the upstream dialect,
    normalize responses into gateway DTOs and raise ``ProviderError`` for
    every upstream failure. An invalid key during ``validate_api_key`` is the
    only failure reported as a normal result.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identity."""
        ...

    async def validate_api_key(self) -> ValidationResult:
        ...

    async def fetch_models(self) -> ModelFetchResult:
        ...

    async def send_chat_completion(
        self,
        model: str,
        messages: List[ChatMessage],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        stream: bool = False,
    ) -> ChatCompletionResult:
        """Perform exactly one upstream call; retries belong to the caller."""
        ...

    def normalize_response(self, raw: Any, model: Optional[str] = None) -> ChatCompletionResult:
        ...

    def handle_error(self, exc: Exception, *, model: Optional[str] = None) -> NoReturn:
        ...
