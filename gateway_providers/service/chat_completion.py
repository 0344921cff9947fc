"""Chat completion orchestration.

Pipeline for one caller request:

1. Validate locally (provider, API key, model, messages). Failures raise
   ``InvalidRequestError`` and no upstream call is made.
2. Trim the conversation with the requested context strategy.
3. Resolve a fresh adapter through ``ProviderFactory``.
4. Call the adapter under the bounded retry policy (3 retries, fixed 1 s
   delay; statuses 400/401/403 are never retried). When retries run out
   the last ``ProviderError`` propagates unchanged.
5. Return the normalized ``ChatCompletionResult``.

Retry settings come from ``get_gateway_config()`` unless a ``RetryConfig``
is injected.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Any, Mapping, Optional, Type

from ..base.constants import (
    API_KEY_REQUIRED_MESSAGE,
    INVALID_MESSAGES,
    INVALID_MESSAGES_MESSAGE,
    MISSING_API_KEY,
    MISSING_MODEL,
    MODEL_REQUIRED_MESSAGE,
    UNSUPPORTED_PROVIDER,
)
from ..base.context import apply_strategy, estimate_token_count, validate_messages
from ..base.errors import InvalidRequestError, ProviderError
from ..base.factory import ProviderFactory
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ChatCompletionRequest, ChatCompletionResult
from ..base.resilience.retry import RetryConfig, call_with_retry
from ..base.utils.messages import coerce_messages
from ..config import get_gateway_config
from ..config.defaults import DEFAULT_CONTEXT_STRATEGY


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


class ChatCompletionService:
    """Validate, trim, dispatch and retry chat completion requests.

    Parameters
    ----------
    factory:
        Adapter factory (``ProviderFactory`` by default).
    retry_config:
        Optional fixed retry policy; otherwise built from gateway settings
        on every call.
    adapter_options:
        Extra keyword arguments forwarded to every adapter (``transport``,
        ``timeout``).
    """

    def __init__(
        self,
        *,
        factory: Type[ProviderFactory] = ProviderFactory,
        retry_config: Optional[RetryConfig] = None,
        adapter_options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._factory = factory
        self._retry_config = retry_config
        self._adapter_options = dict(adapter_options or {})
        self._logger = get_logger("gateway.chat")

    def validate_request(self, request: ChatCompletionRequest) -> None:
        """Raise ``InvalidRequestError`` for the first problem found, in field order."""
        if not self._factory.is_provider_supported(request.provider):
            raise InvalidRequestError(
                self._factory.unsupported_message(request.provider), code=UNSUPPORTED_PROVIDER
            )
        if _is_blank(request.api_key):
            raise InvalidRequestError(API_KEY_REQUIRED_MESSAGE, code=MISSING_API_KEY)
        if _is_blank(request.model):
            raise InvalidRequestError(MODEL_REQUIRED_MESSAGE, code=MISSING_MODEL)
        if not validate_messages(request.messages):
            raise InvalidRequestError(INVALID_MESSAGES_MESSAGE, code=INVALID_MESSAGES)

    def _build_retry_config(self, ctx: LogContext) -> RetryConfig:
        def _attempt_logger(*, attempt: int, max_attempts: int, delay, error: ProviderError | None) -> None:
            if error is None and attempt == 0:
                return
            normalized_log_event(
                self._logger,
                "retry.attempt",
                ctx,
                phase="retry",
                attempt=attempt,
                max_attempts=max_attempts,
                delay=delay,
                error_code=(error.code.value if error else None),
                status_code=(error.status_code if error else None),
                will_retry=bool(error and delay is not None),
            )

        if self._retry_config is not None:
            if self._retry_config.attempt_logger is not None:
                return self._retry_config
            return dataclasses.replace(self._retry_config, attempt_logger=_attempt_logger)
        return RetryConfig.from_settings(get_gateway_config(), attempt_logger=_attempt_logger)

    async def send_completion(self, request: ChatCompletionRequest) -> ChatCompletionResult:
        """Run the full pipeline for ``request`` and return the normalized result."""
        self.validate_request(request)
        strategy = request.context_strategy or DEFAULT_CONTEXT_STRATEGY
        filtered = apply_strategy(coerce_messages(request.messages), strategy)
        adapter = self._factory.create_adapter(request.provider, request.api_key, **self._adapter_options)

        ctx = LogContext(provider=adapter.provider_name, model=request.model, operation="chat")
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            context_strategy=strategy,
            message_count=len(request.messages),
            sent_count=len(filtered),
            estimated_tokens=estimate_token_count(filtered),
        )

        async def _attempt() -> ChatCompletionResult:
            return await adapter.send_chat_completion(
                request.model,
                filtered,
                temperature=request.temperature,
                max_tokens=request.max_tokens,
            )

        try:
            result = await call_with_retry(_attempt, self._build_retry_config(ctx))
        except ProviderError as exc:
            normalized_log_event(
                self._logger,
                "chat.error",
                ctx,
                phase="finalize",
                emitted=False,
                error_code=exc.code.value,
                level=logging.ERROR,
                status_code=exc.status_code,
                error=exc.message,
            )
            raise
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=True,
            tokens=result.usage,
            finish_reason=result.finish_reason,
        )
        return result


__all__ = ["ChatCompletionService"]
