"""OpenAI adapter.

Purpose:
    Talk to the OpenAI REST API (``/v1``) directly over ``httpx``: key
    validation and model listing via ``GET /models``, chat via
    ``POST /chat/completions``.

Authentication:
    ``Authorization: Bearer <key>`` on every request.

Model listing:
    Live. Only ids containing ``gpt`` or ``o1`` are kept; context windows come
    from the static table in :mod:`.helpers`.

Failure semantics:
    Inherited from ``BaseProviderAdapter``: non-2xx responses raise
    ``ProviderError`` carrying the upstream ``error.message`` / ``error.code``;
    401/403 during validation yield ``valid=False``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..base.adapter import BaseProviderAdapter
from ..base.models import ChatCompletionResult, ChatMessage, ModelFetchResult
from ..base.utils.usage import build_usage
from ..config.providers import ProviderName
from .helpers import descriptors_from_listing


class OpenAIAdapter(BaseProviderAdapter):
    """Adapter for OpenAI-style ``chat/completions`` endpoints."""

    provider_name = ProviderName.OPENAI.value

    def _headers(self) -> Dict[str, str]:
        headers = super()._headers()
        headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _probe_key(self) -> Optional[Dict[str, Any]]:
        response = await self._request("GET", "/models")
        payload = self._json(response)
        return {
            "models": len(payload.get("data") or []) if isinstance(payload, dict) else 0,
            "organization": response.headers.get("openai-organization") or "default",
        }

    async def fetch_models(self) -> ModelFetchResult:
        """List chat-capable models visible to this key."""
        response = await self._request("GET", "/models")
        payload = self._json(response)
        if not isinstance(payload, dict):
            self._malformed(payload, None, "model listing is not an object")
        return ModelFetchResult(provider=self.provider_name, models=descriptors_from_listing(payload))

    def _build_chat_request(
        self,
        model: str,
        messages: List[ChatMessage],
        temperature: float,
        max_tokens: Optional[int],
    ) -> Tuple[str, Dict[str, Any]]:
        body: Dict[str, Any] = {
            "model": model,
            "messages": [m.to_dict() for m in messages],
            "temperature": temperature,
            "stream": False,
        }
        if max_tokens is not None:
            body["max_tokens"] = max_tokens
        return "/chat/completions", body

    def normalize_response(self, raw: Any, model: Optional[str] = None) -> ChatCompletionResult:
        """Map ``choices[0].message`` and ``usage`` onto the canonical result."""
        choices = raw.get("choices") if isinstance(raw, dict) else None
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            self._malformed(raw, model, "response has no choices")
        first = choices[0]
        message = first.get("message") or {}
        if not isinstance(message, dict):
            self._malformed(raw, model, "choice message is not an object")
        content = message.get("content") or ""
        if not isinstance(content, str):
            self._malformed(raw, model, "message content is not text")
        usage = raw.get("usage")
        if not isinstance(usage, dict):
            usage = {}
        return ChatCompletionResult(
            provider=self.provider_name,
            model=raw.get("model") or model or "",
            message=ChatMessage(
                role=message.get("role") or "assistant",
                content=content,
            ),
            usage=build_usage(
                usage.get("prompt_tokens"),
                usage.get("completion_tokens"),
                usage.get("total_tokens"),
            ),
            finish_reason=first.get("finish_reason"),
        )


__all__ = ["OpenAIAdapter"]
