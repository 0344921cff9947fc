"""Google Gemini adapter (provider identity ``google``).

Purpose:
    Talk to the Generative Language API (``v1beta``) over ``httpx``.

Dialect differences:
    - The key travels as the ``key`` query parameter; no auth header.
    - Turns become ``contents`` with roles ``user`` / ``model``. System turns
      are dropped (a ``chat.system_dropped`` event records how many).
    - Sampling goes in ``generationConfig`` (``temperature``,
      ``maxOutputTokens``).
    - Usage comes from ``usageMetadata``; the resolved model is
      ``modelVersion`` when the upstream reports it.

Key validation:
    ``GET /models``. Besides 401/403, the API answers 400 for a malformed
    key, which also counts as ``valid=False``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..base.adapter import BaseProviderAdapter
from ..base.logging import LogContext, normalized_log_event
from ..base.models import ChatCompletionResult, ChatMessage, ModelFetchResult
from ..base.utils.usage import build_usage
from ..config.providers import ProviderName
from .helpers import descriptors_from_listing, model_path, to_contents


class GeminiAdapter(BaseProviderAdapter):
    """Adapter for Gemini ``generateContent``."""

    provider_name = ProviderName.GOOGLE.value
    # Google errors carry ``status`` (e.g. ``INVALID_ARGUMENT``) next to a numeric ``code``.
    error_code_keys = ("status", "code")
    invalid_key_statuses = (400, 401, 403)

    def _params(self) -> Dict[str, str]:
        return {"key": self.api_key}

    async def _list_models(self) -> Dict[str, Any]:
        response = await self._request("GET", "/models")
        payload = self._json(response)
        if not isinstance(payload, dict):
            self._malformed(payload, None, "model listing is not an object")
        return payload

    async def _probe_key(self) -> Optional[Dict[str, Any]]:
        payload = await self._list_models()
        gemini = [
            m for m in payload.get("models") or [] if isinstance(m, dict) and "gemini" in (m.get("name") or "")
        ]
        return {"models": len(gemini)}

    async def fetch_models(self) -> ModelFetchResult:
        payload = await self._list_models()
        return ModelFetchResult(provider=self.provider_name, models=descriptors_from_listing(payload))

    def _build_chat_request(
        self,
        model: str,
        messages: List[ChatMessage],
        temperature: float,
        max_tokens: Optional[int],
    ) -> Tuple[str, Dict[str, Any]]:
        contents, dropped = to_contents(messages)
        if dropped:
            normalized_log_event(
                self._logger,
                "chat.system_dropped",
                LogContext(provider=self.provider_name, model=model, operation="chat"),
                phase="prepare",
                dropped=dropped,
            )
        generation_config: Dict[str, Any] = {"temperature": temperature}
        if max_tokens is not None:
            generation_config["maxOutputTokens"] = max_tokens
        body = {"contents": contents, "generationConfig": generation_config}
        return f"/{model_path(model)}:generateContent", body

    def normalize_response(self, raw: Any, model: Optional[str] = None) -> ChatCompletionResult:
        candidates = raw.get("candidates") if isinstance(raw, dict) else None
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            self._malformed(raw, model, "response has no candidates")
        candidate = candidates[0]
        content = candidate.get("content") or {}
        if not isinstance(content, dict):
            self._malformed(raw, model, "candidate content is not an object")
        parts = content.get("parts") or []
        if not isinstance(parts, list):
            self._malformed(raw, model, "candidate parts is not a list")
        text = parts[0].get("text") if parts and isinstance(parts[0], dict) else None
        if text is not None and not isinstance(text, str):
            self._malformed(raw, model, "candidate text is not text")
        usage = raw.get("usageMetadata")
        if not isinstance(usage, dict):
            usage = {}
        return ChatCompletionResult(
            provider=self.provider_name,
            model=raw.get("modelVersion") or model or "",
            message=ChatMessage(role="assistant", content=text or ""),
            usage=build_usage(
                usage.get("promptTokenCount"),
                usage.get("candidatesTokenCount"),
                usage.get("totalTokenCount"),
            ),
            finish_reason=candidate.get("finishReason"),
        )


__all__ = ["GeminiAdapter"]
