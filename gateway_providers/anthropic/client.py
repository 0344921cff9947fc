"""Anthropic adapter.

Purpose:
    Talk to the Anthropic Messages API over ``httpx``.

Dialect differences from the chat-completions shape:
    - Auth via ``x-api-key`` plus a pinned ``anthropic-version`` header.
    - The first system message moves to the top-level ``system`` field and
      every system turn is removed from ``messages``.
    - ``max_tokens`` is mandatory (default 4096).
    - Text comes from the first ``text`` content block; usage from
      ``input_tokens`` / ``output_tokens``; finish reason from ``stop_reason``.

Model listing:
    Static catalog (:mod:`.catalog`); no network call.

Key validation:
    Minimal ``POST /messages`` (one output token, prompt "Hi") against
    ``claude-3-haiku-20240307``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..base.adapter import BaseProviderAdapter
from ..base.models import ChatCompletionResult, ChatMessage, ModelFetchResult
from ..base.utils.messages import split_system
from ..base.utils.usage import build_usage
from ..config.defaults import (
    ANTHROPIC_API_VERSION,
    ANTHROPIC_DEFAULT_MAX_TOKENS,
    ANTHROPIC_VALIDATION_MODEL,
    VALIDATION_MAX_TOKENS,
    VALIDATION_PROMPT,
)
from ..config.providers import ProviderName
from .catalog import ANTHROPIC_MODELS


class AnthropicAdapter(BaseProviderAdapter):
    """Adapter for the Anthropic Messages API."""

    provider_name = ProviderName.ANTHROPIC.value
    # Anthropic reports ``{"type": "error", "error": {"type": "...", "message": "..."}}``.
    error_code_keys = ("type", "code")

    def _headers(self) -> Dict[str, str]:
        headers = super()._headers()
        headers["x-api-key"] = self.api_key
        headers["anthropic-version"] = ANTHROPIC_API_VERSION
        return headers

    async def _probe_key(self) -> Optional[Dict[str, Any]]:
        await self._request(
            "POST",
            "/messages",
            json={
                "model": ANTHROPIC_VALIDATION_MODEL,
                "max_tokens": VALIDATION_MAX_TOKENS,
                "messages": [{"role": "user", "content": VALIDATION_PROMPT}],
            },
            model=ANTHROPIC_VALIDATION_MODEL,
        )
        return {"models": len(ANTHROPIC_MODELS)}

    async def fetch_models(self) -> ModelFetchResult:
        """Return the static catalog."""
        return ModelFetchResult(provider=self.provider_name, models=list(ANTHROPIC_MODELS))

    def _build_chat_request(
        self,
        model: str,
        messages: List[ChatMessage],
        temperature: float,
        max_tokens: Optional[int],
    ) -> Tuple[str, Dict[str, Any]]:
        system, conversation = split_system(messages)
        body: Dict[str, Any] = {
            "model": model,
            "max_tokens": max_tokens or ANTHROPIC_DEFAULT_MAX_TOKENS,
            "messages": [m.to_dict() for m in conversation],
            "temperature": temperature,
            "stream": False,
        }
        if system is not None:
            body["system"] = system
        return "/messages", body

    def normalize_response(self, raw: Any, model: Optional[str] = None) -> ChatCompletionResult:
        blocks = raw.get("content") if isinstance(raw, dict) else None
        if not isinstance(blocks, list) or not blocks:
            self._malformed(raw, model, "response has no content blocks")
        text_block = next(
            (b for b in blocks if isinstance(b, dict) and b.get("type", "text") == "text"),
            None,
        )
        if text_block is None:
            self._malformed(raw, model, "response has no text content block")
        text = text_block.get("text") or ""
        if not isinstance(text, str):
            self._malformed(raw, model, "text content block is not text")
        usage = raw.get("usage")
        if not isinstance(usage, dict):
            usage = {}
        return ChatCompletionResult(
            provider=self.provider_name,
            model=raw.get("model") or model or "",
            message=ChatMessage(role="assistant", content=text),
            usage=build_usage(usage.get("input_tokens"), usage.get("output_tokens")),
            finish_reason=raw.get("stop_reason"),
        )


__all__ = ["AnthropicAdapter"]
