"""
ChatCompletionResult DTO representing normalized upstream responses.

Whatever the upstream dialect, adapters reduce a completion to the first
choice's text, the canonical usage triple and the finish reason. ``to_dict``
produces the camelCase shape returned over HTTP.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .message import ChatMessage


@dataclass(frozen=True)
class Usage:
    """Token usage triple; counts are zero when the upstream omits them."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "promptTokens": self.prompt_tokens,
            "completionTokens": self.completion_tokens,
            "totalTokens": self.total_tokens,
        }


@dataclass
class ChatCompletionResult:
    """Provider-agnostic chat completion result.

    Attributes:
        provider: Provider identity that served the request.
        model: Model reported by the upstream, or the requested one.
        message: Assistant turn produced by the upstream.
        usage: Canonical :class:`Usage` triple.
        finish_reason: Upstream stop reason, passed through unmodified.
    """

    provider: str
    model: str
    message: ChatMessage
    usage: Usage = field(default_factory=Usage)
    finish_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase JSON shape used by the HTTP surface."""
        return {
            "provider": self.provider,
            "model": self.model,
            "message": self.message.to_dict(),
            "usage": self.usage.to_dict(),
            "finishReason": self.finish_reason,
        }


__all__ = [
    "Usage",
    "ChatCompletionResult",
]
