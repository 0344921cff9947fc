"""
ChatCompletionRequest DTO: a single caller request to the gateway.

The request carries the caller's upstream API key. It exists only for the
duration of one call, is never stored, and masks the key in its ``repr`` so
it can be logged or shown in tracebacks safely.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .message import ChatMessage


@dataclass
class ChatCompletionRequest:
    """Provider-agnostic chat completion request.

    Attributes:
        provider: Provider identity (case-insensitive).
        api_key: Upstream credential supplied by the caller.
        model: Upstream model identifier.
        messages: Chronological conversation.
        context_strategy: ``"minimal"``, ``"recent"`` or ``"full"``.
        temperature: Optional sampling temperature in ``[0, 2]``.
        max_tokens: Optional positive output cap.
    """

    provider: str
    api_key: str
    model: str
    messages: List[ChatMessage] = field(default_factory=list)
    context_strategy: str = "minimal"
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None

    def __repr__(self) -> str:
        return (
            f"ChatCompletionRequest(provider={self.provider!r}, api_key='***', model={self.model!r}, "
            f"messages=<{len(self.messages)} messages>, context_strategy={self.context_strategy!r}, "
            f"temperature={self.temperature!r}, max_tokens={self.max_tokens!r})"
        )


__all__ = [
    "ChatCompletionRequest",
]
