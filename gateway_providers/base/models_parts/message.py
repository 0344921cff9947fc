"""
Chat message DTO used across adapters.

Defines the immutable `ChatMessage` dataclass and the `Role` literal. Message
order is chronological and significant; adapters translate the sequence into
each upstream dialect without mutating it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Mapping, Union


# Message roles accepted by the gateway.
Role = Literal["system", "user", "assistant"]

VALID_ROLES = ("system", "user", "assistant")


@dataclass(frozen=True)
class ChatMessage:
    """A single chat turn.

    Attributes:
        role: The author role (``"system"``, ``"user"`` or ``"assistant"``).
        content: Plain text content of the turn.
    """

    role: Role
    content: str

    def to_dict(self) -> Dict[str, Any]:
        """Return the ``{"role", "content"}`` wire shape shared by most upstreams."""
        return {"role": self.role, "content": self.content}

    @classmethod
    def coerce(cls, value: Union["ChatMessage", Mapping[str, Any]]) -> "ChatMessage":
        """Build a message from a mapping, returning ``ChatMessage`` inputs as-is."""
        if isinstance(value, ChatMessage):
            return value
        return cls(role=value.get("role"), content=value.get("content"))  # type: ignore[arg-type]


__all__ = [
    "ChatMessage",
    "Role",
    "VALID_ROLES",
]
