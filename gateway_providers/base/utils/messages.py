"""Message helpers shared across adapters.

Side-effect free utilities operating on provider-agnostic ``ChatMessage``
DTOs only.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from ..models import ChatMessage

MessageLike = Union[ChatMessage, Mapping[str, Any]]


def coerce_messages(messages: Iterable[MessageLike]) -> List[ChatMessage]:
    """Return ``messages`` as a list of ``ChatMessage`` (mappings are converted)."""
    return [ChatMessage.coerce(m) for m in messages]


def split_system(messages: Iterable[ChatMessage]) -> Tuple[Optional[str], List[ChatMessage]]:
    """Separate system turns from the conversation.

    Returns ``(first_system_content_or_None, non_system_messages)``. Only the
    first system message's content is kept; later system messages are
    dropped from both outputs. Relative order of the remaining turns is
    preserved.
    """
    system: Optional[str] = None
    rest: List[ChatMessage] = []
    for m in messages:
        if m.role == "system":
            if system is None:
                system = m.content
            continue
        rest.append(m)
    return system, rest


__all__ = ["MessageLike", "coerce_messages", "split_system"]
