"""Context-window strategies: which slice of a conversation goes upstream.

All functions here are pure: they never mutate their input and perform no
I/O.

Strategies
----------
``minimal``
    First system message (if any) plus the most recent user message. With no
    user message the input is returned unchanged.
``recent``
    First system message (if any) plus the last ``recent_count`` non-system
    messages, in original order.
``full``
    The conversation as given.

An unrecognized strategy name behaves like ``minimal``.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, List, Literal, Mapping, Sequence, Union

from ...config.defaults import CHARS_PER_TOKEN, DEFAULT_RECENT_COUNT
from ..models import VALID_ROLES, ChatMessage

ContextStrategy = Literal["minimal", "recent", "full"]
CONTEXT_STRATEGIES = ("minimal", "recent", "full")

MessageLike = Union[ChatMessage, Mapping[str, Any]]


def _field(message: MessageLike, name: str) -> Any:
    if isinstance(message, Mapping):
        return message.get(name)
    return getattr(message, name, None)


def _first_system(messages: Sequence[MessageLike]) -> List[MessageLike]:
    for m in messages:
        if _field(m, "role") == "system":
            return [m]
    return []


def _minimal(messages: Sequence[MessageLike]) -> List[MessageLike]:
    last_user = next((m for m in reversed(messages) if _field(m, "role") == "user"), None)
    if last_user is None:
        return list(messages)
    return _first_system(messages) + [last_user]


def _recent(messages: Sequence[MessageLike], recent_count: int) -> List[MessageLike]:
    if recent_count <= 0:
        recent_count = DEFAULT_RECENT_COUNT
    tail = [m for m in messages if _field(m, "role") != "system"][-recent_count:]
    return _first_system(messages) + tail


def apply_strategy(
    messages: Iterable[MessageLike],
    strategy: str = "minimal",
    recent_count: int = DEFAULT_RECENT_COUNT,
) -> List[MessageLike]:
    """Return the subset of ``messages`` selected by ``strategy``.

    Parameters:
        messages: Chronological conversation (``ChatMessage`` or mappings).
        strategy: ``"minimal"``, ``"recent"`` or ``"full"``.
        recent_count: Window size for ``recent``; values ``<= 0`` use 10.

    Returns:
        A new list; the input sequence is not modified.
    """
    seq = list(messages)
    if strategy == "full":
        return seq
    if strategy == "recent":
        return _recent(seq, recent_count)
    return _minimal(seq)


def estimate_token_count(messages: Iterable[MessageLike]) -> int:
    """Approximate token count as ``ceil(total content characters / 4)``."""
    chars = sum(len(_field(m, "content") or "") for m in messages)
    return math.ceil(chars / CHARS_PER_TOKEN)


def validate_messages(messages: Any) -> bool:
    """Return True when ``messages`` is a non-empty sequence of well-formed turns.

    Each turn needs a role in ``{system, user, assistant}`` and non-empty
    string content.
    """
    if not isinstance(messages, (list, tuple)) or not messages:
        return False
    for m in messages:
        if not isinstance(m, (ChatMessage, Mapping)):
            return False
        content = _field(m, "content")
        if _field(m, "role") not in VALID_ROLES:
            return False
        if not isinstance(content, str) or not content:
            return False
    return True


__all__ = [
    "ContextStrategy",
    "CONTEXT_STRATEGIES",
    "apply_strategy",
    "estimate_token_count",
    "validate_messages",
]
