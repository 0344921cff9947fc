"""OpenAI helpers: model filtering and context-window lookup.

Pure functions over static tables; no I/O.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Mapping

from ..base.models import ModelDescriptor
from ..config.defaults import OPENAI_DEFAULT_CONTEXT_WINDOW

CONTEXT_WINDOWS: Mapping[str, int] = MappingProxyType(
    {
        "gpt-4o": 128000,
        "gpt-4o-mini": 128000,
        "gpt-4-turbo": 128000,
        "gpt-4": 8192,
        "gpt-3.5-turbo": 16385,
        "o1-preview": 128000,
        "o1-mini": 128000,
    }
)

# Substrings identifying chat-capable model ids in the listing.
CHAT_MODEL_MARKERS = ("gpt", "o1")


def context_window_for(model_id: str) -> int:
    """Return the context window of the longest table prefix matching ``model_id``.

    ``gpt-4o-mini-2024-07-18`` resolves through ``gpt-4o-mini`` rather than
    ``gpt-4``; unknown ids fall back to 8192.
    """
    matches = [prefix for prefix in CONTEXT_WINDOWS if model_id.startswith(prefix)]
    if not matches:
        return OPENAI_DEFAULT_CONTEXT_WINDOW
    return CONTEXT_WINDOWS[max(matches, key=len)]


def is_chat_model(model_id: str) -> bool:
    return any(marker in model_id for marker in CHAT_MODEL_MARKERS)


def descriptors_from_listing(payload: Dict[str, Any]) -> List[ModelDescriptor]:
    """Build descriptors for chat models in a ``GET /models`` payload, keeping listing order."""
    entries = payload.get("data") or []
    out: List[ModelDescriptor] = []
    for entry in entries:
        model_id = entry.get("id") if isinstance(entry, dict) else None
        if not isinstance(model_id, str) or not is_chat_model(model_id):
            continue
        out.append(
            ModelDescriptor(
                id=model_id,
                name=model_id,
                description=f"OpenAI {model_id}",
                context_window=context_window_for(model_id),
            )
        )
    return out


__all__ = [
    "CONTEXT_WINDOWS",
    "CHAT_MODEL_MARKERS",
    "context_window_for",
    "is_chat_model",
    "descriptors_from_listing",
]
