"""Gemini helpers: message conversion, model filtering and context windows."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from ..base.models import ChatMessage, ModelDescriptor
from ..config.defaults import GEMINI_DEFAULT_CONTEXT_WINDOW

CONTEXT_WINDOWS: Mapping[str, int] = MappingProxyType(
    {
        "gemini-2.0-flash-exp": 1000000,
        "gemini-1.5-pro": 2000000,
        "gemini-1.5-flash": 1000000,
        "gemini-1.0-pro": 32768,
    }
)

_ROLE_MAP = {"assistant": "model", "user": "user"}


def context_window_for(model_id: str) -> int:
    """Return the window of the first table key contained in ``model_id`` (default 32768)."""
    for key, window in CONTEXT_WINDOWS.items():
        if key in model_id:
            return window
    return GEMINI_DEFAULT_CONTEXT_WINDOW


def model_path(model: str) -> str:
    """Return the ``models/<id>`` resource path for ``model``."""
    return model if model.startswith("models/") else f"models/{model}"


def to_contents(messages: List[ChatMessage]) -> Tuple[List[Dict[str, Any]], int]:
    """Convert turns to Gemini ``contents``.

    System turns have no equivalent in this request shape and are dropped.
    Returns ``(contents, dropped_system_count)``.
    """
    contents: List[Dict[str, Any]] = []
    dropped = 0
    for m in messages:
        if m.role == "system":
            dropped += 1
            continue
        contents.append({"role": _ROLE_MAP.get(m.role, "user"), "parts": [{"text": m.content}]})
    return contents, dropped


def is_chat_model(entry: Dict[str, Any]) -> bool:
    name = entry.get("name") or ""
    methods = entry.get("supportedGenerationMethods") or []
    return "gemini" in name and "generateContent" in methods


def descriptors_from_listing(payload: Dict[str, Any]) -> List[ModelDescriptor]:
    """Build descriptors for generateContent-capable Gemini models."""
    out: List[ModelDescriptor] = []
    for entry in payload.get("models") or []:
        if not isinstance(entry, dict) or not is_chat_model(entry):
            continue
        model_id = entry["name"].replace("models/", "", 1)
        out.append(
            ModelDescriptor(
                id=model_id,
                name=entry.get("displayName") or model_id,
                description=entry.get("description") or f"Google {model_id}",
                context_window=context_window_for(model_id),
            )
        )
    return out


__all__ = [
    "CONTEXT_WINDOWS",
    "context_window_for",
    "model_path",
    "to_contents",
    "is_chat_model",
    "descriptors_from_listing",
]
