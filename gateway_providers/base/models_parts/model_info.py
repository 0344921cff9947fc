"""
Model listing DTOs.

`ModelDescriptor` is a single entry of a provider catalog, whether fetched
live or taken from a static versioned table. `ModelFetchResult` wraps the
list returned by a listing call together with its provider and count.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ModelPricing:
    """Per-million-token prices in USD."""

    input: Optional[float] = None
    output: Optional[float] = None

    def to_dict(self) -> Dict[str, float]:
        return {k: v for k, v in (("input", self.input), ("output", self.output)) if v is not None}


@dataclass(frozen=True)
class ModelDescriptor:
    """A single model listing entry.

    Attributes:
        id: Stable model identifier accepted by the upstream chat endpoint.
        name: Human-friendly display name.
        description: Optional short description.
        context_window: Optional maximum context size in tokens.
        pricing: Optional :class:`ModelPricing`.
    """

    id: str
    name: str
    description: Optional[str] = None
    context_window: Optional[int] = None
    pricing: Optional[ModelPricing] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a camelCase dictionary, omitting unknown optional fields."""
        data: Dict[str, Any] = {"id": self.id, "name": self.name}
        if self.description is not None:
            data["description"] = self.description
        if self.context_window is not None:
            data["contextWindow"] = self.context_window
        if self.pricing is not None:
            data["pricing"] = self.pricing.to_dict()
        return data


@dataclass
class ModelFetchResult:
    """Models available to a caller for one provider."""

    provider: str
    models: List[ModelDescriptor] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.models)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "models": [m.to_dict() for m in self.models],
            "count": self.count,
        }


__all__ = [
    "ModelPricing",
    "ModelDescriptor",
    "ModelFetchResult",
]
