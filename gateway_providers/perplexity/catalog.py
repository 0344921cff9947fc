"""Static Perplexity Sonar catalog (no listing endpoint upstream)."""

from __future__ import annotations

from typing import Tuple

from ..base.models import ModelDescriptor

SONAR_CONTEXT_WINDOW = 127072

PERPLEXITY_MODELS: Tuple[ModelDescriptor, ...] = (
    ModelDescriptor(
        id="sonar",
        name="Sonar",
        description="Lightweight search model for quick queries",
        context_window=SONAR_CONTEXT_WINDOW,
    ),
    ModelDescriptor(
        id="sonar-pro",
        name="Sonar Pro",
        description="Advanced search model with enhanced capabilities",
        context_window=SONAR_CONTEXT_WINDOW,
    ),
    ModelDescriptor(
        id="sonar-deep-research",
        name="Sonar Deep Research",
        description="Exhaustive research model for comprehensive analysis",
        context_window=SONAR_CONTEXT_WINDOW,
    ),
    ModelDescriptor(
        id="sonar-reasoning-pro",
        name="Sonar Reasoning Pro",
        description="Premier reasoning model for complex problem-solving",
        context_window=SONAR_CONTEXT_WINDOW,
    ),
)

__all__ = ["PERPLEXITY_MODELS", "SONAR_CONTEXT_WINDOW"]
