"""Static Anthropic model catalog.

Anthropic exposes no listing endpoint usable for this purpose, so the
gateway ships a versioned table. Prices are USD per million tokens.
"""

from __future__ import annotations

from typing import Tuple

from ..base.models import ModelDescriptor, ModelPricing

CLAUDE_CONTEXT_WINDOW = 200000

ANTHROPIC_MODELS: Tuple[ModelDescriptor, ...] = (
    ModelDescriptor(
        id="claude-3-5-sonnet-20241022",
        name="Claude 3.5 Sonnet",
        description="Most intelligent model, best for complex tasks",
        context_window=CLAUDE_CONTEXT_WINDOW,
        pricing=ModelPricing(input=3.0, output=15.0),
    ),
    ModelDescriptor(
        id="claude-3-5-haiku-20241022",
        name="Claude 3.5 Haiku",
        description="Fastest model, best for quick responses",
        context_window=CLAUDE_CONTEXT_WINDOW,
        pricing=ModelPricing(input=0.8, output=4.0),
    ),
    ModelDescriptor(
        id="claude-3-opus-20240229",
        name="Claude 3 Opus",
        description="Previous generation flagship model",
        context_window=CLAUDE_CONTEXT_WINDOW,
        pricing=ModelPricing(input=15.0, output=75.0),
    ),
    ModelDescriptor(
        id="claude-3-sonnet-20240229",
        name="Claude 3 Sonnet",
        description="Balanced performance and speed",
        context_window=CLAUDE_CONTEXT_WINDOW,
        pricing=ModelPricing(input=3.0, output=15.0),
    ),
    ModelDescriptor(
        id="claude-3-haiku-20240307",
        name="Claude 3 Haiku",
        description="Fast and cost-effective",
        context_window=CLAUDE_CONTEXT_WINDOW,
        pricing=ModelPricing(input=0.25, output=1.25),
    ),
)

__all__ = ["ANTHROPIC_MODELS", "CLAUDE_CONTEXT_WINDOW"]
