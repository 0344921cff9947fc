"""Context-window strategies and message checks."""

from .strategy import (
    CONTEXT_STRATEGIES,
    ContextStrategy,
    apply_strategy,
    estimate_token_count,
    validate_messages,
)

__all__ = [
    "CONTEXT_STRATEGIES",
    "ContextStrategy",
    "apply_strategy",
    "estimate_token_count",
    "validate_messages",
]
