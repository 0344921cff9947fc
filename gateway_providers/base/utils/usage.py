"""Token usage normalization helpers."""
from __future__ import annotations

import math
from typing import Any, Optional

from ..models import Usage


def as_count(value: Any) -> int:
    """Return ``value`` as a non-negative int, or 0 unless it is a finite number."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float) and math.isfinite(value):
        return max(int(value), 0)
    return 0


def build_usage(prompt: Any, completion: Any, total: Optional[Any] = None) -> Usage:
    """Build the canonical usage triple.

    ``total`` falls back to ``prompt + completion`` when the upstream omits it.
    """
    p = as_count(prompt)
    c = as_count(completion)
    t = as_count(total) if total is not None else p + c
    return Usage(prompt_tokens=p, completion_tokens=c, total_tokens=t)


__all__ = ["as_count", "build_usage"]
