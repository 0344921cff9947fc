"""Small pure helpers shared by adapters."""

from .messages import coerce_messages, split_system
from .usage import as_count, build_usage

__all__ = ["coerce_messages", "split_system", "as_count", "build_usage"]
