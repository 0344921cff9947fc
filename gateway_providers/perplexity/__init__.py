"""Perplexity adapter package."""

from .client import PerplexityAdapter

__all__ = ["PerplexityAdapter"]
