"""Adapter interfaces facade.

Re-exports the structural protocols implemented by adapters so call sites
depend on a single stable import path.
"""
from __future__ import annotations

from .interfaces_parts import ProviderAdapter

__all__ = ["ProviderAdapter"]
