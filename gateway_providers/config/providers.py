"""gateway_providers.config.providers
==================================

Single source of truth for which upstream providers exist.

Adding a provider means adding a ``ProviderName`` member plus one entry in
each table below and an adapter class; the factory and the HTTP validation
pick it up from here. Tables are read-only mappings.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ProviderName(str, Enum):
    """Canonical provider identities accepted by the gateway."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    PERPLEXITY = "perplexity"


PROVIDER_BASE_URLS: Mapping[str, str] = MappingProxyType(
    {
        ProviderName.OPENAI.value: "https://api.openai.com/v1",
        ProviderName.ANTHROPIC.value: "https://api.anthropic.com/v1",
        ProviderName.GOOGLE.value: "https://generativelanguage.googleapis.com/v1beta",
        ProviderName.PERPLEXITY.value: "https://api.perplexity.ai",
    }
)

PROVIDER_DISPLAY_NAMES: Mapping[str, str] = MappingProxyType(
    {
        ProviderName.OPENAI.value: "OpenAI",
        ProviderName.ANTHROPIC.value: "Anthropic",
        ProviderName.GOOGLE.value: "Google AI",
        ProviderName.PERPLEXITY.value: "Perplexity AI",
    }
)

# Import path and class name of each adapter, resolved lazily by the factory.
PROVIDER_ADAPTERS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        ProviderName.OPENAI.value: {"module": "gateway_providers.openai.client", "class": "OpenAIAdapter"},
        ProviderName.ANTHROPIC.value: {"module": "gateway_providers.anthropic.client", "class": "AnthropicAdapter"},
        ProviderName.GOOGLE.value: {"module": "gateway_providers.gemini.client", "class": "GeminiAdapter"},
        ProviderName.PERPLEXITY.value: {"module": "gateway_providers.perplexity.client", "class": "PerplexityAdapter"},
    }
)


__all__ = [
    "ProviderName",
    "PROVIDER_BASE_URLS",
    "PROVIDER_DISPLAY_NAMES",
    "PROVIDER_ADAPTERS",
]
