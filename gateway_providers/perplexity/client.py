"""Perplexity adapter.

Perplexity speaks the OpenAI chat-completions dialect (bearer auth, same
body and response shape), so chat and normalization are inherited from
:class:`OpenAIAdapter`. What differs:

- No listing endpoint: the Sonar catalog is static (:mod:`.catalog`).
- Key validation sends a minimal completion (``sonar``, one output token)
  and reports the catalog ids in ``details.availableModels``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..base.models import ModelFetchResult
from ..config.defaults import (
    PERPLEXITY_VALIDATION_MODEL,
    VALIDATION_MAX_TOKENS,
    VALIDATION_PROMPT,
)
from ..config.providers import ProviderName
from ..openai.client import OpenAIAdapter
from .catalog import PERPLEXITY_MODELS


class PerplexityAdapter(OpenAIAdapter):
    """Adapter for the Perplexity Sonar API."""

    provider_name = ProviderName.PERPLEXITY.value

    async def _probe_key(self) -> Optional[Dict[str, Any]]:
        await self._request(
            "POST",
            "/chat/completions",
            json={
                "model": PERPLEXITY_VALIDATION_MODEL,
                "messages": [{"role": "user", "content": VALIDATION_PROMPT}],
                "max_tokens": VALIDATION_MAX_TOKENS,
            },
            model=PERPLEXITY_VALIDATION_MODEL,
        )
        return {
            "models": len(PERPLEXITY_MODELS),
            "availableModels": [m.id for m in PERPLEXITY_MODELS],
        }

    async def fetch_models(self) -> ModelFetchResult:
        """Return the static Sonar catalog."""
        return ModelFetchResult(provider=self.provider_name, models=list(PERPLEXITY_MODELS))


__all__ = ["PerplexityAdapter"]
