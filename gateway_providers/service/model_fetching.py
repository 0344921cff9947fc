"""Model listing orchestration.

Thin caller of ``fetch_models`` with no retry. Bad input raises
``InvalidRequestError``; upstream ``ProviderError`` propagates unchanged so
the HTTP layer can report the upstream status.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Type

from ..base.constants import API_KEY_REQUIRED_MESSAGE, MISSING_API_KEY, UNSUPPORTED_PROVIDER
from ..base.errors import InvalidRequestError
from ..base.factory import ProviderFactory
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ModelFetchResult


class ModelFetchingService:
    """List the models a caller's key can use."""

    def __init__(
        self,
        *,
        factory: Type[ProviderFactory] = ProviderFactory,
        adapter_options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._factory = factory
        self._adapter_options = dict(adapter_options or {})
        self._logger = get_logger("gateway.models")

    async def fetch_models(self, provider: str, api_key: str) -> ModelFetchResult:
        if not self._factory.is_provider_supported(provider):
            raise InvalidRequestError(self._factory.unsupported_message(provider), code=UNSUPPORTED_PROVIDER)
        if not isinstance(api_key, str) or not api_key.strip():
            raise InvalidRequestError(API_KEY_REQUIRED_MESSAGE, code=MISSING_API_KEY)

        adapter = self._factory.create_adapter(provider, api_key, **self._adapter_options)
        result = await adapter.fetch_models()
        normalized_log_event(
            self._logger,
            "models.fetched",
            LogContext(provider=adapter.provider_name, operation="models"),
            phase="finalize",
            count=result.count,
        )
        return result


__all__ = ["ModelFetchingService"]
