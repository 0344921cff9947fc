"""API key validation orchestration.

Thin caller of ``validate_api_key`` with no retry. Every outcome is a
``ValidationResult``: an unsupported provider, a blank key and any upstream
``ProviderError`` all become ``valid=False`` with an explanatory message.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Type

from ..base.constants import API_KEY_REQUIRED_MESSAGE
from ..base.errors import ProviderError
from ..base.factory import ProviderFactory
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ValidationResult


class ProviderValidationService:
    """Validate caller-supplied upstream keys."""

    def __init__(
        self,
        *,
        factory: Type[ProviderFactory] = ProviderFactory,
        adapter_options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._factory = factory
        self._adapter_options = dict(adapter_options or {})
        self._logger = get_logger("gateway.validation")

    async def validate_provider(self, provider: str, api_key: str) -> ValidationResult:
        if not self._factory.is_provider_supported(provider):
            return ValidationResult(
                valid=False, provider=provider, message=self._factory.unsupported_message(provider)
            )
        if not isinstance(api_key, str) or not api_key.strip():
            return ValidationResult(valid=False, provider=provider, message=API_KEY_REQUIRED_MESSAGE)

        adapter = self._factory.create_adapter(provider, api_key, **self._adapter_options)
        try:
            return await adapter.validate_api_key()
        except ProviderError as exc:
            normalized_log_event(
                self._logger,
                "validate.error",
                LogContext(provider=adapter.provider_name, operation="validate"),
                phase="finalize",
                error_code=exc.code.value,
                status_code=exc.status_code,
            )
            return ValidationResult(
                valid=False,
                provider=adapter.provider_name,
                message=exc.message or "Validation failed",
                details=exc.details if isinstance(exc.details, dict) else None,
            )


__all__ = ["ProviderValidationService"]
