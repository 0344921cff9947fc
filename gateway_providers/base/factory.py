"""Provider Factory utilities.

Purpose
-------
Map a provider identity to a fresh adapter instance. The set of providers
is closed: it is read from the registry table in ``config.providers`` and
anything else raises :class:`UnknownProviderError` (there is no default
provider). Adapters are imported lazily with ``importlib`` so the factory
itself stays free of provider imports.

Timeout and fallback semantics
------------------------------
The factory performs no I/O, retries or fallbacks; it either returns an
instance or raises a clear error. ``transport`` and ``timeout`` keyword
arguments are forwarded to the adapter constructor.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Mapping, Tuple, Type

from ..config.providers import PROVIDER_ADAPTERS
from .constants import UNSUPPORTED_PROVIDER
from .errors import InvalidRequestError


class UnknownProviderError(InvalidRequestError):
    """Raised when a provider cannot be resolved or initialized.

    Failure modes include:
    - The provider name is not registered in the factory mapping.
    - The provider module cannot be imported or the adapter class is missing.
    - The adapter constructor rejected its arguments.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, code=UNSUPPORTED_PROVIDER, status_code=400)


def _normalize(provider: Any) -> str:
    value = getattr(provider, "value", provider)
    return str(value or "").lower().strip()


class ProviderFactory:
    """Create adapters based on a canonical provider name.

    Design notes
    ------------
    - Explicit mapping dispatch; names are matched case-insensitively.
    - Raises :class:`UnknownProviderError` with actionable messages for
      unknown providers, import failures, missing classes and constructor
      argument errors.
    """

    # Map canonical provider names to import paths and class names
    _PROVIDERS: Mapping[str, Mapping[str, str]] = PROVIDER_ADAPTERS

    @classmethod
    def create_adapter(cls, provider: Any, api_key: str, **kwargs: Any) -> Any:
        """Create an adapter instance.

        Parameters
        ----------
        provider:
            Provider identity (string or ``ProviderName``), case-insensitive.
        api_key:
            Upstream credential handed to the adapter.
        **kwargs:
            Optional adapter constructor arguments (``transport``,
            ``timeout``, ``base_url``, ``default_temperature``).

        Returns
        -------
        Any
            Instance implementing ``ProviderAdapter``.

        Raises
        ------
        UnknownProviderError
            If the provider is unknown, its module fails to import, its class
            is missing, or its constructor rejects the arguments.
        """
        name = _normalize(provider)
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(cls.unsupported_message(provider))

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{name}': {exc}"
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{name}'"
            ) from exc

        try:
            return klass(api_key, **kwargs)
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{name}' adapter constructor: {exc}"
            ) from exc

    # Shorter alias.
    create = create_adapter

    @classmethod
    def supported_providers(cls) -> Tuple[str, ...]:
        """Return the supported canonical provider names in deterministic order."""
        return tuple(cls._PROVIDERS.keys())

    @classmethod
    def is_provider_supported(cls, provider: Any) -> bool:
        """Return True if ``provider`` (case-insensitive) has an adapter."""
        return _normalize(provider) in cls._PROVIDERS

    @classmethod
    def unsupported_message(cls, provider: Any) -> str:
        return f"Unsupported provider: {provider}. Supported providers: {', '.join(cls.supported_providers())}"


def create_adapter(provider: Any, api_key: str, **kwargs: Any) -> Any:
    """Module-level helper delegating to :meth:`ProviderFactory.create_adapter`."""
    return ProviderFactory.create_adapter(provider, api_key, **kwargs)


__all__ = ["ProviderFactory", "UnknownProviderError", "create_adapter"]
