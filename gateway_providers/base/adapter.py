"""Shared adapter skeleton for upstream chat APIs.

Purpose
-------
``BaseProviderAdapter`` owns everything the upstream dialects have in
common so concrete adapters only describe what differs:

- endpoint resolution through ``get_provider_config``;
- one ``httpx.AsyncClient`` per call (``build_async_client``), bounded by the
  per-attempt timeout from ``get_timeout_config``;
- upstream failure translation in :meth:`handle_error`;
- the key-validation flow (probe, then map 401/403 to ``valid=False``);
- the chat flow (reject streaming, build body, one call, normalize).

Concrete adapters implement ``_probe_key``, ``_build_chat_request``,
``normalize_response`` and ``fetch_models``.

Retries
-------
None here. An adapter call performs exactly one upstream request; the chat
orchestrator decides whether to repeat it.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, NoReturn, Optional, Tuple

import httpx

from ..config import get_gateway_config, get_provider_config
from .constants import (
    INVALID_API_KEY_MESSAGE,
    STREAMING_UNSUPPORTED_MESSAGE,
    UNKNOWN_UPSTREAM_ERROR,
    VALID_API_KEY_MESSAGE,
)
from .errors import ErrorCode, ProviderError, classify_exception, code_for_status
from .http import build_async_client
from .http.client import TimeoutLike
from .logging import LogContext, get_logger, normalized_log_event
from .models import ChatCompletionResult, ChatMessage, ModelFetchResult, ValidationResult
from .utils.messages import MessageLike, coerce_messages


def _response_payload(response: httpx.Response) -> Any:
    """Return the decoded JSON body, the raw text, or ``None`` when empty."""
    try:
        return response.json()
    except ValueError:
        return response.text or None


class BaseProviderAdapter(ABC):
    """Common behavior for all upstream adapters.

    Parameters
    ----------
    api_key:
        Caller-supplied upstream credential. Held for the adapter's lifetime
        only and never logged.
    base_url:
        Optional endpoint override; defaults to the configured base URL.
    timeout:
        Optional per-attempt timeout (seconds or ``httpx.Timeout``).
    transport:
        Optional ``httpx`` async transport (tests, proxies).
    default_temperature:
        Temperature used when a request omits one; defaults to the gateway
        setting (0.7).
    """

    provider_name: str = ""
    # Keys inside the upstream ``error`` object holding its error code, in order.
    error_code_keys: Tuple[str, ...] = ("code",)
    # Statuses meaning "this key is not valid" during validation.
    invalid_key_statuses: Tuple[int, ...] = (401, 403)

    def __init__(
        self,
        api_key: str,
        *,
        base_url: Optional[str] = None,
        timeout: TimeoutLike = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        default_temperature: Optional[float] = None,
    ) -> None:
        cfg = get_provider_config(self.provider_name, overrides={"base_url": base_url})
        self.api_key = api_key
        self.base_url = str(cfg.get("base_url") or "").rstrip("/")
        self.display_name = str(cfg.get("display_name") or self.provider_name)
        if default_temperature is None:
            default_temperature = get_gateway_config()["default_temperature"]
        self.default_temperature = float(default_temperature)
        self._timeout = timeout
        self._transport = transport
        self._logger = get_logger(f"gateway.{self.provider_name}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider={self.provider_name!r}, base_url={self.base_url!r}, api_key='***')"

    # ---- upstream dialect hooks ----
    def _headers(self) -> Dict[str, str]:
        """Default headers for every request (authentication lives here)."""
        return {"Content-Type": "application/json"}

    def _params(self) -> Dict[str, str]:
        """Default query parameters for every request."""
        return {}

    @abstractmethod
    async def _probe_key(self) -> Optional[Dict[str, Any]]:
        """Make the cheapest authenticated call; return validation details."""

    @abstractmethod
    def _build_chat_request(
        self,
        model: str,
        messages: List[ChatMessage],
        temperature: float,
        max_tokens: Optional[int],
    ) -> Tuple[str, Dict[str, Any]]:
        """Return ``(path, json_body)`` for one chat completion call."""

    @abstractmethod
    def normalize_response(self, raw: Any, model: Optional[str] = None) -> ChatCompletionResult:
        """Convert an upstream payload into a :class:`ChatCompletionResult`."""

    @abstractmethod
    async def fetch_models(self) -> ModelFetchResult:
        """Return the chat-capable models available to this key."""

    # ---- transport ----
    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        model: Optional[str] = None,
    ) -> httpx.Response:
        """Perform one upstream request; non-2xx and transport errors go to ``handle_error``."""
        query = {**self._params(), **(params or {})}
        try:
            async with build_async_client(
                self.base_url,
                headers=self._headers(),
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, json=json, params=query or None)
                response.raise_for_status()
                return response
        except httpx.HTTPError as exc:
            self.handle_error(exc, model=model)

    def _json(self, response: httpx.Response, model: Optional[str] = None) -> Any:
        try:
            return response.json()
        except ValueError:
            self._malformed(response.text, model, "body is not valid JSON")

    # ---- errors ----
    def _error_fields(self, payload: Any) -> Tuple[Optional[str], Optional[str]]:
        """Extract ``(message, upstream_code)`` from an upstream error body."""
        if not isinstance(payload, dict):
            return None, None
        error = payload.get("error")
        if isinstance(error, str):
            return error, None
        if not isinstance(error, dict):
            message = payload.get("message")
            return (message if isinstance(message, str) else None), None
        message = error.get("message")
        upstream_code = next(
            (str(error[k]) for k in self.error_code_keys if error.get(k) not in (None, "")),
            None,
        )
        return (message if isinstance(message, str) else None), upstream_code

    def handle_error(self, exc: Exception, *, model: Optional[str] = None) -> NoReturn:
        """Translate any failure into a :class:`ProviderError` and raise it.

        HTTP errors keep the upstream status, message, code and raw payload.
        Transport errors (timeouts, resets) keep status 500 and are classified
        as ``timeout`` or ``transient``.
        """
        if isinstance(exc, ProviderError):
            raise exc
        if isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            payload = _response_payload(exc.response)
            message, upstream_code = self._error_fields(payload)
            error = ProviderError(
                code=code_for_status(status),
                message=message or f"Request failed with status code {status}",
                provider=self.provider_name,
                status_code=status,
                upstream_code=upstream_code,
                details=payload,
                model=model,
            )
        else:
            error = ProviderError(
                code=classify_exception(exc),
                message=str(exc) or UNKNOWN_UPSTREAM_ERROR,
                provider=self.provider_name,
                status_code=500,
                model=model,
            )
        normalized_log_event(
            self._logger,
            "upstream.error",
            LogContext(provider=self.provider_name, model=model),
            phase="request",
            error_code=error.code.value,
            level=logging.WARNING,
            status_code=error.status_code,
            upstream_code=error.upstream_code,
        )
        raise error from exc

    def _reject_stream(self, model: str) -> NoReturn:
        raise ProviderError(
            code=ErrorCode.UNSUPPORTED,
            message=STREAMING_UNSUPPORTED_MESSAGE,
            provider=self.provider_name,
            status_code=400,
            model=model,
        )

    def _malformed(self, raw: Any, model: Optional[str], reason: str) -> NoReturn:
        raise ProviderError(
            code=ErrorCode.SERVER_ERROR,
            message=f"Malformed response from {self.display_name}: {reason}",
            provider=self.provider_name,
            status_code=502,
            details=raw,
            model=model,
        )

    # ---- public operations ----
    async def validate_api_key(self) -> ValidationResult:
        """Check the key with the cheapest authenticated upstream call.

        A rejected key is a normal ``valid=False`` result; every other
        failure raises :class:`ProviderError`.
        """
        ctx = LogContext(provider=self.provider_name, operation="validate")
        normalized_log_event(self._logger, "validate.start", ctx, phase="start")
        try:
            details = await self._probe_key()
        except ProviderError as exc:
            if exc.status_code not in self.invalid_key_statuses:
                raise
            normalized_log_event(
                self._logger, "validate.end", ctx, phase="finalize", valid=False, status_code=exc.status_code
            )
            return ValidationResult(valid=False, provider=self.provider_name, message=INVALID_API_KEY_MESSAGE)
        normalized_log_event(self._logger, "validate.end", ctx, phase="finalize", valid=True)
        return ValidationResult(
            valid=True,
            provider=self.provider_name,
            message=VALID_API_KEY_MESSAGE,
            details=details,
        )

    async def send_chat_completion(
        self,
        model: str,
        messages: Iterable[MessageLike],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        stream: bool = False,
    ) -> ChatCompletionResult:
        """Send one chat completion request and return the normalized result.

        ``temperature`` defaults to the adapter's default (0.7). ``stream=True``
        is rejected with an ``unsupported`` ProviderError (status 400).
        """
        if stream:
            self._reject_stream(model)
        turns = coerce_messages(messages)
        ctx = LogContext(provider=self.provider_name, model=model, operation="chat")
        normalized_log_event(
            self._logger,
            "chat.request",
            ctx,
            phase="start",
            message_count=len(turns),
            max_tokens=max_tokens,
            temperature=temperature,
        )
        resolved_temperature = self.default_temperature if temperature is None else temperature
        path, body = self._build_chat_request(model, turns, resolved_temperature, max_tokens)
        response = await self._request("POST", path, json=body, model=model)
        result = self.normalize_response(self._json(response, model), model)
        normalized_log_event(
            self._logger,
            "chat.response",
            ctx,
            phase="finalize",
            emitted=True,
            tokens=result.usage,
            finish_reason=result.finish_reason,
        )
        return result


__all__ = ["BaseProviderAdapter"]
