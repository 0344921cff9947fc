from __future__ import annotations

import logging
import os
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gateway_providers.base.errors import InvalidRequestError, ProviderError
from gateway_providers.base.logging import get_logger, log_event
from gateway_providers.config.defaults import GATEWAY_SERVICE_CORS_DEFAULT_ORIGINS

from .app_parts.app_core import (
    ChatCompletionBody,
    ProviderKeyBody,
    invalid_request_payload,
    provider_error_payload,
    server_error_payload,
    success_envelope,
    supported_providers_payload,
    validation_error_payload,
)
from .chat_completion import ChatCompletionService
from .model_fetching import ModelFetchingService
from .provider_validation import ProviderValidationService

# httpx logs full request URLs at INFO; some providers carry the key as a query param.
logging.getLogger("httpx").setLevel(logging.WARNING)

_logger = get_logger("gateway.service")


def create_app(**adapter_options: Any) -> FastAPI:
    """Build the gateway FastAPI application.

    ``adapter_options`` are forwarded to every adapter the services create
    (tests pass an ``httpx.MockTransport`` as ``transport``).
    """
    app = FastAPI(title="Gateway Provider Service", version="0.1.0")

    chat_service = ChatCompletionService(adapter_options=adapter_options)
    validation_service = ProviderValidationService(adapter_options=adapter_options)
    models_service = ModelFetchingService(adapter_options=adapter_options)

    # ---------------------------------------------------------------------------
    # CORS configuration
    # ---------------------------------------------------------------------------

    cors_origins_env = os.getenv("GATEWAY_SERVICE_CORS_ORIGINS", GATEWAY_SERVICE_CORS_DEFAULT_ORIGINS)
    allow_origins = [o.strip() for o in cors_origins_env.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------------------------------------------------------------------------
    # Error handlers
    # ---------------------------------------------------------------------------

    @app.exception_handler(RequestValidationError)
    async def _on_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content=validation_error_payload(exc.errors()))

    @app.exception_handler(InvalidRequestError)
    async def _on_invalid_request(request: Request, exc: InvalidRequestError) -> JSONResponse:
        status, body = invalid_request_payload(exc)
        return JSONResponse(status_code=status, content=body)

    @app.exception_handler(ProviderError)
    async def _on_provider_error(request: Request, exc: ProviderError) -> JSONResponse:
        status, body = provider_error_payload(exc)
        return JSONResponse(status_code=status, content=body)

    @app.exception_handler(Exception)
    async def _on_unexpected(request: Request, exc: Exception) -> JSONResponse:
        log_event(
            _logger,
            "service.error",
            level=logging.ERROR,
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        status, body = server_error_payload(exc)
        return JSONResponse(status_code=status, content=body)

    # ---------------------------------------------------------------------------
    # Health endpoint
    # ---------------------------------------------------------------------------

    @app.get("/api/health")
    async def health() -> Dict[str, Any]:
        """Check the health status of the service."""
        return {"ok": True}

    # ---------------------------------------------------------------------------
    # Provider endpoints
    # ---------------------------------------------------------------------------

    @app.get("/api/providers/supported")
    async def supported_providers() -> Dict[str, Any]:
        """List the provider names the gateway can route to."""
        return supported_providers_payload()

    @app.post("/api/providers/validate")
    async def validate_provider(body: ProviderKeyBody) -> Dict[str, Any]:
        """Check a caller's key against the provider.

        ``success`` mirrors ``data.valid``; a rejected key is still HTTP 200.
        """
        result = await validation_service.validate_provider(body.provider, body.api_key)
        return success_envelope(result.to_dict(), success=result.valid)

    @app.post("/api/providers/models")
    async def fetch_models(body: ProviderKeyBody) -> Dict[str, Any]:
        """List the models available to the caller's key."""
        result = await models_service.fetch_models(body.provider, body.api_key)
        return success_envelope(result.to_dict())

    # ---------------------------------------------------------------------------
    # Chat endpoint
    # ---------------------------------------------------------------------------

    @app.post("/api/chat/completions")
    async def chat_completions(body: ChatCompletionBody) -> Dict[str, Any]:
        result = await chat_service.send_completion(body.to_request())
        return success_envelope(result.to_dict())

    return app


app = create_app()


def get_app() -> FastAPI:
    """Return the module-level application instance."""
    return app


__all__ = ["app", "create_app", "get_app"]
