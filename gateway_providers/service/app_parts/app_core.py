from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gateway_providers.base.constants import SERVER_ERROR, VALIDATION_ERROR
from gateway_providers.base.errors import InvalidRequestError, ProviderError
from gateway_providers.base.factory import ProviderFactory
from gateway_providers.base.models import ChatCompletionRequest, ChatMessage


class ProviderKeyBody(BaseModel):
    """Request body naming a provider and the caller's upstream key.

    Shared by the validate and models endpoints. ``provider`` is normalized
    to its lowercase canonical name and must be one of the supported
    providers; ``apiKey`` must not be blank.
    """

    model_config = ConfigDict(populate_by_name=True)

    provider: str
    api_key: str = Field(alias="apiKey")

    @field_validator("provider")
    @classmethod
    def _known_provider(cls, value: str) -> str:
        name = value.strip().lower()
        if not ProviderFactory.is_provider_supported(name):
            raise ValueError(ProviderFactory.unsupported_message(value))
        return name

    @field_validator("api_key")
    @classmethod
    def _non_blank_key(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("API key is required")
        return value


class MessageBody(BaseModel):
    """Single conversation turn as sent by callers."""

    role: Literal["system", "user", "assistant"]
    content: str = Field(min_length=1)


class ChatCompletionBody(ProviderKeyBody):
    """Request body for ``POST /api/chat/completions``."""

    model: str = Field(min_length=1)
    messages: List[MessageBody] = Field(min_length=1)
    context_strategy: Literal["minimal", "recent", "full"] = Field(
        default="minimal", alias="contextStrategy"
    )
    temperature: Optional[float] = Field(default=None, ge=0, le=2)
    max_tokens: Optional[int] = Field(default=None, ge=1, alias="maxTokens")

    @field_validator("model")
    @classmethod
    def _non_blank_model(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Model is required")
        return value

    def to_request(self) -> ChatCompletionRequest:
        return ChatCompletionRequest(
            provider=self.provider,
            api_key=self.api_key,
            model=self.model,
            messages=[ChatMessage(role=m.role, content=m.content) for m in self.messages],
            context_strategy=self.context_strategy,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )


# ---------------------------------------------------------------------------
# Response envelopes
# ---------------------------------------------------------------------------


def success_envelope(data: Any, *, success: bool = True) -> Dict[str, Any]:
    return {"success": success, "data": data}


def error_envelope(error: Dict[str, Any]) -> Dict[str, Any]:
    return {"success": False, "error": error}


def _clamp_status(status: Any) -> int:
    """Keep error responses within the client/server error range."""
    try:
        value = int(status)
    except (TypeError, ValueError):
        return 500
    return value if 400 <= value <= 599 else 500


def validation_error_payload(errors: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    """Translate pydantic error entries into the 422 envelope."""
    details = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        details.append({"field": ".".join(loc), "message": err.get("msg", "")})
    return error_envelope(
        {
            "code": VALIDATION_ERROR,
            "message": "Request validation failed",
            "statusCode": 422,
            "details": details,
        }
    )


def invalid_request_payload(exc: InvalidRequestError) -> tuple[int, Dict[str, Any]]:
    status = _clamp_status(exc.status_code)
    body = exc.to_dict()
    body["statusCode"] = status
    return status, error_envelope(body)


def provider_error_payload(exc: ProviderError) -> tuple[int, Dict[str, Any]]:
    status = _clamp_status(exc.status_code)
    body = exc.to_dict()
    body["statusCode"] = status
    return status, error_envelope(body)


def server_error_payload(exc: Exception) -> tuple[int, Dict[str, Any]]:
    # Internal details stay in the logs.
    return 500, error_envelope(
        {"message": "Internal server error", "code": SERVER_ERROR, "statusCode": 500}
    )


def supported_providers_payload() -> Dict[str, Any]:
    providers = list(ProviderFactory.supported_providers())
    return success_envelope({"providers": providers, "count": len(providers)})
