"""HTTP surface: envelopes, status mapping and request validation."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from gateway_providers.service.app import create_app
from gateway_providers.service.chat_completion import ChatCompletionService

_OK = {
    "model": "gpt-4o",
    "choices": [{"message": {"role": "assistant", "content": "pong"}, "finish_reason": "stop"}],
    "usage": {"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 4},
}


def _client(upstream, **kw) -> TestClient:
    return TestClient(create_app(transport=upstream.transport), **kw)


def _chat_body(**overrides):
    body = {
        "provider": "openai",
        "apiKey": "sk-test",
        "model": "gpt-4o",
        "messages": [{"role": "user", "content": "ping"}],
    }
    body.update(overrides)
    return body


def test_health_and_supported(fake_upstream):
    client = _client(fake_upstream())
    assert client.get("/api/health").json() == {"ok": True}  # nosec B101 - asserts are fine in tests
    resp = client.get("/api/providers/supported")
    assert resp.status_code == 200  # nosec B101 - asserts are fine in tests
    assert resp.json() == {  # nosec B101 - asserts are fine in tests
        "success": True,
        "data": {"providers": ["openai", "anthropic", "google", "perplexity"], "count": 4},
    }


def test_validate_endpoint_success_mirrors_validity(fake_upstream):
    upstream = fake_upstream((401, {"error": {"message": "bad"}}))
    resp = _client(upstream).post("/api/providers/validate", json={"provider": "openai", "apiKey": "sk-bad"})
    assert resp.status_code == 200  # nosec B101 - asserts are fine in tests
    assert resp.json() == {  # nosec B101 - asserts are fine in tests
        "success": False,
        "data": {"valid": False, "provider": "openai", "message": "Invalid API key"},
    }


def test_validate_endpoint_valid_key(fake_upstream):
    upstream = fake_upstream((200, {"data": []}))
    resp = _client(upstream).post("/api/providers/validate", json={"provider": "OpenAI", "apiKey": "sk"})
    payload = resp.json()
    assert payload["success"] is True  # nosec B101 - asserts are fine in tests
    assert payload["data"]["details"] == {"models": 0, "organization": "default"}  # nosec B101 - asserts are fine in tests


def test_models_endpoint(fake_upstream):
    resp = _client(fake_upstream()).post(
        "/api/providers/models", json={"provider": "perplexity", "apiKey": "pplx"}
    )
    payload = resp.json()
    assert payload["success"] is True  # nosec B101 - asserts are fine in tests
    assert payload["data"]["provider"] == "perplexity"  # nosec B101 - asserts are fine in tests
    assert payload["data"]["count"] == 4  # nosec B101 - asserts are fine in tests
    assert payload["data"]["models"][0] == {  # nosec B101 - asserts are fine in tests
        "id": "sonar",
        "name": "Sonar",
        "description": "Lightweight search model for quick queries",
        "contextWindow": 127072,
    }


def test_models_endpoint_upstream_status_is_forwarded(fake_upstream):
    upstream = fake_upstream((401, {"error": {"message": "Incorrect API key", "code": "invalid_api_key"}}))
    resp = _client(upstream).post("/api/providers/models", json={"provider": "openai", "apiKey": "sk-bad"})
    assert resp.status_code == 401  # nosec B101 - asserts are fine in tests
    assert resp.json() == {  # nosec B101 - asserts are fine in tests
        "success": False,
        "error": {"message": "Incorrect API key", "code": "invalid_api_key", "statusCode": 401},
    }


def test_chat_endpoint_success(fake_upstream):
    upstream = fake_upstream((200, _OK))
    resp = _client(upstream).post("/api/chat/completions", json=_chat_body(maxTokens=20, temperature=0.1))
    assert resp.status_code == 200  # nosec B101 - asserts are fine in tests
    assert resp.json() == {  # nosec B101 - asserts are fine in tests
        "success": True,
        "data": {
            "provider": "openai",
            "model": "gpt-4o",
            "message": {"role": "assistant", "content": "pong"},
            "usage": {"promptTokens": 3, "completionTokens": 1, "totalTokens": 4},
            "finishReason": "stop",
        },
    }
    assert upstream.body()["max_tokens"] == 20  # nosec B101 - asserts are fine in tests
    assert upstream.body()["temperature"] == 0.1  # nosec B101 - asserts are fine in tests


def test_chat_endpoint_retries_then_reports_upstream_error(fake_upstream, no_sleep):
    upstream = fake_upstream((503, {"error": {"message": "Service Unavailable"}}))
    resp = _client(upstream).post("/api/chat/completions", json=_chat_body())
    assert resp.status_code == 503  # nosec B101 - asserts are fine in tests
    assert resp.json()["error"] == {  # nosec B101 - asserts are fine in tests
        "message": "Service Unavailable",
        "code": "unavailable",
        "statusCode": 503,
    }
    assert upstream.calls == 4  # nosec B101 - asserts are fine in tests


def test_transport_failure_maps_to_500(fake_upstream, no_sleep):
    import httpx

    upstream = fake_upstream(httpx.ConnectError("connection refused"))
    resp = _client(upstream).post("/api/chat/completions", json=_chat_body())
    assert resp.status_code == 500  # nosec B101 - asserts are fine in tests
    assert resp.json()["error"]["code"] == "transient"  # nosec B101 - asserts are fine in tests


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"provider": "mistral"}, "provider"),
        ({"apiKey": "   "}, "apiKey"),
        ({"model": ""}, "model"),
        ({"messages": []}, "messages"),
        ({"messages": [{"role": "tool", "content": "x"}]}, "messages.0.role"),
        ({"messages": [{"role": "user", "content": ""}]}, "messages.0.content"),
        ({"contextStrategy": "everything"}, "contextStrategy"),
        ({"temperature": 2.5}, "temperature"),
        ({"maxTokens": 0}, "maxTokens"),
    ],
)
def test_chat_body_validation_envelope(fake_upstream, overrides, field):
    upstream = fake_upstream((200, _OK))
    resp = _client(upstream).post("/api/chat/completions", json=_chat_body(**overrides))
    assert resp.status_code == 422  # nosec B101 - asserts are fine in tests
    error = resp.json()["error"]
    assert resp.json()["success"] is False  # nosec B101 - asserts are fine in tests
    assert error["code"] == "VALIDATION_ERROR"  # nosec B101 - asserts are fine in tests
    assert error["statusCode"] == 422  # nosec B101 - asserts are fine in tests
    assert error["message"] == "Request validation failed"  # nosec B101 - asserts are fine in tests
    assert field in [d["field"] for d in error["details"]]  # nosec B101 - asserts are fine in tests
    assert upstream.calls == 0  # nosec B101 - asserts are fine in tests


def test_missing_fields_are_validation_errors(fake_upstream):
    resp = _client(fake_upstream()).post("/api/providers/validate", json={"provider": "openai"})
    assert resp.status_code == 422  # nosec B101 - asserts are fine in tests
    assert [d["field"] for d in resp.json()["error"]["details"]] == ["apiKey"]  # nosec B101 - asserts are fine in tests


def test_unexpected_errors_use_server_error_envelope(fake_upstream, monkeypatch):
    async def _boom(self, request):
        raise RuntimeError("internal detail")

    monkeypatch.setattr(ChatCompletionService, "send_completion", _boom)
    resp = _client(fake_upstream(), raise_server_exceptions=False).post(
        "/api/chat/completions", json=_chat_body()
    )
    assert resp.status_code == 500  # nosec B101 - asserts are fine in tests
    assert resp.json() == {  # nosec B101 - asserts are fine in tests
        "success": False,
        "error": {"message": "Internal server error", "code": "SERVER_ERROR", "statusCode": 500},
    }
