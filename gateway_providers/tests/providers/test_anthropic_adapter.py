from __future__ import annotations

import asyncio

import pytest

from gateway_providers.anthropic import AnthropicAdapter
from gateway_providers.anthropic.catalog import ANTHROPIC_MODELS
from gateway_providers.base.errors import ErrorCode, ProviderError
from gateway_providers.base.models import ChatMessage

_MESSAGE = {
    "id": "msg_1",
    "type": "message",
    "role": "assistant",
    "model": "claude-3-5-sonnet-20241022",
    "content": [{"type": "text", "text": "Bonjour"}],
    "stop_reason": "end_turn",
    "usage": {"input_tokens": 10, "output_tokens": 4},
}


def _adapter(upstream) -> AnthropicAdapter:
    return AnthropicAdapter("sk-ant-test", transport=upstream.transport)


def test_validate_key_sends_minimal_message(fake_upstream):
    upstream = fake_upstream((200, _MESSAGE))
    result = asyncio.run(_adapter(upstream).validate_api_key())
    assert result.valid is True  # nosec B101 - pytest assertion in tests
    assert result.details == {"models": 5}  # nosec B101 - pytest assertion in tests
    request = upstream.requests[0]
    assert str(request.url) == "https://api.anthropic.com/v1/messages"  # nosec B101 - pytest assertion in tests
    assert request.headers["x-api-key"] == "sk-ant-test"  # nosec B101 - pytest assertion in tests
    assert request.headers["anthropic-version"] == "2023-06-01"  # nosec B101 - pytest assertion in tests
    assert "authorization" not in request.headers  # nosec B101 - pytest assertion in tests
    assert upstream.body() == {  # nosec B101 - pytest assertion in tests
        "model": "claude-3-haiku-20240307",
        "max_tokens": 1,
        "messages": [{"role": "user", "content": "Hi"}],
    }


def test_validate_key_unauthorized(fake_upstream):
    upstream = fake_upstream(
        (401, {"type": "error", "error": {"type": "authentication_error", "message": "invalid x-api-key"}})
    )
    result = asyncio.run(_adapter(upstream).validate_api_key())
    assert result.valid is False  # nosec B101 - pytest assertion in tests
    assert result.message == "Invalid API key"  # nosec B101 - pytest assertion in tests


def test_fetch_models_is_static_and_idempotent(fake_upstream):
    upstream = fake_upstream((500, {}))
    adapter = _adapter(upstream)
    first = asyncio.run(adapter.fetch_models())
    second = asyncio.run(adapter.fetch_models())
    assert upstream.calls == 0  # nosec B101 - pytest assertion in tests
    assert first.to_dict() == second.to_dict()  # nosec B101 - pytest assertion in tests
    assert first.count == len(ANTHROPIC_MODELS) == 5  # nosec B101 - pytest assertion in tests
    sonnet = first.models[0].to_dict()
    assert sonnet["contextWindow"] == 200000  # nosec B101 - pytest assertion in tests
    assert sonnet["pricing"] == {"input": 3.0, "output": 15.0}  # nosec B101 - pytest assertion in tests


def test_chat_extracts_first_system_message(fake_upstream):
    upstream = fake_upstream((200, _MESSAGE))
    result = asyncio.run(
        _adapter(upstream).send_chat_completion(
            "claude-3-5-sonnet-20241022",
            [
                ChatMessage("system", "Answer in French"),
                ChatMessage("user", "Hello"),
                ChatMessage("system", "ignored"),
                ChatMessage("assistant", "Salut"),
                ChatMessage("user", "Again"),
            ],
            temperature=0.3,
        )
    )
    body = upstream.body()
    assert body["system"] == "Answer in French"  # nosec B101 - pytest assertion in tests
    assert [m["role"] for m in body["messages"]] == ["user", "assistant", "user"]  # nosec B101 - pytest assertion in tests
    assert body["max_tokens"] == 4096  # nosec B101 - pytest assertion in tests
    assert body["temperature"] == 0.3  # nosec B101 - pytest assertion in tests
    assert result.message.content == "Bonjour"  # nosec B101 - pytest assertion in tests
    assert result.usage.to_dict() == {  # nosec B101 - pytest assertion in tests
        "promptTokens": 10,
        "completionTokens": 4,
        "totalTokens": 14,
    }
    assert result.finish_reason == "end_turn"  # nosec B101 - pytest assertion in tests


def test_chat_without_system_omits_field_and_honors_max_tokens(fake_upstream):
    upstream = fake_upstream((200, {"content": [{"type": "text", "text": "x"}]}))
    result = asyncio.run(
        _adapter(upstream).send_chat_completion("claude-3-opus-20240229", [ChatMessage("user", "Hi")], max_tokens=64)
    )
    body = upstream.body()
    assert "system" not in body  # nosec B101 - pytest assertion in tests
    assert body["max_tokens"] == 64  # nosec B101 - pytest assertion in tests
    assert result.model == "claude-3-opus-20240229"  # nosec B101 - pytest assertion in tests
    assert result.usage.total_tokens == 0  # nosec B101 - pytest assertion in tests


def test_chat_error_uses_error_type_as_code(fake_upstream):
    upstream = fake_upstream(
        (529, {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}})
    )
    with pytest.raises(ProviderError) as ei:
        asyncio.run(_adapter(upstream).send_chat_completion("claude-3-5-haiku-20241022", [ChatMessage("user", "Hi")]))
    assert ei.value.status_code == 529  # nosec B101 - pytest assertion in tests
    assert ei.value.code is ErrorCode.SERVER_ERROR  # nosec B101 - pytest assertion in tests
    assert ei.value.to_dict()["code"] == "overloaded_error"  # nosec B101 - pytest assertion in tests
    assert ei.value.message == "Overloaded"  # nosec B101 - pytest assertion in tests


def test_non_text_block_payload_is_malformed(fake_upstream):
    upstream = fake_upstream((200, {"content": [{"type": "text", "text": {"value": "x"}}]}))
    with pytest.raises(ProviderError) as ei:
        asyncio.run(_adapter(upstream).send_chat_completion("claude-3-5-haiku-20241022", [ChatMessage("user", "Hi")]))
    assert ei.value.status_code == 502  # nosec B101 - pytest assertion in tests
    assert ei.value.code is ErrorCode.SERVER_ERROR  # nosec B101 - pytest assertion in tests


def test_unusable_usage_counts_are_zero(fake_upstream):
    adapter = _adapter(fake_upstream())
    text_usage = adapter.normalize_response({"content": [{"type": "text", "text": "x"}], "usage": "x"})
    assert text_usage.usage.total_tokens == 0  # nosec B101 - pytest assertion in tests
    inf_usage = adapter.normalize_response(
        {"content": [{"type": "text", "text": "x"}], "usage": {"input_tokens": float("inf"), "output_tokens": 4}}
    )
    assert inf_usage.usage.to_dict() == {"promptTokens": 0, "completionTokens": 4, "totalTokens": 4}  # nosec B101 - pytest assertion in tests
