from __future__ import annotations

import asyncio

from gateway_providers.base.models import ChatMessage
from gateway_providers.perplexity import PerplexityAdapter


def _adapter(upstream) -> PerplexityAdapter:
    return PerplexityAdapter("pplx-test", transport=upstream.transport)


def test_validate_key_uses_minimal_completion(fake_upstream):
    upstream = fake_upstream((200, {"choices": [{"message": {"role": "assistant", "content": "H"}}]}))
    result = asyncio.run(_adapter(upstream).validate_api_key())
    assert result.valid is True  # nosec B101 - pytest assertion in tests
    assert result.provider == "perplexity"  # nosec B101 - pytest assertion in tests
    assert result.details == {  # nosec B101 - pytest assertion in tests
        "models": 4,
        "availableModels": ["sonar", "sonar-pro", "sonar-deep-research", "sonar-reasoning-pro"],
    }
    request = upstream.requests[0]
    assert str(request.url) == "https://api.perplexity.ai/chat/completions"  # nosec B101 - pytest assertion in tests
    assert request.headers["authorization"] == "Bearer pplx-test"  # nosec B101 - pytest assertion in tests
    assert upstream.body() == {  # nosec B101 - pytest assertion in tests
        "model": "sonar",
        "messages": [{"role": "user", "content": "Hi"}],
        "max_tokens": 1,
    }


def test_validate_key_forbidden(fake_upstream):
    upstream = fake_upstream((403, {"error": {"message": "forbidden"}}))
    result = asyncio.run(_adapter(upstream).validate_api_key())
    assert result.valid is False  # nosec B101 - pytest assertion in tests


def test_fetch_models_static_catalog(fake_upstream):
    upstream = fake_upstream((500, {}))
    result = asyncio.run(_adapter(upstream).fetch_models())
    assert upstream.calls == 0  # nosec B101 - pytest assertion in tests
    assert result.count == 4  # nosec B101 - pytest assertion in tests
    assert {m.context_window for m in result.models} == {127072}  # nosec B101 - pytest assertion in tests


def test_chat_uses_openai_dialect(fake_upstream):
    upstream = fake_upstream(
        (
            200,
            {
                "model": "sonar-pro",
                "choices": [{"message": {"role": "assistant", "content": "Answer"}, "finish_reason": "stop"}],
                "usage": {"prompt_tokens": 5, "completion_tokens": 7},
            },
        )
    )
    result = asyncio.run(_adapter(upstream).send_chat_completion("sonar-pro", [ChatMessage("user", "Q")]))
    assert upstream.body()["model"] == "sonar-pro"  # nosec B101 - pytest assertion in tests
    assert result.provider == "perplexity"  # nosec B101 - pytest assertion in tests
    assert result.message.content == "Answer"  # nosec B101 - pytest assertion in tests
    assert result.usage.total_tokens == 12  # nosec B101 - pytest assertion in tests
