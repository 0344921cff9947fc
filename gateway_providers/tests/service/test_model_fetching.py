from __future__ import annotations

import asyncio

import pytest

from gateway_providers.base.errors import InvalidRequestError, ProviderError
from gateway_providers.service import ModelFetchingService


def _service(upstream) -> ModelFetchingService:
    return ModelFetchingService(adapter_options={"transport": upstream.transport})


def test_live_listing(fake_upstream):
    upstream = fake_upstream((200, {"data": [{"id": "gpt-4o"}, {"id": "tts-1"}]}))
    result = asyncio.run(_service(upstream).fetch_models("openai", "sk-test"))
    assert result.to_dict()["count"] == 1  # nosec B101 - asserts are fine in tests
    assert result.models[0].id == "gpt-4o"  # nosec B101 - asserts are fine in tests


def test_static_catalog_needs_no_network(fake_upstream):
    upstream = fake_upstream((500, {}))
    result = asyncio.run(_service(upstream).fetch_models("anthropic", "sk-ant"))
    assert result.count == 5  # nosec B101 - asserts are fine in tests
    assert upstream.calls == 0  # nosec B101 - asserts are fine in tests


@pytest.mark.parametrize(
    "provider, key, code",
    [("unknown", "k", "UNSUPPORTED_PROVIDER"), ("google", "", "MISSING_API_KEY")],
)
def test_bad_input_raises(fake_upstream, provider, key, code):
    upstream = fake_upstream((200, {}))
    with pytest.raises(InvalidRequestError) as ei:
        asyncio.run(_service(upstream).fetch_models(provider, key))
    assert ei.value.code == code  # nosec B101 - asserts are fine in tests


def test_upstream_errors_propagate(fake_upstream):
    upstream = fake_upstream((401, {"error": {"message": "bad key", "code": "invalid_api_key"}}))
    with pytest.raises(ProviderError) as ei:
        asyncio.run(_service(upstream).fetch_models("openai", "sk-bad"))
    assert ei.value.status_code == 401  # nosec B101 - asserts are fine in tests
