from __future__ import annotations

import asyncio
import types

import httpx

from gateway_providers.base.errors import (
    ErrorCode,
    InvalidRequestError,
    ProviderError,
    classify_exception,
    code_for_status,
)


def test_classify_provider_error_passthrough():
    e = ProviderError(code=ErrorCode.AUTH, message="nope", provider="x")
    assert classify_exception(e) is ErrorCode.AUTH  # nosec B101 - assert is appropriate in unit tests


def test_classify_http_status_mapping():
    # Direct attr
    e1 = types.SimpleNamespace(status_code=404)
    assert classify_exception(e1) is ErrorCode.NOT_FOUND  # nosec B101 - assert is appropriate in unit tests
    request = httpx.Request("GET", "https://upstream.test/x")
    response = httpx.Response(503, request=request)
    e2 = httpx.HTTPStatusError("bad", request=request, response=response)
    assert classify_exception(e2) is ErrorCode.UNAVAILABLE  # nosec B101 - assert is appropriate in unit tests


def test_classify_timeouts_and_transport():
    assert classify_exception(httpx.ReadTimeout("slow")) is ErrorCode.TIMEOUT  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.TRANSIENT  # nosec B101 - assert is appropriate in unit tests


def test_classify_heuristics():
    assert classify_exception(Exception("rate limit exceeded")) is ErrorCode.RATE_LIMIT  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(Exception("timed out waiting")) is ErrorCode.TIMEOUT  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(Exception("unsupported parameter")) is ErrorCode.UNSUPPORTED  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN  # nosec B101 - assert is appropriate in unit tests


def test_code_for_status_fallbacks():
    assert code_for_status(401) is ErrorCode.AUTH  # nosec B101 - assert is appropriate in unit tests
    assert code_for_status(429) is ErrorCode.RATE_LIMIT  # nosec B101 - assert is appropriate in unit tests
    assert code_for_status(507) is ErrorCode.SERVER_ERROR  # nosec B101 - assert is appropriate in unit tests
    assert code_for_status(418) is ErrorCode.VALIDATION  # nosec B101 - assert is appropriate in unit tests
    assert code_for_status(302) is ErrorCode.UNKNOWN  # nosec B101 - assert is appropriate in unit tests


def test_error_envelopes_prefer_upstream_code():
    err = ProviderError(
        code=ErrorCode.AUTH,
        message="Incorrect API key provided",
        provider="p",
        status_code=401,
        upstream_code="invalid_api_key",
    )
    assert err.to_dict() == {  # nosec B101 - assert is appropriate in unit tests
        "message": "Incorrect API key provided",
        "code": "invalid_api_key",
        "statusCode": 401,
    }
    bare = ProviderError(code=ErrorCode.UNAVAILABLE, message="down", provider="p", status_code=503)
    assert bare.to_dict()["code"] == "unavailable"  # nosec B101 - assert is appropriate in unit tests
    invalid = InvalidRequestError("Model is required", code="MISSING_MODEL")
    assert invalid.to_dict() == {  # nosec B101 - assert is appropriate in unit tests
        "message": "Model is required",
        "code": "MISSING_MODEL",
        "statusCode": 400,
    }
