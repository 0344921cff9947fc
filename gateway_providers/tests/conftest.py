"""Pytest configuration for the gateway test suite.

Every test runs against a clean configuration: gateway env vars are removed,
``.env`` loading points at a missing file, and module caches are reset.
Upstreams are faked with ``httpx.MockTransport`` via :class:`FakeUpstream`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List, Union

import httpx
import pytest

from gateway_providers import config as gateway_config
from gateway_providers.base import timeouts
from gateway_providers.base.logging import BASE_LOGGER_NAME, get_logger
import gateway_providers.base.resilience.retry as retry_module

_GATEWAY_ENV = (
    "GATEWAY_CONFIG_FILE",
    "GATEWAY_MAX_RETRIES",
    "GATEWAY_RETRY_DELAY_SECONDS",
    "GATEWAY_DEFAULT_TEMPERATURE",
    "GATEWAY_LOG_LEVEL",
    "GATEWAY_TIMEOUT_HTTP_SECONDS",
    "GATEWAY_TIMEOUT_CONNECT_SECONDS",
    "GATEWAY_SERVICE_CORS_ORIGINS",
    "OPENAI_BASE_URL",
    "ANTHROPIC_BASE_URL",
    "GOOGLE_BASE_URL",
    "PERPLEXITY_BASE_URL",
)

Scripted = Union[Exception, tuple]


class FakeUpstream:
    """Scripted upstream answering requests in order.

    Each script item is either ``(status, json_body)``, ``(status, json_body,
    headers)`` or an exception to raise. The last item repeats once the
    script is exhausted. Every request is recorded in ``requests``.
    """

    def __init__(self, *script: Scripted) -> None:
        self.script: List[Scripted] = list(script) or [(200, {})]
        self.requests: List[httpx.Request] = []

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(item, Exception):
            raise item
        status, body, *rest = item
        headers = rest[0] if rest else None
        return httpx.Response(status, json=body, headers=headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def body(self, index: int = -1) -> Dict[str, Any]:
        return json.loads(self.requests[index].content)


class _EventCollector(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            payload = {"msg": record.getMessage()}
        payload.setdefault("level", record.levelname)
        self.events.append(payload)


@pytest.fixture(autouse=True)
def clean_gateway_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Isolate tests from the developer's environment and module caches."""
    for name in _GATEWAY_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "absent.env"))
    gateway_config.reset_config_cache()
    monkeypatch.setattr(timeouts, "_CACHED", None)
    yield
    gateway_config.reset_config_cache()


@pytest.fixture()
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> List[float]:
    """Replace the retry sleep hook; returns the list of requested delays."""
    delays: List[float] = []

    async def _fake_sleep(delay: float) -> None:
        delays.append(delay)

    monkeypatch.setattr(retry_module, "_sleep", _fake_sleep)
    return delays


@pytest.fixture()
def log_events() -> Iterator[List[Dict[str, Any]]]:
    """Collect structured events emitted under the ``gateway`` logger."""
    base = get_logger(BASE_LOGGER_NAME)
    collector = _EventCollector()
    base.addHandler(collector)
    try:
        yield collector.events
    finally:
        base.removeHandler(collector)


@pytest.fixture()
def fake_upstream():
    """Return the :class:`FakeUpstream` constructor."""
    return FakeUpstream
