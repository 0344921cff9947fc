"""Unified configuration layer for the gateway.

Goals
-----
* Centralize defaults (retry policy, default temperature, base URLs).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults (``config.defaults`` / ``config.providers``)
    2. Optional external config file (JSON or YAML) at ``GATEWAY_CONFIG_FILE``
    3. Environment variables
    4. In-code overrides passed to the helper
* Provide two call sites: ``get_gateway_config()`` for gateway-wide settings
  and ``get_provider_config(provider)`` for per-provider endpoint settings.

Environment Variables
---------------------
GATEWAY_MAX_RETRIES, GATEWAY_RETRY_DELAY_SECONDS, GATEWAY_DEFAULT_TEMPERATURE
and <PROVIDER>_BASE_URL (e.g. OPENAI_BASE_URL, GOOGLE_BASE_URL). A ``.env``
file (path from ``DOTENV_FILE``, default ``.env``) is loaded once before the
environment is read.

External Config File (Optional)
-------------------------------
JSON is tried first, then YAML. Structure example:

```
max_retries: 2
retry_delay_seconds: 0.5
providers:
  openai:
    base_url: https://proxy.internal/openai/v1
```

API keys are never read from configuration: callers supply them per request.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml

from .defaults import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_DELAY_SECONDS,
    DEFAULT_TEMPERATURE,
)
from .providers import PROVIDER_BASE_URLS, PROVIDER_DISPLAY_NAMES, ProviderName


# -------------------- Defaults --------------------

DEFAULTS: Dict[str, Any] = {
    "max_retries": DEFAULT_MAX_RETRIES,
    "retry_delay_seconds": DEFAULT_RETRY_DELAY_SECONDS,
    "default_temperature": DEFAULT_TEMPERATURE,
}

# setting name -> (env var, parser)
ENV_FIELD_MAP: Dict[str, tuple[str, Callable[[str], Any]]] = {
    "max_retries": ("GATEWAY_MAX_RETRIES", int),
    "retry_delay_seconds": ("GATEWAY_RETRY_DELAY_SECONDS", float),
    "default_temperature": ("GATEWAY_DEFAULT_TEMPERATURE", float),
}

_PLACEHOLDER_MARKERS = ("placeholder", "changeme", "example")

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like an unset template value."""
    if val is None:
        return True
    lowered = val.strip().lower()
    return not lowered or any(m in lowered for m in _PLACEHOLDER_MARKERS)


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Existing
    environment variables win unless they look like placeholders.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        return
    with open(path, "r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and (key not in os.environ or is_placeholder(os.environ.get(key))):
                os.environ[key] = value


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("GATEWAY_CONFIG_FILE")
    data: Any = {}
    if path and Path(path).is_file():
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except ValueError:
            data = yaml.safe_load(text) or {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, (env_name, parse) in ENV_FIELD_MAP.items():
        raw = os.getenv(env_name)
        if not raw:
            continue
        try:
            out[field] = parse(raw)
        except ValueError:
            continue
    return out


def reset_config_cache() -> None:
    """Forget the cached config file and ``.env`` state (tests, reloads)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def get_gateway_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged gateway-wide settings.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    _load_dotenv_once()
    cfg: Dict[str, Any] = dict(DEFAULTS)
    file_cfg = _load_external_config()
    cfg |= {k: v for k, v in file_cfg.items() if k in DEFAULTS}
    cfg |= _env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged endpoint settings (``base_url``, ``display_name``) for a provider.

    Merge order (later wins): built-in tables -> external config
    ``providers.<name>`` section -> ``<PROVIDER>_BASE_URL`` -> overrides
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}
    if name in PROVIDER_BASE_URLS:
        cfg["base_url"] = PROVIDER_BASE_URLS[name]
        cfg["display_name"] = PROVIDER_DISPLAY_NAMES[name]

    section = (_load_external_config().get("providers") or {}).get(name)
    if isinstance(section, dict):
        cfg |= section

    env_url = os.getenv(f"{name.upper()}_BASE_URL")
    if env_url and not is_placeholder(env_url):
        cfg["base_url"] = env_url

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


__all__ = [
    "DEFAULTS",
    "ProviderName",
    "get_gateway_config",
    "get_provider_config",
    "reset_config_cache",
    "is_placeholder",
]
