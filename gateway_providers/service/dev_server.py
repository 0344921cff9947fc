from __future__ import annotations

import os

import uvicorn

from gateway_providers.config.defaults import (
    GATEWAY_SERVICE_DEFAULT_HOST,
    GATEWAY_SERVICE_DEFAULT_PORT,
)


def _parse_port(value: str | None, default: int) -> int:
    """Best-effort parse of a port from string, falling back to a sane default."""
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def main() -> None:
    """Start the development server for the gateway FastAPI app.

    Environment:

    - GATEWAY_SERVICE_HOST: interface to bind (default "127.0.0.1")
    - GATEWAY_SERVICE_PORT: port to bind (default 8091)
    - GATEWAY_SERVICE_RELOAD: "true"/"false" to toggle auto-reload
      (default True for direct CLI usage).
    """
    host = os.getenv("GATEWAY_SERVICE_HOST", GATEWAY_SERVICE_DEFAULT_HOST)
    port = _parse_port(os.getenv("GATEWAY_SERVICE_PORT"), GATEWAY_SERVICE_DEFAULT_PORT)

    reload_env = os.getenv("GATEWAY_SERVICE_RELOAD")
    reload_enabled = True if reload_env is None else reload_env.lower() == "true"

    uvicorn.run(
        "gateway_providers.service.app:app",
        host=host,
        port=port,
        reload=reload_enabled,
    )


if __name__ == "__main__":
    main()
