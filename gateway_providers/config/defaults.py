"""gateway_providers.config.defaults
=================================

Central place for small, stable default values used by the adapters, the
orchestrators and the HTTP service. These can be overridden through
``get_gateway_config`` (config file or environment) but provide sensible
fallbacks for local development and tests.

Only plain constants live here; no I/O and no imports from other gateway
packages.
"""

from __future__ import annotations

# ---- Request defaults ----
# Sampling temperature sent upstream when the caller omits one.
DEFAULT_TEMPERATURE = 0.7
# Context strategy applied when the caller omits one.
DEFAULT_CONTEXT_STRATEGY = "minimal"
# Number of non-system messages kept by the "recent" strategy.
DEFAULT_RECENT_COUNT = 10
# Rough characters-per-token ratio for the token estimate.
CHARS_PER_TOKEN = 4

# ---- Retry policy (chat completions only) ----
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_SECONDS = 1.0
# Statuses that are never retried: the request or credential is wrong.
NON_RETRYABLE_STATUSES = (400, 401, 403)

# ---- Key validation ----
# Output cap used when a key is validated through a minimal completion.
VALIDATION_MAX_TOKENS = 1
VALIDATION_PROMPT = "Hi"

# ---- Upstream protocol constants ----
ANTHROPIC_API_VERSION = "2023-06-01"
# Anthropic requires max_tokens on every request.
ANTHROPIC_DEFAULT_MAX_TOKENS = 4096
ANTHROPIC_VALIDATION_MODEL = "claude-3-haiku-20240307"
PERPLEXITY_VALIDATION_MODEL = "sonar"
OPENAI_DEFAULT_CONTEXT_WINDOW = 8192
GEMINI_DEFAULT_CONTEXT_WINDOW = 32768

# ---- HTTP timeouts (seconds) ----
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_CONNECT_TIMEOUT = 10.0

# ---- Service / HTTP layer ----
# Comma-separated list of allowed origins for the dev server.
GATEWAY_SERVICE_CORS_DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"
GATEWAY_SERVICE_DEFAULT_HOST = "127.0.0.1"
GATEWAY_SERVICE_DEFAULT_PORT = 8091

__all__ = [
    "DEFAULT_TEMPERATURE",
    "DEFAULT_CONTEXT_STRATEGY",
    "DEFAULT_RECENT_COUNT",
    "CHARS_PER_TOKEN",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_DELAY_SECONDS",
    "NON_RETRYABLE_STATUSES",
    "VALIDATION_MAX_TOKENS",
    "VALIDATION_PROMPT",
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "ANTHROPIC_VALIDATION_MODEL",
    "PERPLEXITY_VALIDATION_MODEL",
    "OPENAI_DEFAULT_CONTEXT_WINDOW",
    "GEMINI_DEFAULT_CONTEXT_WINDOW",
    "DEFAULT_HTTP_TIMEOUT",
    "DEFAULT_CONNECT_TIMEOUT",
    "GATEWAY_SERVICE_CORS_DEFAULT_ORIGINS",
    "GATEWAY_SERVICE_DEFAULT_HOST",
    "GATEWAY_SERVICE_DEFAULT_PORT",
]
