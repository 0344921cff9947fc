"""Base shared constants for adapters and orchestrators.

Central location for the stable error codes reported by local validation and
the fixed user-facing messages, to avoid scattering magic strings.

Security
--------
This module contains only generic sentinel strings. There are no credentials
or tokens embedded.

# pragma: allowlist secret
"""
from __future__ import annotations

# Local validation error codes (InvalidRequestError.code)
MISSING_API_KEY = "MISSING_API_KEY"  # pragma: allowlist secret - error code name, not a secret
MISSING_MODEL = "MISSING_MODEL"
INVALID_MESSAGES = "INVALID_MESSAGES"
UNSUPPORTED_PROVIDER = "UNSUPPORTED_PROVIDER"

# HTTP envelope codes
VALIDATION_ERROR = "VALIDATION_ERROR"
SERVER_ERROR = "SERVER_ERROR"

# Fixed messages
INVALID_API_KEY_MESSAGE = "Invalid API key"
VALID_API_KEY_MESSAGE = "API key is valid"
STREAMING_UNSUPPORTED_MESSAGE = "Streaming responses are not supported by the gateway"
UNKNOWN_UPSTREAM_ERROR = "Unknown error"
API_KEY_REQUIRED_MESSAGE = "API key is required"  # pragma: allowlist secret - message text
MODEL_REQUIRED_MESSAGE = "Model is required"
INVALID_MESSAGES_MESSAGE = (
    "Invalid messages format. Messages must be a non-empty array with role and content fields"
)

__all__ = [
    "MISSING_API_KEY",
    "MISSING_MODEL",
    "INVALID_MESSAGES",
    "UNSUPPORTED_PROVIDER",
    "VALIDATION_ERROR",
    "SERVER_ERROR",
    "INVALID_API_KEY_MESSAGE",
    "VALID_API_KEY_MESSAGE",
    "STREAMING_UNSUPPORTED_MESSAGE",
    "UNKNOWN_UPSTREAM_ERROR",
    "API_KEY_REQUIRED_MESSAGE",
    "MODEL_REQUIRED_MESSAGE",
    "INVALID_MESSAGES_MESSAGE",
]
