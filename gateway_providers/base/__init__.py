"""Provider-agnostic core of the gateway.

Modules here must not mention concrete providers; per-provider data lives in
``gateway_providers.config.providers`` and the adapter packages.
"""
