"""Redacting HTTP client layer built on httpx and structlog."""

from http_redact.httpclient import (
    ClientConfig,
    ClientLogger,
    new_async_client_from_config,
    new_client,
    new_client_from_config,
)


__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "ClientLogger",
    "new_async_client_from_config",
    "new_client",
    "new_client_from_config",
]
