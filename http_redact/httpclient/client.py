"""Factories for ``httpx`` clients that log redacted traffic."""

import httpx
import structlog

from http_redact.httpclient.config import ClientConfig
from http_redact.httpclient.constants import COMPONENT_HTTP_CLIENT
from http_redact.httpclient.hooks import (
    on_after_response,
    on_after_response_async,
    on_before_request,
    on_before_request_async,
)
from http_redact.httpclient.logger import HttpLogger


logger = structlog.get_logger()


def _log_client_created(config: ClientConfig, client_kind: str) -> None:
    logger.debug(
        "http_client_created",
        component=COMPONENT_HTTP_CLIENT,
        client_kind=client_kind,
        integration=config.integration,
        timeout_s=config.timeout.total_seconds(),
        retry_count=config.retry.count,
        log_level=config.log_level.value,
        interceptors_enabled=config.interceptors_enabled,
    )


def new_client(
    http_logger: HttpLogger,
    host: str,
    integration: str,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create a client with default settings and traffic logging.

    Args:
        http_logger: Destination of the traffic logs.
        host: Base URL of the client.
        integration: Name identifying the caller in the logs.
        transport: Optional transport (default: pooled HTTP transport).

    Returns:
        Configured ``httpx.Client``.

    Raises:
        MissingHostError: If ``host`` is blank.
        MissingIntegrationError: If ``integration`` is blank.
    """
    config = ClientConfig(host=host, integration=integration)
    return new_client_from_config(http_logger, config, transport=transport)


def new_client_from_config(
    http_logger: HttpLogger,
    config: ClientConfig,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create a client from a validated configuration.

    Traffic logging hooks are attached only when the configured log level
    is ``info`` or more verbose.

    Args:
        http_logger: Destination of the traffic logs.
        config: Validated client configuration.
        transport: Optional transport. When omitted, an
            ``httpx.HTTPTransport`` retrying ``config.retry.count`` times is
            used.

    Returns:
        Configured ``httpx.Client``.
    """
    event_hooks: dict[str, list[object]] = {"request": [], "response": []}
    if config.interceptors_enabled:
        event_hooks["request"].append(on_before_request(http_logger, config))
        event_hooks["response"].append(on_after_response(http_logger, config))

    if transport is None:
        transport = httpx.HTTPTransport(retries=config.retry.count)

    _log_client_created(config, "sync")
    return httpx.Client(
        base_url=config.host,
        timeout=config.timeout.total_seconds(),
        transport=transport,
        event_hooks=event_hooks,  # type: ignore[arg-type]
    )


def new_async_client(
    http_logger: HttpLogger,
    host: str,
    integration: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an async client with default settings and traffic logging.

    See ``new_client``.
    """
    config = ClientConfig(host=host, integration=integration)
    return new_async_client_from_config(http_logger, config, transport=transport)


def new_async_client_from_config(
    http_logger: HttpLogger,
    config: ClientConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an async client from a validated configuration.

    See ``new_client_from_config``.
    """
    event_hooks: dict[str, list[object]] = {"request": [], "response": []}
    if config.interceptors_enabled:
        event_hooks["request"].append(on_before_request_async(http_logger, config))
        event_hooks["response"].append(on_after_response_async(http_logger, config))

    if transport is None:
        transport = httpx.AsyncHTTPTransport(retries=config.retry.count)

    _log_client_created(config, "async")
    return httpx.AsyncClient(
        base_url=config.host,
        timeout=config.timeout.total_seconds(),
        transport=transport,
        event_hooks=event_hooks,  # type: ignore[arg-type]
    )
