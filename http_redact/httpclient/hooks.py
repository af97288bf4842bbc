"""Request/response hooks that log HTTP traffic with redaction.

The hooks are registered as ``httpx`` event hooks. Each factory builds its
redactors once from the configuration; the returned callables can then run
concurrently for every request in flight.

Body logging is best effort: a body that is not JSON, not a JSON object or
not readable is logged as ``None`` after a warning, and the call itself is
never failed.
"""

import json
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from http_redact.httpclient.config import ClientConfig
from http_redact.httpclient.constants import (
    EVENT_HTTP_REQUEST,
    EVENT_HTTP_RESPONSE,
    LOG_CONTEXT_EXTENSION,
)
from http_redact.httpclient.errors import BodyRedactionError
from http_redact.httpclient.logger import HttpLogger, LogContext
from http_redact.httpclient.metrics import HookMetrics
from http_redact.httpclient.redact import BodyRedactor


RequestHook = Callable[[httpx.Request], None]
ResponseHook = Callable[[httpx.Response], None]
AsyncRequestHook = Callable[[httpx.Request], Awaitable[None]]
AsyncResponseHook = Callable[[httpx.Response], Awaitable[None]]

REQUEST = "request"
RESPONSE = "response"


def header_multimap(headers: httpx.Headers) -> dict[str, list[str]]:
    """Group headers by name, keeping the name casing as sent."""
    result: dict[str, list[str]] = {}
    for raw_key, raw_value in headers.raw:
        key = raw_key.decode(headers.encoding)
        result.setdefault(key, []).append(raw_value.decode(headers.encoding))
    return result


def query_multimap(url: httpx.URL) -> dict[str, list[str]]:
    """Group query parameters by name, in order of appearance."""
    result: dict[str, list[str]] = {}
    for key, value in url.params.multi_items():
        result.setdefault(key, []).append(value)
    return result


def parse_json_body(payload: bytes) -> Any:
    """Parse a raw payload into a fresh JSON structure.

    Args:
        payload: Raw body bytes.

    Returns:
        Parsed JSON, or None for an empty payload.

    Raises:
        ValueError: If the payload is not valid JSON.
        RecursionError: If the payload nests deeper than the decoder allows.
    """
    if not payload.strip():
        return None
    return json.loads(payload)


def get_log_context(request: httpx.Request) -> LogContext:
    """Get the per-call log context attached to a request, if any."""
    context: LogContext = request.extensions.get(LOG_CONTEXT_EXTENSION)
    return context


def elapsed_ms(response: httpx.Response) -> float | None:
    """Get the elapsed time of a response in milliseconds.

    Returns:
        Elapsed milliseconds, or None when the transport did not time it.
    """
    try:
        elapsed = response.elapsed
    except RuntimeError:
        return None
    return round(elapsed.total_seconds() * 1000, 2)


def _redacted_body(  # noqa: PLR0913
    logger: HttpLogger,
    context: LogContext,
    integration: str,
    direction: str,
    payload: bytes,
    redact_body: BodyRedactor,
) -> dict[str, Any] | None:
    """Parse and redact a body, degrading to None on failure."""
    metrics = HookMetrics.get_instance()

    try:
        parsed = parse_json_body(payload)
    except (ValueError, RecursionError) as e:
        metrics.record_parse_failure(direction)
        logger.warn(
            context,
            f"{direction}_body_not_json",
            integration=integration,
            error=str(e),
        )
        return None

    try:
        return redact_body(parsed)
    except BodyRedactionError as e:
        metrics.record_redaction_failure(direction)
        logger.warn(
            context,
            f"{direction}_body_not_logged",
            integration=integration,
            error=str(e),
        )
        return None


def on_before_request(logger: HttpLogger, config: ClientConfig) -> RequestHook:
    """Build the hook that logs outbound requests.

    Args:
        logger: Destination of the log events.
        config: Client configuration holding the redaction policy.

    Returns:
        Hook logging method, path, headers, query and body of a request.
    """
    integration = config.integration
    redact_headers = config.headers_redactor()
    redact_query = config.query_params_redactor()
    redact_body = config.request_body_redactor()

    def log_request(request: httpx.Request) -> None:
        context = get_log_context(request)

        try:
            payload = request.content
        except httpx.RequestNotRead:
            HookMetrics.get_instance().record_redaction_failure(REQUEST)
            logger.warn(
                context,
                "request_body_not_logged",
                integration=integration,
                error="streaming request body",
            )
            body = None
        else:
            body = _redacted_body(
                logger, context, integration, REQUEST, payload, redact_body
            )

        logger.info(
            context,
            EVENT_HTTP_REQUEST,
            integration=integration,
            method=request.method,
            path=request.url.path,
            headers=redact_headers(header_multimap(request.headers)),
            query=redact_query(query_multimap(request.url)),
            body=body,
        )
        HookMetrics.get_instance().record_request()

    return log_request


def on_after_response(logger: HttpLogger, config: ClientConfig) -> ResponseHook:
    """Build the hook that logs inbound responses.

    The response is read so that its payload can be logged; the caller
    still receives it unmodified.

    Args:
        logger: Destination of the log events.
        config: Client configuration holding the redaction policy.

    Returns:
        Hook logging status, timing, headers, query and body of a response.
    """
    integration = config.integration
    redact_headers = config.headers_redactor()
    redact_query = config.query_params_redactor()
    redact_body = config.response_body_redactor()

    def log_response(response: httpx.Response) -> None:
        request = response.request
        context = get_log_context(request)
        payload = response.read()
        body = _redacted_body(
            logger, context, integration, RESPONSE, payload, redact_body
        )

        logger.info(
            context,
            EVENT_HTTP_RESPONSE,
            integration=integration,
            status_code=response.status_code,
            elapsed_ms=elapsed_ms(response),
            method=request.method,
            path=request.url.path,
            headers=redact_headers(header_multimap(response.headers)),
            query=redact_query(query_multimap(request.url)),
            body=body,
        )
        HookMetrics.get_instance().record_response()

    return log_response


def on_before_request_async(
    logger: HttpLogger, config: ClientConfig
) -> AsyncRequestHook:
    """Build the request hook for ``httpx.AsyncClient``."""
    log_request = on_before_request(logger, config)

    async def log_request_async(request: httpx.Request) -> None:
        log_request(request)

    return log_request_async


def on_after_response_async(
    logger: HttpLogger, config: ClientConfig
) -> AsyncResponseHook:
    """Build the response hook for ``httpx.AsyncClient``.

    The body is loaded with ``aread`` before the shared logging runs.
    """
    log_response = on_after_response(logger, config)

    async def log_response_async(response: httpx.Response) -> None:
        await response.aread()
        log_response(response)

    return log_response_async
