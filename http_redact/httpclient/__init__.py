"""HTTP client configuration and redacted traffic logging.

This module wraps ``httpx`` clients with:
- Validated, range-clamped timeout and retry settings
- Request/response hooks logging method, path, headers, query and body
- Redaction of configured query parameters, headers and JSON body fields
"""

from http_redact.httpclient.bounds import (
    RETRY_COUNT_BOUNDS,
    RETRY_MAX_WAIT_TIME_BOUNDS,
    RETRY_WAIT_TIME_BOUNDS,
    TIMEOUT_BOUNDS,
    SettingBounds,
    check_value_in_range,
)
from http_redact.httpclient.client import (
    new_async_client,
    new_async_client_from_config,
    new_client,
    new_client_from_config,
)
from http_redact.httpclient.config import (
    ClientConfig,
    LogLevel,
    RedactionConfig,
    RetryConfig,
)
from http_redact.httpclient.constants import LOG_CONTEXT_EXTENSION, REDACTED_VALUE
from http_redact.httpclient.errors import (
    BodyRedactionError,
    ClientConfigError,
    LoggedPanicError,
    MissingHostError,
    MissingIntegrationError,
)
from http_redact.httpclient.hooks import (
    on_after_response,
    on_after_response_async,
    on_before_request,
    on_before_request_async,
)
from http_redact.httpclient.loader import (
    ConfigLoadError,
    ConfigValidationError,
    load_config,
    load_config_from_settings,
    parse_config,
)
from http_redact.httpclient.logger import ClientLogger, HttpLogger, read_context
from http_redact.httpclient.metrics import HookMetrics
from http_redact.httpclient.redact import (
    make_body_redactor,
    make_redactor,
    to_field_set,
)


__all__ = [
    # Client
    "new_client",
    "new_client_from_config",
    "new_async_client",
    "new_async_client_from_config",
    # Config
    "ClientConfig",
    "RetryConfig",
    "RedactionConfig",
    "LogLevel",
    "load_config",
    "load_config_from_settings",
    "parse_config",
    # Bounds
    "SettingBounds",
    "check_value_in_range",
    "TIMEOUT_BOUNDS",
    "RETRY_COUNT_BOUNDS",
    "RETRY_WAIT_TIME_BOUNDS",
    "RETRY_MAX_WAIT_TIME_BOUNDS",
    # Hooks
    "on_before_request",
    "on_after_response",
    "on_before_request_async",
    "on_after_response_async",
    "LOG_CONTEXT_EXTENSION",
    # Logging
    "HttpLogger",
    "ClientLogger",
    "read_context",
    # Redaction
    "REDACTED_VALUE",
    "to_field_set",
    "make_redactor",
    "make_body_redactor",
    # Errors
    "ClientConfigError",
    "MissingHostError",
    "MissingIntegrationError",
    "BodyRedactionError",
    "LoggedPanicError",
    "ConfigLoadError",
    "ConfigValidationError",
    # Metrics
    "HookMetrics",
]
