"""Configuration models for the redacting HTTP client.

``ClientConfig`` is the main entry point to configure a client: host,
integration name, timeout, retry shape, log level and the fields to redact
from logged traffic. It is immutable; the ``with_*`` methods return new,
re-validated instances.
"""

import logging
from datetime import timedelta
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from http_redact.httpclient.bounds import (
    check_retry_count,
    check_retry_max_wait_time,
    check_retry_wait_time,
    check_timeout,
)
from http_redact.httpclient.constants import (
    DEFAULT_RETRY_COUNT,
    DEFAULT_RETRY_MAX_WAIT_TIME,
    DEFAULT_RETRY_WAIT_TIME,
    DEFAULT_TIMEOUT,
)
from http_redact.httpclient.durations import coerce_duration
from http_redact.httpclient.errors import MissingHostError, MissingIntegrationError
from http_redact.httpclient.redact import (
    BodyRedactor,
    ParamsRedactor,
    make_body_redactor,
    make_redactor,
    to_field_set,
)


class LogLevel(str, Enum):
    """Minimum severity of the client's traffic logs."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    DPANIC = "dpanic"
    PANIC = "panic"
    FATAL = "fatal"

    @classmethod
    def _missing_(cls, value: object) -> "LogLevel | None":
        if not isinstance(value, str):
            return None
        name = value.strip().lower()
        if name == "warning":
            name = "warn"
        for member in cls:
            if member.value == name:
                return member
        return None

    @property
    def severity(self) -> int:
        """Position of the level, from most to least verbose."""
        return list(LogLevel).index(self)

    @property
    def logging_level(self) -> int:
        """Equivalent standard library logging level."""
        return _LOGGING_LEVELS[self]

    def enables(self, level: "LogLevel") -> bool:
        """Check whether messages at ``level`` pass this minimum level."""
        return self.severity <= level.severity


_LOGGING_LEVELS: dict[LogLevel, int] = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.DPANIC: logging.CRITICAL,
    LogLevel.PANIC: logging.CRITICAL,
    LogLevel.FATAL: logging.CRITICAL,
}

_RETRY_DURATION_DEFAULTS: dict[str, timedelta] = {
    "wait_time": DEFAULT_RETRY_WAIT_TIME,
    "max_wait_time": DEFAULT_RETRY_MAX_WAIT_TIME,
}


class RetryConfig(BaseModel):
    """How many times a request may be retried and how long to wait.

    Out-of-range values fall back to their defaults.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    count: int = DEFAULT_RETRY_COUNT
    wait_time: timedelta = DEFAULT_RETRY_WAIT_TIME
    max_wait_time: timedelta = DEFAULT_RETRY_MAX_WAIT_TIME

    @field_validator("count", mode="before")
    @classmethod
    def default_count(cls, v: Any) -> Any:
        """Treat an explicit null as unset."""
        return DEFAULT_RETRY_COUNT if v is None else v

    @field_validator("wait_time", "max_wait_time", mode="before")
    @classmethod
    def parse_durations(cls, v: Any, info: ValidationInfo) -> Any:
        """Accept unit-suffixed duration strings; an explicit null is unset."""
        if v is None:
            return _RETRY_DURATION_DEFAULTS[info.field_name]
        return coerce_duration(v)

    @field_validator("count")
    @classmethod
    def clamp_count(cls, v: int) -> int:
        """Clamp the retry count to its allowed range."""
        return check_retry_count(v)

    @field_validator("wait_time")
    @classmethod
    def clamp_wait_time(cls, v: timedelta | None) -> timedelta:
        """Clamp the wait between retries to its allowed range."""
        return check_retry_wait_time(v)

    @field_validator("max_wait_time")
    @classmethod
    def clamp_max_wait_time(cls, v: timedelta | None) -> timedelta:
        """Clamp the maximum wait between retries to its allowed range."""
        return check_retry_max_wait_time(v)


class RedactionConfig(BaseModel):
    """Fields to mask in logged traffic.

    - ``query_params``: query parameter names
    - ``headers``: header names, matched exactly as written
    - ``request``: selectors into the JSON request body
    - ``response``: selectors into the JSON response body
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    query_params: tuple[str, ...] = ()
    headers: tuple[str, ...] = ()
    request: tuple[str, ...] = ()
    response: tuple[str, ...] = ()


class ClientConfig(BaseModel):
    """Validated configuration of a redacting HTTP client.

    ``host`` and ``integration`` are required; every numeric setting is
    clamped to its allowed range on construction.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    integration: str = ""
    host: str = ""
    timeout: timedelta = DEFAULT_TIMEOUT
    retry: RetryConfig = Field(default_factory=RetryConfig)
    log_level: LogLevel = LogLevel.INFO
    redaction: RedactionConfig = Field(
        default_factory=RedactionConfig, alias="ofuscate"
    )

    @field_validator("timeout", mode="before")
    @classmethod
    def parse_timeout(cls, v: Any) -> Any:
        """Accept unit-suffixed duration strings; an explicit null is unset."""
        return DEFAULT_TIMEOUT if v is None else coerce_duration(v)

    @field_validator("timeout")
    @classmethod
    def clamp_timeout(cls, v: timedelta | None) -> timedelta:
        """Clamp the timeout to its allowed range."""
        return check_timeout(v)

    @field_validator("retry", "redaction", mode="before")
    @classmethod
    def default_sections(cls, v: Any) -> Any:
        """Treat an empty descriptor section as unset."""
        return {} if v is None else v

    @field_validator("log_level", mode="before")
    @classmethod
    def parse_log_level(cls, v: Any) -> Any:
        """Accept level names in any case; an explicit null is unset."""
        if v is None:
            return LogLevel.INFO
        if isinstance(v, str):
            return LogLevel(v)
        return v

    @model_validator(mode="after")
    def check(self) -> "ClientConfig":
        """Ensure host and integration are present.

        Raises:
            MissingHostError: If ``host`` is blank.
            MissingIntegrationError: If ``integration`` is blank.
        """
        if not self.host.strip():
            raise MissingHostError
        if not self.integration.strip():
            raise MissingIntegrationError
        return self

    @property
    def interceptors_enabled(self) -> bool:
        """Whether traffic logging hooks should be installed."""
        return self.log_level.enables(LogLevel.INFO)

    def _replace(self, **changes: Any) -> "ClientConfig":
        data = self.model_dump()
        data.update(changes)
        return type(self).model_validate(data)

    def _replace_retry(self, **changes: Any) -> "ClientConfig":
        return self._replace(retry={**self.retry.model_dump(), **changes})

    def _extend_redaction(self, field: str, names: tuple[str, ...]) -> "ClientConfig":
        current = getattr(self.redaction, field)
        redaction = {**self.redaction.model_dump(), field: (*current, *names)}
        return self._replace(redaction=redaction)

    def with_host(self, host: str) -> "ClientConfig":
        """Return a copy using another host.

            config.with_host("http://www.example.com")
        """
        return self._replace(host=host)

    def with_integration(self, integration: str) -> "ClientConfig":
        """Return a copy using another integration name."""
        return self._replace(integration=integration)

    def with_timeout(self, timeout: timedelta) -> "ClientConfig":
        """Return a copy using another timeout, clamped to its range.

            config.with_timeout(timedelta(seconds=20))
        """
        return self._replace(timeout=timeout)

    def with_retry_count(self, count: int) -> "ClientConfig":
        """Return a copy allowing ``count`` retries per request."""
        return self._replace_retry(count=count)

    def with_retry_wait_time(self, wait_time: timedelta) -> "ClientConfig":
        """Return a copy waiting ``wait_time`` between retries."""
        return self._replace_retry(wait_time=wait_time)

    def with_retry_max_wait_time(self, max_wait_time: timedelta) -> "ClientConfig":
        """Return a copy capping the wait between retries."""
        return self._replace_retry(max_wait_time=max_wait_time)

    def with_log_level(self, log_level: LogLevel | str) -> "ClientConfig":
        """Return a copy using another minimum log level."""
        return self._replace(log_level=log_level)

    def with_redacted_query_params(self, *names: str) -> "ClientConfig":
        """Return a copy that also masks the given query parameters."""
        return self._extend_redaction("query_params", names)

    def with_redacted_headers(self, *names: str) -> "ClientConfig":
        """Return a copy that also masks the given headers."""
        return self._extend_redaction("headers", names)

    def with_redacted_request_fields(self, *selectors: str) -> "ClientConfig":
        """Return a copy that also masks the given request body fields."""
        return self._extend_redaction("request", selectors)

    def with_redacted_response_fields(self, *selectors: str) -> "ClientConfig":
        """Return a copy that also masks the given response body fields."""
        return self._extend_redaction("response", selectors)

    def query_params_redactor(self) -> ParamsRedactor:
        """Build the redactor for query parameters."""
        return make_redactor(to_field_set(self.redaction.query_params))

    def headers_redactor(self) -> ParamsRedactor:
        """Build the redactor for headers."""
        return make_redactor(to_field_set(self.redaction.headers))

    def request_body_redactor(self) -> BodyRedactor:
        """Build the redactor for JSON request bodies."""
        return make_body_redactor(self.redaction.request)

    def response_body_redactor(self) -> BodyRedactor:
        """Build the redactor for JSON response bodies."""
        return make_body_redactor(self.redaction.response)
