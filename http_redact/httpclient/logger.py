"""Logger interface used by the HTTP client hooks."""

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

import structlog

from http_redact.httpclient.errors import LoggedPanicError


LogContext = Mapping[str, Any] | None
ContextReader = Callable[[LogContext], dict[str, Any]]


@runtime_checkable
class HttpLogger(Protocol):
    """Protocol for loggers accepted by the client hooks.

    Every method takes a per-call context handle, an event message and
    key/value fields. The hooks only emit at ``info`` and ``warn``.
    """

    def debug(self, context: LogContext, message: str, **fields: Any) -> None: ...

    def info(self, context: LogContext, message: str, **fields: Any) -> None: ...

    def warn(self, context: LogContext, message: str, **fields: Any) -> None: ...

    def error(self, context: LogContext, message: str, **fields: Any) -> None: ...

    def dpanic(self, context: LogContext, message: str, **fields: Any) -> None: ...

    def panic(self, context: LogContext, message: str, **fields: Any) -> None: ...

    def fatal(self, context: LogContext, message: str, **fields: Any) -> None: ...


def read_context(context: LogContext) -> dict[str, Any]:  # noqa: ARG001
    """Extract extra log fields from a per-call context.

    No context properties are logged yet; pass a custom reader to
    ``ClientLogger`` to attach some.
    """
    return {}


class ClientLogger:
    """structlog-backed ``HttpLogger``.

    Default fields are bound once at construction. Fields produced by the
    context reader are merged into every event, below the call's own
    fields.
    """

    def __init__(
        self,
        logger: structlog.typing.FilteringBoundLogger | None = None,
        *,
        context_reader: ContextReader = read_context,
        development: bool = False,
        **default_fields: Any,
    ) -> None:
        """Initialize the logger.

        Args:
            logger: Underlying structlog logger (default: module logger).
            context_reader: Maps a call's context to extra fields.
            development: Raise on ``dpanic`` after logging.
            **default_fields: Fields bound to every event.
        """
        base = logger if logger is not None else structlog.get_logger()
        self._log = base.bind(**default_fields)
        self._read_context = context_reader
        self._development = development

    def _fields(self, context: LogContext, fields: dict[str, Any]) -> dict[str, Any]:
        return {**self._read_context(context), **fields}

    def debug(self, context: LogContext, message: str, **fields: Any) -> None:
        self._log.debug(message, **self._fields(context, fields))

    def info(self, context: LogContext, message: str, **fields: Any) -> None:
        self._log.info(message, **self._fields(context, fields))

    def warn(self, context: LogContext, message: str, **fields: Any) -> None:
        self._log.warning(message, **self._fields(context, fields))

    def error(self, context: LogContext, message: str, **fields: Any) -> None:
        self._log.error(message, **self._fields(context, fields))

    def dpanic(self, context: LogContext, message: str, **fields: Any) -> None:
        """Log at critical level; raise only in development mode."""
        self._log.critical(message, **self._fields(context, fields))
        if self._development:
            raise LoggedPanicError(message)

    def panic(self, context: LogContext, message: str, **fields: Any) -> None:
        """Log at critical level, then raise ``LoggedPanicError``."""
        self._log.critical(message, **self._fields(context, fields))
        raise LoggedPanicError(message)

    def fatal(self, context: LogContext, message: str, **fields: Any) -> None:
        """Log at critical level, then exit the process."""
        self._log.critical(message, **self._fields(context, fields))
        raise SystemExit(1)
