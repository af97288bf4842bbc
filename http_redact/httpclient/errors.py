"""Domain-specific error types for the redacting HTTP client."""


class ClientConfigError(Exception):
    """Base class for client configuration failures."""


class MissingHostError(ClientConfigError):
    """The host attribute is empty or missing."""

    def __init__(self) -> None:
        super().__init__("host attribute is needed")


class MissingIntegrationError(ClientConfigError):
    """The integration attribute is empty or missing."""

    def __init__(self) -> None:
        super().__init__("integration attribute is needed")


class BodyRedactionError(Exception):
    """A body could not be redacted because of its shape.

    Attributes:
        body_type: Name of the type that was received.
    """

    def __init__(self, body_type: str) -> None:
        super().__init__(f"Cannot redact body of type {body_type}; expected a JSON object")
        self.body_type = body_type


class LoggedPanicError(Exception):
    """Raised after a panic-level message has been logged."""
