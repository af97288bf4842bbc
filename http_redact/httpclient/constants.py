"""Constants for the redacting HTTP client layer.

Centralizes the redaction marker and the fixed bounds for every
range-clamped client setting.
"""

from datetime import timedelta


# Redaction
REDACTED_VALUE = "XXX"
VALUE_SEPARATOR = ","
SELECTOR_SEPARATOR = "."

# Timeout bounds
DEFAULT_TIMEOUT = timedelta(seconds=10)
MIN_TIMEOUT = timedelta(seconds=5)
MAX_TIMEOUT = timedelta(seconds=60)

# Retry count bounds
DEFAULT_RETRY_COUNT = 3
MIN_RETRY_COUNT = 0
MAX_RETRY_COUNT = 5

# Wait between retries
DEFAULT_RETRY_WAIT_TIME = timedelta(seconds=1)
MIN_RETRY_WAIT_TIME = timedelta(milliseconds=100)
MAX_RETRY_WAIT_TIME = timedelta(seconds=5)

# Upper bound of the wait between retries
DEFAULT_RETRY_MAX_WAIT_TIME = timedelta(seconds=2)
MIN_RETRY_MAX_WAIT_TIME = timedelta(seconds=1)
MAX_RETRY_MAX_WAIT_TIME = timedelta(seconds=10)

# Request extension key carrying per-call log context
LOG_CONTEXT_EXTENSION = "log_context"

# Event names
EVENT_HTTP_REQUEST = "http_request"
EVENT_HTTP_RESPONSE = "http_response"
COMPONENT_HTTP_CLIENT = "http_client"
