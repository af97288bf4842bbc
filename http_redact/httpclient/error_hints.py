"""Error hints for client descriptor validation errors.

Provides user-friendly hints with actionable remediation steps
for common validation errors.
"""

from typing import Final


# Mapping of error types to user-friendly hints
ERROR_HINTS: Final[dict[str, str]] = {
    "missing": "This field is required. Please add it to your configuration.",
    "extra_forbidden": "Unknown field. Check the spelling against the documented keys.",
    "enum": "Check the allowed values in the documentation.",
    "int_parsing": "This field must be an integer (whole number).",
    "int_type": "This field must be an integer (whole number).",
    "string_type": "This field must be a text string.",
    "tuple_type": "This field must be a list of strings.",
    "dict_type": "This field must be an object/mapping.",
    "model_type": "This field must be an object/mapping.",
    "time_delta_parsing": "Use a duration such as 10s, 250ms or 1m30s; bare numbers are nanoseconds.",
    "time_delta_type": "Use a duration such as 10s, 250ms or 1m30s; bare numbers are nanoseconds.",
    "value_error": "Check the value format.",
}

# Field-specific hints for more context
FIELD_HINTS: Final[dict[str, str]] = {
    "timeout": "Durations between 5s and 60s are kept; anything else becomes 10s.",
    "count": "Values between 0 and 5 are kept; anything else becomes 3.",
    "wait_time": "Durations between 100ms and 5s are kept; anything else becomes 1s.",
    "max_wait_time": "Durations between 1s and 10s are kept; anything else becomes 2s.",
    "log_level": "Must be one of: debug, info, warn, error, dpanic, panic, fatal.",
    "query_params": "Must be a list of query parameter names.",
    "headers": "Must be a list of header names, written with the casing the transport uses.",
    "request": "Must be a list of field selectors such as 'user.password'.",
    "response": "Must be a list of field selectors such as 'user.ssn'.",
}


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Get a user-friendly hint for a validation error.

    Args:
        error_type: The Pydantic error type (e.g., 'missing', 'enum').
        field_name: Optional field name for field-specific hints.

    Returns:
        A user-friendly hint string.
    """
    if field_name:
        # 'ofuscate.headers.0' -> 'headers'
        parts = [part for part in field_name.split(".") if not part.isdigit()]
        if parts and parts[-1] in FIELD_HINTS:
            return FIELD_HINTS[parts[-1]]

    return ERROR_HINTS.get(
        error_type, "Check the configuration documentation for valid values."
    )


def format_validation_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Format a validation error with optional hint.

    Args:
        location: The error location (e.g., 'retry.count').
        message: The original error message.
        error_type: The error type.
        include_hint: Whether to include a hint.

    Returns:
        Formatted error string.
    """
    base = f"{location}: {message}"
    if include_hint:
        hint = get_error_hint(error_type, location)
        return f"{base}\n    Hint: {hint}"
    return base
