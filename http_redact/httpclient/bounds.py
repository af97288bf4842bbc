"""Range-clamped settings.

A clamped setting keeps its value while it lies inside a fixed
``[minimum, maximum]`` window and falls back to a fixed default otherwise.
Out-of-range input is normalized, never rejected.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Generic, TypeVar

from http_redact.httpclient.constants import (
    DEFAULT_RETRY_COUNT,
    DEFAULT_RETRY_MAX_WAIT_TIME,
    DEFAULT_RETRY_WAIT_TIME,
    DEFAULT_TIMEOUT,
    MAX_RETRY_COUNT,
    MAX_RETRY_MAX_WAIT_TIME,
    MAX_RETRY_WAIT_TIME,
    MAX_TIMEOUT,
    MIN_RETRY_COUNT,
    MIN_RETRY_MAX_WAIT_TIME,
    MIN_RETRY_WAIT_TIME,
    MIN_TIMEOUT,
)


T = TypeVar("T", int, float, timedelta)


def check_value_in_range(minimum: T, maximum: T, default: T) -> Callable[[T | None], T]:
    """Build a checker that clamps values to a default when out of range.

    The default is assumed to lie inside ``[minimum, maximum]``.

    Args:
        minimum: Smallest accepted value (inclusive).
        maximum: Largest accepted value (inclusive).
        default: Value returned for unset or out-of-range input.

    Returns:
        Function mapping a value to itself or to the default.
    """

    def check(value: T | None) -> T:
        if value is None or value < minimum or value > maximum:
            return default
        return value

    return check


@dataclass(frozen=True)
class SettingBounds(Generic[T]):
    """Fixed bounds and default of a clamped setting."""

    name: str
    minimum: T
    maximum: T
    default: T

    def checker(self) -> Callable[[T | None], T]:
        """Return the clamping function for these bounds."""
        return check_value_in_range(self.minimum, self.maximum, self.default)


TIMEOUT_BOUNDS = SettingBounds("timeout", MIN_TIMEOUT, MAX_TIMEOUT, DEFAULT_TIMEOUT)
RETRY_COUNT_BOUNDS = SettingBounds(
    "retry.count", MIN_RETRY_COUNT, MAX_RETRY_COUNT, DEFAULT_RETRY_COUNT
)
RETRY_WAIT_TIME_BOUNDS = SettingBounds(
    "retry.wait_time", MIN_RETRY_WAIT_TIME, MAX_RETRY_WAIT_TIME, DEFAULT_RETRY_WAIT_TIME
)
RETRY_MAX_WAIT_TIME_BOUNDS = SettingBounds(
    "retry.max_wait_time",
    MIN_RETRY_MAX_WAIT_TIME,
    MAX_RETRY_MAX_WAIT_TIME,
    DEFAULT_RETRY_MAX_WAIT_TIME,
)

check_timeout = TIMEOUT_BOUNDS.checker()
check_retry_count = RETRY_COUNT_BOUNDS.checker()
check_retry_wait_time = RETRY_WAIT_TIME_BOUNDS.checker()
check_retry_max_wait_time = RETRY_MAX_WAIT_TIME_BOUNDS.checker()
