"""Duration parsing for configuration descriptors.

Descriptors written for the same client in other services express durations
as unit-suffixed strings such as ``"10s"``, ``"250ms"`` or ``"1m30s"``, or
as a bare number of nanoseconds.
"""

import re
from datetime import timedelta


_UNIT_SECONDS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_ZERO = frozenset({"0", "+0", "-0"})
_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")
_DURATION = re.compile(r"[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|ms|s|m|h))+")


def parse_duration(value: str) -> timedelta:
    """Parse a unit-suffixed duration string.

    Args:
        value: Duration such as ``"1.5s"``, ``"100ms"`` or ``"-1h2m"``.
            ``"0"`` is accepted without a unit.

    Returns:
        The parsed duration.

    Raises:
        ValueError: If the string is not a valid duration.
    """
    text = value.strip()
    if text in _ZERO:
        return timedelta(0)

    if not _DURATION.fullmatch(text):
        msg = f"Invalid duration: {value!r}"
        raise ValueError(msg)

    sign = -1 if text.startswith("-") else 1
    seconds = sum(
        float(number) * _UNIT_SECONDS[unit]
        for number, unit in _COMPONENT.findall(text)
    )
    return timedelta(seconds=sign * seconds)


def coerce_duration(value: object) -> object:
    """Convert descriptor duration values to ``timedelta``.

    Unit-suffixed strings are parsed; bare numbers are nanoseconds, as in
    the descriptors shared with other services. Any other value is
    returned untouched so that the model's own ``timedelta`` parsing
    (ISO 8601, ``timedelta`` instances) still applies.

    Args:
        value: Raw descriptor value.

    Returns:
        A ``timedelta`` for strings with units and for numbers, otherwise
        the input.

    Raises:
        ValueError: If a number does not fit in a ``timedelta``.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int | float):
        try:
            return timedelta(microseconds=value / 1000)
        except OverflowError as e:
            msg = f"Duration out of range: {value!r}"
            raise ValueError(msg) from e
    if isinstance(value, str):
        text = value.strip()
        if text in _ZERO or _DURATION.fullmatch(text):
            return parse_duration(text)
    return value
