"""Redaction utilities for logging HTTP traffic.

Two kinds of redactors are built from a configured policy:

- Param redactors flatten a multi-value map (headers, query parameters) into
  a ``name -> value`` map, masking configured names.
- Body redactors mask the values located by dotted selectors inside a
  parsed JSON object.

Both are built once and are safe to call concurrently: they only close over
immutable state, and a body redactor only mutates the working copy it is
handed.
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from http_redact.httpclient.constants import (
    REDACTED_VALUE,
    SELECTOR_SEPARATOR,
    VALUE_SEPARATOR,
)
from http_redact.httpclient.errors import BodyRedactionError


ParamsRedactor = Callable[[Mapping[str, Sequence[str]]], dict[str, str]]
BodyRedactor = Callable[[Any], dict[str, Any] | None]

# A located value: its parent container and the key or index inside it
Location = tuple[dict[str, Any] | list[Any], str | int]


def to_field_set(names: Iterable[str]) -> frozenset[str]:
    """Index configured names for constant-time membership tests.

    Args:
        names: Configured names, in any order, duplicates allowed.

    Returns:
        Frozen set of the names.
    """
    return frozenset(names)


def make_redactor(field_set: frozenset[str]) -> ParamsRedactor:
    """Build a redactor for multi-value maps such as headers.

    Names are compared exactly as configured, without case folding.

    Args:
        field_set: Names whose values must be masked.

    Returns:
        Function mapping each input name to the redaction marker when the
        name is in ``field_set``, otherwise to its values joined by commas.
    """

    def redact(params: Mapping[str, Sequence[str]]) -> dict[str, str]:
        result: dict[str, str] = {}
        for key, values in params.items():
            if key in field_set:
                result[key] = REDACTED_VALUE
            else:
                result[key] = VALUE_SEPARATOR.join(values)
        return result

    return redact


def make_body_redactor(selectors: Sequence[str]) -> BodyRedactor:
    """Build a redactor for parsed JSON bodies.

    Each selector is a key name or a dotted path. Inside lists, a numeric
    segment selects one element and any other segment applies the rest of
    the path to every element. Selectors that do not resolve are ignored.

    Args:
        selectors: Ordered selectors to mask.

    Returns:
        Function that masks the selected values in place and returns the
        body. ``None`` is returned untouched.

    Raises:
        BodyRedactionError: From the returned function, when the body is
            not a JSON object.
    """
    paths = tuple(
        tuple(selector.split(SELECTOR_SEPARATOR)) for selector in selectors if selector
    )

    def redact_body(body: Any) -> dict[str, Any] | None:
        if body is None:
            return None
        if not isinstance(body, dict):
            raise BodyRedactionError(type(body).__name__)

        for path in paths:
            for container, key in locate(body, path):
                container[key] = REDACTED_VALUE  # type: ignore[index]
        return body

    return redact_body


def locate(node: Any, path: tuple[str, ...]) -> list[Location]:
    """Resolve a selector path to the locations it designates.

    Resolution walks an explicit stack, so arbitrarily deep bodies cannot
    exhaust the interpreter's recursion limit.

    Args:
        node: Root JSON node.
        path: Selector segments.

    Returns:
        Locations of every matched value; empty when nothing matches.
    """
    locations: list[Location] = []
    # (node, offset of the first unresolved segment)
    stack: list[tuple[Any, int]] = [(node, 0)]

    while stack:
        current, offset = stack.pop()
        head = path[offset]
        last = offset == len(path) - 1

        if isinstance(current, dict):
            if not last:
                remaining = SELECTOR_SEPARATOR.join(path[offset:])
                if remaining in current:
                    locations.append((current, remaining))
            if head in current:
                if last:
                    locations.append((current, head))
                else:
                    stack.append((current[head], offset + 1))

        elif isinstance(current, list):
            if head.isdigit():
                index = int(head)
                if index >= len(current):
                    continue
                if last:
                    locations.append((current, index))
                else:
                    stack.append((current[index], offset + 1))
            else:
                stack.extend((item, offset) for item in reversed(current))

    return locations
