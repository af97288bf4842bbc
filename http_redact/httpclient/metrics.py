"""Metrics collection for the traffic logging hooks."""

import threading
from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class HookMetrics:
    """Metrics for the request/response logging hooks.

    Singleton class that counts logged traffic and the bodies that could
    not be logged. Hooks run on every thread issuing requests, so updates
    are serialized by a lock.
    """

    requests_logged_total: int = 0
    responses_logged_total: int = 0
    body_parse_failures_total: dict[str, int] = field(default_factory=dict)
    body_redaction_failures_total: dict[str, int] = field(default_factory=dict)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    _instance: ClassVar["HookMetrics | None"] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def get_instance(cls) -> "HookMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        with cls._instance_lock:
            cls._instance = None

    def record_request(self) -> None:
        """Record a logged request."""
        with self._lock:
            self.requests_logged_total += 1

    def record_response(self) -> None:
        """Record a logged response."""
        with self._lock:
            self.responses_logged_total += 1

    def record_parse_failure(self, direction: str) -> None:
        """Record a body that was not valid JSON.

        Args:
            direction: ``request`` or ``response``.
        """
        with self._lock:
            self.body_parse_failures_total[direction] = (
                self.body_parse_failures_total.get(direction, 0) + 1
            )

    def record_redaction_failure(self, direction: str) -> None:
        """Record a body that could not be redacted or read.

        Args:
            direction: ``request`` or ``response``.
        """
        with self._lock:
            self.body_redaction_failures_total[direction] = (
                self.body_redaction_failures_total.get(direction, 0) + 1
            )

    def to_dict(self) -> dict[str, int | dict[str, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        with self._lock:
            return {
                "requests_logged_total": self.requests_logged_total,
                "responses_logged_total": self.responses_logged_total,
                "body_parse_failures_total": dict(self.body_parse_failures_total),
                "body_redaction_failures_total": dict(
                    self.body_redaction_failures_total
                ),
            }
