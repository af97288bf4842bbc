"""Unit tests for hook metrics."""

from concurrent.futures import ThreadPoolExecutor

from http_redact.httpclient.metrics import HookMetrics


class TestHookMetrics:
    """Tests for the HookMetrics singleton."""

    def test_singleton(self) -> None:
        """get_instance returns the same object until reset."""
        first = HookMetrics.get_instance()

        assert HookMetrics.get_instance() is first
        HookMetrics.reset()
        assert HookMetrics.get_instance() is not first

    def test_counts_by_direction(self) -> None:
        """Failures are counted per direction."""
        metrics = HookMetrics.get_instance()

        metrics.record_request()
        metrics.record_response()
        metrics.record_response()
        metrics.record_parse_failure("response")
        metrics.record_parse_failure("response")
        metrics.record_redaction_failure("request")

        assert metrics.to_dict() == {
            "requests_logged_total": 1,
            "responses_logged_total": 2,
            "body_parse_failures_total": {"response": 2},
            "body_redaction_failures_total": {"request": 1},
        }

    def test_to_dict_is_a_snapshot(self) -> None:
        """Later updates do not leak into earlier snapshots."""
        metrics = HookMetrics.get_instance()
        snapshot = metrics.to_dict()

        metrics.record_parse_failure("request")

        assert snapshot["body_parse_failures_total"] == {}

    def test_concurrent_updates_are_counted(self) -> None:
        """No update is lost when many threads record at once."""
        metrics = HookMetrics.get_instance()

        def record(_: int) -> None:
            for _ in range(200):
                metrics.record_request()
                metrics.record_parse_failure("response")

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(record, range(8)))

        assert metrics.requests_logged_total == 1600
        assert metrics.body_parse_failures_total == {"response": 1600}
