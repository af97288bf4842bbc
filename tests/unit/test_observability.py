"""Unit tests for logging configuration and environment settings."""

import io
import json

import pytest
import structlog

from http_redact.observability.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
)
from http_redact.settings import AppSettings


class TestConfigureLogging:
    """Tests for the structlog setup."""

    def test_json_output(self) -> None:
        """Events are rendered as JSON lines with level and timestamp."""
        output = io.StringIO()
        configure_logging("info", output=output)

        get_logger("http_redact").info("http_request", integration="svc")

        event = json.loads(output.getvalue())
        assert event["event"] == "http_request"
        assert event["integration"] == "svc"
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_level_filtering(self) -> None:
        """Client level names map to logging levels."""
        output = io.StringIO()
        configure_logging("warn", output=output)

        log = structlog.get_logger()
        log.info("http_request")
        log.warning("response_body_not_json")

        lines = output.getvalue().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "response_body_not_json"

    def test_request_context(self) -> None:
        """Bound correlation fields appear until cleared."""
        output = io.StringIO()
        configure_logging(output=output)
        log = structlog.get_logger()

        bind_request_context(trace_id="t-1")
        log.info("first")
        clear_request_context("trace_id")
        log.info("second")

        first, second = (json.loads(line) for line in output.getvalue().splitlines())
        assert first["trace_id"] == "t-1"
        assert "trace_id" not in second


class TestAppSettings:
    """Tests for environment settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Unset variables take their defaults."""
        for name in ("CONFIG_PATH", "LOG_LEVEL", "LOG_JSON"):
            monkeypatch.delenv(f"HTTP_REDACT_{name}", raising=False)

        settings = AppSettings(_env_file=None)

        assert settings.config_path is None
        assert settings.log_level == "info"
        assert settings.log_json is True

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Variables are read with the HTTP_REDACT_ prefix."""
        monkeypatch.setenv("HTTP_REDACT_CONFIG_PATH", "/etc/client.yaml")
        monkeypatch.setenv("HTTP_REDACT_LOG_LEVEL", "debug")
        monkeypatch.setenv("HTTP_REDACT_LOG_JSON", "false")

        settings = AppSettings(_env_file=None)

        assert str(settings.config_path) == "/etc/client.yaml"
        assert settings.log_level == "debug"
        assert settings.log_json is False
