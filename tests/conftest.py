"""Shared fixtures."""

from collections.abc import Iterator

import pytest
import structlog

from http_redact.httpclient.config import ClientConfig
from http_redact.httpclient.metrics import HookMetrics
from tests.helpers.recording_logger import RecordingLogger


@pytest.fixture(autouse=True)
def _reset_state() -> Iterator[None]:
    """Reset logging configuration and metrics around every test."""
    HookMetrics.reset()
    yield
    HookMetrics.reset()
    structlog.reset_defaults()


@pytest.fixture
def recording_logger() -> RecordingLogger:
    """Logger double recording every call."""
    return RecordingLogger()


@pytest.fixture
def config() -> ClientConfig:
    """Configuration redacting one field of every kind."""
    return ClientConfig.model_validate(
        {
            "integration": "svc",
            "host": "http://x",
            "ofuscate": {
                "query_params": ["token"],
                "headers": ["Authorization"],
                "request": ["password"],
                "response": ["user.ssn"],
            },
        }
    )
