"""Configuration loader for client descriptors.

Descriptors are YAML files (JSON documents are valid YAML too) shaped as::

    integration: payments
    host: https://api.example.com
    timeout: 15s
    retry:
      count: 2
      wait_time: 500ms
      max_wait_time: 3s
    log_level: info
    ofuscate:
      query_params: [token]
      headers: [Authorization]
      request: [card.number]
      response: [user.ssn]
"""

import time
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from http_redact.httpclient.config import ClientConfig
from http_redact.httpclient.constants import COMPONENT_HTTP_CLIENT
from http_redact.settings import AppSettings


logger = structlog.get_logger()


class ConfigLoadError(Exception):
    """Raised when a descriptor cannot be read or parsed."""

    def __init__(self, message: str, file_path: str) -> None:
        """Initialize the error.

        Args:
            message: What went wrong.
            file_path: Path to the descriptor.
        """
        self.file_path = file_path
        super().__init__(f"{file_path}: {message}")


class ConfigValidationError(Exception):
    """Raised when descriptor validation fails."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: List of validation error details.
            file_path: Path to the file that failed validation.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")


def _error_details(error: ValidationError) -> list[dict[str, str]]:
    return [
        {
            "loc": ".".join(str(loc) for loc in err["loc"]),
            "msg": err["msg"],
            "type": err["type"],
        }
        for err in error.errors()
    ]


def parse_config(data: Mapping[str, Any], file_path: str = "<memory>") -> ClientConfig:
    """Validate an already-parsed descriptor.

    Args:
        data: Descriptor mapping.
        file_path: Where the descriptor came from, for error reporting.

    Returns:
        Validated client configuration.

    Raises:
        ConfigValidationError: If a field has an invalid type or value.
        MissingHostError: If ``host`` is blank.
        MissingIntegrationError: If ``integration`` is blank.
    """
    try:
        return ClientConfig.model_validate(data)
    except ValidationError as e:
        details = _error_details(e)
        logger.error(
            "client_config_validation_failed",
            component=COMPONENT_HTTP_CLIENT,
            file_path=file_path,
            validation_error_count=len(details),
            errors=details,
        )
        raise ConfigValidationError(details, file_path) from e


def load_config(path: Path | str) -> ClientConfig:
    """Load and validate a client descriptor file.

    Args:
        path: Path to a YAML or JSON descriptor.

    Returns:
        Validated client configuration.

    Raises:
        ConfigLoadError: If the file is missing, malformed or not a mapping.
        ConfigValidationError: If a field has an invalid type or value.
        MissingHostError: If ``host`` is blank.
        MissingIntegrationError: If ``integration`` is blank.
    """
    file_path = Path(path)
    start_time = time.perf_counter()
    log = logger.bind(component=COMPONENT_HTTP_CLIENT, file_path=str(file_path))

    try:
        content = file_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigLoadError("file not found", str(file_path)) from e

    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"invalid YAML: {e}", str(file_path)) from e

    if not isinstance(data, dict):
        msg = f"expected a mapping at the top level, got {type(data).__name__}"
        raise ConfigLoadError(msg, str(file_path))

    config = parse_config(data, str(file_path))
    log.info(
        "client_config_loaded",
        integration=config.integration,
        config_load_duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
    )
    return config


def load_config_from_settings(settings: AppSettings | None = None) -> ClientConfig:
    """Load the descriptor named by the environment settings.

    Args:
        settings: Settings instance (default: read from the environment).

    Returns:
        Validated client configuration.

    Raises:
        ConfigLoadError: If no descriptor path is configured.
    """
    settings = settings if settings is not None else AppSettings()
    if settings.config_path is None:
        msg = "HTTP_REDACT_CONFIG_PATH is not set"
        raise ConfigLoadError(msg, "<environment>")
    return load_config(settings.config_path)
