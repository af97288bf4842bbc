"""CLI commands for inspecting client descriptors."""

import json
import sys
from pathlib import Path

import click

from http_redact.httpclient.config import ClientConfig
from http_redact.httpclient.error_hints import format_validation_error
from http_redact.httpclient.errors import ClientConfigError
from http_redact.httpclient.loader import (
    ConfigLoadError,
    ConfigValidationError,
    load_config,
)
from http_redact.observability.logging import configure_logging
from http_redact.settings import get_settings


def effective_config(config: ClientConfig) -> dict[str, object]:
    """Render a configuration with defaults applied, durations in seconds."""
    return {
        "integration": config.integration,
        "host": config.host,
        "timeout": config.timeout.total_seconds(),
        "retry": {
            "count": config.retry.count,
            "wait_time": config.retry.wait_time.total_seconds(),
            "max_wait_time": config.retry.max_wait_time.total_seconds(),
        },
        "log_level": config.log_level.value,
        "interceptors_enabled": config.interceptors_enabled,
        "ofuscate": {
            "query_params": list(config.redaction.query_params),
            "headers": list(config.redaction.headers),
            "request": list(config.redaction.request),
            "response": list(config.redaction.response),
        },
    }


@click.group()
@click.version_option(version="0.1.0")
def cli() -> None:
    """Redacting HTTP client CLI."""


@cli.command()
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(exists=True, path_type=Path),
    help="Path to the client descriptor (YAML or JSON).",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Print the effective configuration as JSON.",
)
def validate(config_path: Path, json_output: bool) -> None:
    """Validate a client descriptor and show the effective settings."""
    settings = get_settings()
    configure_logging(settings.log_level, json_format=settings.log_json)

    try:
        config = load_config(config_path)
    except ConfigValidationError as e:
        click.echo("Configuration validation failed:", err=True)
        for error in e.errors:
            formatted = format_validation_error(
                location=error["loc"],
                message=error["msg"],
                error_type=error.get("type", "unknown"),
                include_hint=True,
            )
            click.echo(f"  - {formatted}", err=True)
        sys.exit(1)
    except (ConfigLoadError, ClientConfigError) as e:
        click.echo(f"Configuration validation failed: {e}", err=True)
        sys.exit(1)

    rendered = effective_config(config)
    if json_output:
        click.echo(json.dumps(rendered, indent=2))
        return

    click.echo("Configuration is valid!")
    click.echo(f"  Integration: {config.integration}")
    click.echo(f"  Host: {config.host}")
    click.echo(f"  Timeout: {rendered['timeout']}s")
    click.echo(
        f"  Retry: count={config.retry.count} "
        f"wait={config.retry.wait_time.total_seconds()}s "
        f"max_wait={config.retry.max_wait_time.total_seconds()}s"
    )
    click.echo(f"  Log level: {config.log_level.value}")
    click.echo(f"  Traffic logging: {'on' if config.interceptors_enabled else 'off'}")
    redaction = config.redaction
    click.echo(f"  Redacted query params: {', '.join(redaction.query_params) or '-'}")
    click.echo(f"  Redacted headers: {', '.join(redaction.headers) or '-'}")
    click.echo(f"  Redacted request fields: {', '.join(redaction.request) or '-'}")
    click.echo(f"  Redacted response fields: {', '.join(redaction.response) or '-'}")


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
