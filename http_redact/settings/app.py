"""Application settings powered by Pydantic BaseSettings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HTTP_REDACT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_path: Path | None = Field(
        default=None, description="Path to the client descriptor"
    )
    log_level: str = Field(default="info", description="Process log level")
    log_json: bool = Field(default=True, description="Render logs as JSON")


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
