"""
Application settings using Pydantic.

Provides environment-based configuration loading with TARGETGRAPH_ prefix.
Export options (filters, indentation) live in options files, see
targetgraph.export.settings.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TARGETGRAPH_",
        extra="ignore",
    )

    # Logging
    log_level: str = "WARNING"
    log_json: bool = False

    # Options file lookup
    settings_file: str = "TargetGraphOptions.yaml"
    fallback_settings_file: str | None = None

    # Export
    output_format: str = "json"


@lru_cache
def get_settings() -> AppSettings:
    """Get cached settings instance."""
    return AppSettings()
