"""Configuration system for auctiondash.

Uses pydantic-settings to load configuration from environment variables
and .env files. Without Supabase credentials the app falls back to a
local SQLite store under ``data_dir``.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Environment variables are prefixed with AUCTIONDASH_ (e.g., AUCTIONDASH_SUPABASE_URL).
    """

    model_config = SettingsConfigDict(
        env_prefix="AUCTIONDASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Hosted table store (Supabase / PostgREST)
    supabase_url: str | None = Field(
        default=None,
        description="Project URL, e.g. https://xyz.supabase.co",
    )
    supabase_key: str | None = Field(
        default=None,
        description="Anon or service key sent as apikey/Bearer token",
    )
    table_name: str = Field(
        default="properties",
        description="Table holding property records",
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="HTTP timeout in seconds for backend calls",
    )

    # Local fallback store
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory for the local SQLite store",
    )

    # Form defaults
    default_acquisition_tax_rate: float = Field(
        default=1.1,
        description="Acquisition tax rate (%) pre-filled on the registration form",
    )

    log_level: str = Field(default="INFO", description="Root log level")


# Singleton instance for easy import
config = Settings()
