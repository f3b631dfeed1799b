"""
Application configuration using Pydantic Settings.

Typed settings for the tax integration, read from environment variables
and an optional .env file. Business code never reads these directly; the
AvaTax section is frozen into a per-call snapshot by the tax service.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fallback client tag sent in every GetTax request
DEFAULT_CLIENT_VERSION = "a0o33000004FH8l"


class DatabaseSettings(BaseSettings):
    """Database connection settings."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    url: str | None = Field(
        default=None,
        alias="DATABASE_URL",
        description="Full database URL (takes precedence over individual params)",
    )

    name: str = Field(default="avatax_orders", description="Database name")
    user: str = Field(default="postgres", description="Database user")
    password: SecretStr = Field(default=SecretStr("postgres"), description="Database password")
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port", ge=1, le=65535)

    @property
    def connection_url(self) -> str:
        """Database URL, preferring DATABASE_URL over the individual parts."""
        if self.url:
            return self.url
        return (
            f"postgresql://{self.user}:{self.password.get_secret_value()}"
            f"@{self.host}:{self.port}/{self.name}"
        )


class AvataxSettings(BaseSettings):
    """
    AvaTax account and feature toggles.

    Boolean toggles accept the usual truthy strings ("true", "1", "yes").
    The origin address is optional; when its country is unset no origin
    address is sent with tax requests.
    """

    model_config = SettingsConfigDict(env_prefix="AVATAX_")

    company_code: str = Field(default="", description="AvaTax company code")
    tax_calculation: bool = Field(default=True, description="Send orders to AvaTax")
    document_commit: bool = Field(default=False, description="Commit final documents")
    endpoint: str = Field(
        default="https://development.avalara.net",
        description="AvaTax service base URL",
    )
    account: str = Field(default="", description="AvaTax account number")
    license_key: SecretStr = Field(default=SecretStr(""), description="AvaTax license key")
    client_version: str = Field(
        default=DEFAULT_CLIENT_VERSION,
        description="Client tag reported to AvaTax",
    )
    timeout: float = Field(default=5.0, gt=0, description="Per-request timeout in seconds")

    origin_line1: str | None = Field(default=None, description="Ship-from street line 1")
    origin_line2: str | None = Field(default=None, description="Ship-from street line 2")
    origin_city: str | None = Field(default=None, description="Ship-from city")
    origin_region: str | None = Field(default=None, description="Ship-from region/state code")
    origin_postal_code: str | None = Field(default=None, description="Ship-from postal code")
    origin_country: str | None = Field(default=None, description="Ship-from ISO country code")

    @field_validator("endpoint")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Service paths are appended with a leading slash."""
        return v.rstrip("/")

    @field_validator("client_version", mode="before")
    @classmethod
    def default_blank_client_version(cls, v: str | None) -> str:
        """Blank values fall back to the default client tag."""
        if v is None or not str(v).strip():
            return DEFAULT_CLIENT_VERSION
        return str(v)

    @property
    def is_configured(self) -> bool:
        """Check if AvaTax credentials are configured."""
        return bool(self.account and self.license_key.get_secret_value())


class LoggingSettings(BaseSettings):
    """structlog output settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Minimum log level")
    json_format: bool = Field(default=False, description="Render logs as JSON")


class Settings(BaseSettings):
    """
    Main application settings.

    Aggregates all configuration sections and provides environment-specific
    settings loading.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")
    secret_key: SecretStr = Field(
        default=SecretStr("django-insecure-change-me-in-production"),
        description="Django secret key",
    )
    allowed_hosts: list[str] = Field(
        default_factory=lambda: ["localhost", "127.0.0.1"],
        description="Allowed hosts",
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    avatax: AvataxSettings = Field(default_factory=AvataxSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("allowed_hosts", mode="before")
    @classmethod
    def parse_allowed_hosts(cls, v: str | list[str]) -> list[str]:
        """Parse allowed hosts from comma-separated string or list."""
        if isinstance(v, str):
            return [h.strip() for h in v.split(",") if h.strip()]
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Configured Settings instance.
    """
    return Settings()
