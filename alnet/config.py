"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./alnet.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        default="change-me",
        description="Secret key used to verify bearer tokens",
        min_length=1,
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to evaluate quiet hours and timestamps",
    )
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma separated list of origins allowed by CORS",
    )
    public_base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the web client, used to build links in emails",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    push_gateway_url: str | None = Field(
        default=None,
        description="HTTP endpoint accepting Expo-style push messages",
    )
    push_gateway_token: str | None = Field(
        default=None,
        description="Optional bearer token sent to the push gateway",
    )
    push_timeout_seconds: float = Field(default=10.0, gt=0)
    queue_max_attempts: int = Field(
        default=3,
        description="Attempts made for each delivery job before it is parked as failed",
        ge=1,
    )
    queue_backoff_seconds: float = Field(
        default=1.0,
        description="Base delay of the exponential retry backoff",
        gt=0,
    )
    queue_active_timeout_seconds: float = Field(
        default=300.0,
        description="Seconds a claimed job may stay active before another worker reclaims it",
        gt=0,
    )
    queue_completed_retention_hours: int = Field(default=24, ge=0)
    queue_completed_retention_count: int = Field(default=1000, ge=0)
    queue_failed_retention_days: int = Field(default=7, ge=0)
    queue_poll_interval_seconds: float = Field(default=1.0, gt=0)
    notification_retention_days: int = Field(default=30, ge=1)

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
