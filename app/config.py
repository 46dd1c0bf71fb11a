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
        default="sqlite:///./booknex.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        default="change-me",
        description="Secret key used to verify the bearer tokens issued to recipients",
        min_length=1,
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    service_role_key: str | None = Field(
        default=None,
        description="Service credential required by the function endpoints when set",
    )
    vapid_public_key: str | None = Field(
        default=None,
        description="Public VAPID key shared with browsers when they subscribe",
    )
    vapid_private_key: str | None = Field(
        default=None,
        description="Private VAPID key used to sign push requests",
    )
    vapid_subject: str = Field(
        default="mailto:admin@booknex.com",
        description="Contact claim sent to push services with every request",
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to interpret booking dates and times",
    )
    cleanup_interval_minutes: int = Field(
        default=60,
        description="Minutes between booking cleanup runs; 0 disables the scheduler",
        ge=0,
    )
    push_max_workers: int = Field(
        default=8,
        description="Maximum number of parallel push deliveries per fanout",
        gt=0,
    )
    push_ttl_seconds: int = Field(
        default=86400,
        description="Time-to-live requested from push services for each message",
        ge=0,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API from a browser",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @model_validator(mode="after")
    def _validate_vapid_pair(self) -> "Settings":
        if bool(self.vapid_public_key) ^ bool(self.vapid_private_key):
            raise ValueError(
                "VAPID_PUBLIC_KEY and VAPID_PRIVATE_KEY must both be provided to enable push"
            )
        if not self.vapid_subject.startswith(("mailto:", "https://")):
            raise ValueError("VAPID_SUBJECT must be a mailto: or https:// URI")
        return self

    @property
    def push_enabled(self) -> bool:
        return bool(self.vapid_public_key and self.vapid_private_key)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
