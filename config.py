"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).
Sub-configs are composed into AppSettings by a model_validator so each
concern can also be instantiated on its own (useful in tests).
"""

from __future__ import annotations

from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongodb_uri: str
    db_name: str = "auth-service"


class RedisSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Optional - without Redis the OTP state lives in process memory,
    # which is only correct for a single instance. When set, Redis must be
    # reachable at startup.
    redis_uri: Optional[str] = None


class EmailSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    zepto_api_token: str = ""
    zepto_from_email: str = "noreply@example.com"
    zepto_from_name: str = "Auth Service"
    email_timeout_seconds: float = 5.0


class OtpSettings(BaseSettings):
    """TTLs (seconds) and thresholds for the OTP abuse-control state machine."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    otp_ttl_seconds: int = 300
    otp_attempts_ttl_seconds: int = 300
    otp_cooldown_seconds: int = 60
    otp_spam_lock_seconds: int = 3600
    otp_account_lock_seconds: int = 1800
    otp_request_window_seconds: int = 3600
    # How long a verified password-reset OTP stays redeemable
    otp_reset_grant_seconds: int = 600

    # Counter values at which the next event escalates to a lock
    otp_max_requests: int = 2
    otp_max_failed_attempts: int = 2


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "development"
    app_url: str = "http://localhost:3000"
    app_name: str = "auth-service"

    cors_origins: list[str] = ["http://localhost:3000"]

    # OpenAPI docs URL (None disables the docs UI in production)
    docs_url: Optional[str] = "/docs"

    db: Optional[DatabaseSettings] = None
    redis: Optional[RedisSettings] = None
    email: Optional[EmailSettings] = None
    otp: Optional[OtpSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        if self.db is None:
            self.db = DatabaseSettings()
        if self.redis is None:
            self.redis = RedisSettings()
        if self.email is None:
            self.email = EmailSettings()
        if self.otp is None:
            self.otp = OtpSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()
        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
