"""
Application configuration.

Centralizes environment variables, constants, and settings
using dataclasses for type safety and immutability.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class AuthSettings:
    """Bearer token settings."""

    api_token: str = field(
        default_factory=lambda: os.environ.get("API_TOKEN", "")
    )


@dataclass(frozen=True)
class DatabaseSettings:
    """Identity store settings."""

    url: str = field(
        default_factory=lambda: os.environ.get("DATABASE_URL", "sqlite:///identity.db")
    )
    user_table: str = field(
        default_factory=lambda: os.environ.get("USER_TABLE", "user")
    )
    timeout_seconds: float = field(
        default_factory=lambda: float(os.environ.get("DATABASE_TIMEOUT_SECONDS", 5))
    )


@dataclass(frozen=True)
class MailChannelsSettings:
    """MailChannels transactional email API settings."""

    send_url: str = field(
        default_factory=lambda: os.environ.get(
            "MAILCHANNELS_URL", "https://api.mailchannels.net/tx/v1/send"
        ).rstrip("/")
    )
    api_key: Optional[str] = field(
        default_factory=lambda: os.environ.get("MAILCHANNELS_API_KEY") or None
    )
    sender_email: str = field(
        default_factory=lambda: os.environ.get("REMINDER_SENDER_EMAIL", "reminder@birthdays.run")
    )
    sender_name: str = field(
        default_factory=lambda: os.environ.get("REMINDER_SENDER_NAME", "Birthday Reminders")
    )
    timeout_seconds: float = field(
        default_factory=lambda: float(os.environ.get("MAILCHANNELS_TIMEOUT_SECONDS", 10))
    )
    dry_run: bool = field(
        default_factory=lambda: _env_flag("MAILCHANNELS_DRY_RUN")
    )


@dataclass(frozen=True)
class ApiSettings:
    """HTTP surface settings."""

    # Answer failures with 200 like the legacy Worker did
    uniform_error_status: bool = field(
        default_factory=lambda: _env_flag("UNIFORM_ERROR_STATUS")
    )
    cors_origins: str = field(
        default_factory=lambda: os.environ.get("CORS_ORIGINS", "*")
    )


@dataclass(frozen=True)
class Settings:
    """Main application settings."""

    auth: AuthSettings = field(default_factory=AuthSettings)
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    mailchannels: MailChannelsSettings = field(default_factory=MailChannelsSettings)
    api: ApiSettings = field(default_factory=ApiSettings)
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", 8080)))
    debug: bool = field(default_factory=lambda: _env_flag("DEBUG"))


# Singleton settings instance
settings = Settings()
