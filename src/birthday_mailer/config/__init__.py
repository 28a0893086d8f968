"""Configuration package."""

from birthday_mailer.config.settings import (
    ApiSettings,
    AuthSettings,
    DatabaseSettings,
    MailChannelsSettings,
    Settings,
    settings,
)

__all__ = [
    "ApiSettings",
    "AuthSettings",
    "DatabaseSettings",
    "MailChannelsSettings",
    "Settings",
    "settings",
]
