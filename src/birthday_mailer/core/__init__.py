"""Core package - Pure business logic with no external dependencies."""

from birthday_mailer.core.exceptions import (
    AuthenticationError,
    BirthdayMailerError,
    BusinessError,
    ConfigurationError,
    DispatchError,
    ExternalServiceError,
    InfrastructureError,
    MalformedRequestError,
    UserNotFoundError,
    UserStoreError,
)
from birthday_mailer.core.reminder import (
    ReminderEmail,
    active_reminder_tags,
    compose_reminder,
    format_birthday_date,
    now_utc,
    relative_time_phrase,
    render_reminder_html,
)

__all__ = [
    # Reminder composition
    "ReminderEmail",
    "active_reminder_tags",
    "compose_reminder",
    "format_birthday_date",
    "now_utc",
    "relative_time_phrase",
    "render_reminder_html",
    # Exceptions
    "AuthenticationError",
    "BirthdayMailerError",
    "BusinessError",
    "ConfigurationError",
    "DispatchError",
    "ExternalServiceError",
    "InfrastructureError",
    "MalformedRequestError",
    "UserNotFoundError",
    "UserStoreError",
]
