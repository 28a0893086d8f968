"""
Infrastructure Layer.

This layer contains all external dependencies and adapters:
- Logging configuration
- Identity store repositories (SQLAlchemy)
- HTTP clients (MailChannels)
"""

from birthday_mailer.infrastructure.logging import (
    get_logger,
    log_duration,
    log_request_context,
    logger,
    mask_email,
    StructuredLogger,
)


__all__ = [
    "get_logger",
    "log_duration",
    "log_request_context",
    "logger",
    "mask_email",
    "StructuredLogger",
]
