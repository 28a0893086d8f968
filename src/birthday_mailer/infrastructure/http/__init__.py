"""
HTTP Client Package.

External service clients:
- MailChannels transactional email API
"""

from birthday_mailer.infrastructure.http.mailchannels_client import (
    get_mailchannels_client,
    MailChannelsClient,
    ReminderEmailMessage,
    SendResult,
)


__all__ = [
    "get_mailchannels_client",
    "MailChannelsClient",
    "ReminderEmailMessage",
    "SendResult",
]
