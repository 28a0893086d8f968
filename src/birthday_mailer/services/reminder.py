"""
Reminder Service.

Runs one reminder end to end: look up the recipient, compose the
email, dispatch it.
"""

from datetime import datetime
from typing import Optional

from birthday_mailer.api.validation import BirthdayReminderRequest
from birthday_mailer.core.reminder import compose_reminder
from birthday_mailer.infrastructure.database import UserRepository
from birthday_mailer.infrastructure.http import (
    get_mailchannels_client,
    MailChannelsClient,
    SendResult,
)
from birthday_mailer.infrastructure.logging import get_logger


logger = get_logger(__name__)


class ReminderService:
    """
    Service for sending birthday reminders.

    Steps run strictly in order; the email is never sent when the
    lookup fails.
    """

    def __init__(
        self,
        user_repository: Optional[UserRepository] = None,
        mail_client: Optional[MailChannelsClient] = None,
    ) -> None:
        self._user_repo = user_repository or UserRepository()
        self._mail_client = mail_client or get_mailchannels_client()

    def send_reminder(
        self,
        request: BirthdayReminderRequest,
        now: Optional[datetime] = None,
    ) -> SendResult:
        """
        Send the reminder described by a birthday record.

        Args:
            request: Validated birthday reminder request.
            now: Reference instant for the relative phrase.

        Returns:
            SendResult from the email provider.

        Raises:
            UserNotFoundError: If the user or their email is missing.
            UserStoreError: If the identity store cannot be queried.
            DispatchError: If the email provider call fails.
        """
        email = self._user_repo.get_email(request.user_id)
        message = compose_reminder(request, now)

        result = self._mail_client.send(email, message.subject, message.html)

        logger.info(
            "Birthday reminder sent",
            extra={"extra_fields": {
                "birthday_id": request.id,
                "reminder_user_id": request.user_id,
                "provider_status": result.status_code,
                "dry_run": result.dry_run,
            }}
        )
        return result
