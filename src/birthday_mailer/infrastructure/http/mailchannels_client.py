"""
MailChannels Client.

Sends transactional emails through the MailChannels send API.
One POST per message; failures are reported, never retried.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter

from birthday_mailer.config import settings
from birthday_mailer.core.exceptions import ConfigurationError, DispatchError
from birthday_mailer.infrastructure.logging import get_logger, log_duration


logger = get_logger(__name__)


@dataclass(frozen=True)
class ReminderEmailMessage:
    """An outbound HTML email."""
    to_email: str
    subject: str
    html: str
    from_email: str
    from_name: str

    def to_payload(self) -> Dict[str, Any]:
        """Convert to the MailChannels send payload."""
        return {
            "personalizations": [
                {"to": [{"email": self.to_email}]},
            ],
            "from": {
                "email": self.from_email,
                "name": self.from_name,
            },
            "subject": self.subject,
            "content": [
                {"type": "text/html", "value": self.html},
            ],
        }


@dataclass(frozen=True)
class SendResult:
    """Outcome of an accepted send request."""
    status_code: int
    duration_ms: int
    dry_run: bool = False
    body: Optional[str] = None

    @property
    def success(self) -> bool:
        return 200 <= self.status_code < 300


class MailChannelsClient:
    """
    Client for the MailChannels transactional email API.

    Any network error, timeout or non-2xx answer raises DispatchError.
    """

    def __init__(
        self,
        send_url: Optional[str] = None,
        timeout: Optional[float] = None,
        api_key: Optional[str] = None,
        sender_email: Optional[str] = None,
        sender_name: Optional[str] = None,
        dry_run: Optional[bool] = None,
    ) -> None:
        config = settings.mailchannels
        self._send_url = (send_url or config.send_url).rstrip("/")
        self._timeout = timeout or config.timeout_seconds
        self._api_key = api_key if api_key is not None else config.api_key
        self._sender_email = sender_email or config.sender_email
        self._sender_name = sender_name or config.sender_name
        self._dry_run = config.dry_run if dry_run is None else dry_run
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """Get or create the HTTP session."""
        if self._session is None:
            self._session = requests.Session()

            # No retries: a repeated POST would send a duplicate email
            adapter = HTTPAdapter(max_retries=0, pool_connections=5, pool_maxsize=5)
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)

            self._session.headers.update({
                "Content-Type": "application/json",
                "Accept": "application/json",
            })
            if self._api_key:
                self._session.headers["X-Api-Key"] = self._api_key

        return self._session

    def build_message(self, to: str, subject: str, html: str) -> ReminderEmailMessage:
        return ReminderEmailMessage(
            to_email=to,
            subject=subject,
            html=html,
            from_email=self._sender_email,
            from_name=self._sender_name,
        )

    @log_duration("mailchannels_send")
    def send(self, to: str, subject: str, html: str) -> SendResult:
        """
        Send one HTML email.

        Args:
            to: Recipient address.
            subject: Subject line.
            html: HTML body.

        Returns:
            SendResult for the accepted request.

        Raises:
            ConfigurationError: If no send URL is configured.
            DispatchError: If the request fails or is rejected.
        """
        if not self._send_url:
            raise ConfigurationError("MAILCHANNELS_URL")

        message = self.build_message(to, subject, html)
        params = {"dry-run": "true"} if self._dry_run else None
        start = time.time()

        logger.info(
            "Sending reminder email",
            extra={"extra_fields": {
                "recipient_email": to,
                "subject": subject,
                "dry_run": self._dry_run,
            }}
        )

        try:
            response = self.session.post(
                self._send_url,
                json=message.to_payload(),
                params=params,
                timeout=self._timeout,
            )
            response.raise_for_status()

        except requests.exceptions.Timeout as e:
            duration_ms = int((time.time() - start) * 1000)
            logger.error(
                "MailChannels timeout",
                extra={"extra_fields": {
                    "timeout": self._timeout,
                    "duration_ms": duration_ms,
                }}
            )
            raise DispatchError(f"timeout: {e}", duration_ms=duration_ms) from e

        except requests.exceptions.HTTPError as e:
            duration_ms = int((time.time() - start) * 1000)
            status = e.response.status_code
            body = e.response.text[:500] if e.response.text else None
            logger.error(
                f"MailChannels HTTP error: {status}",
                extra={"extra_fields": {
                    "status_code": status,
                    "response_body": body,
                }}
            )
            raise DispatchError(
                f"rejected with {status}: {body}" if body else f"rejected with {status}",
                status_code=status,
                duration_ms=duration_ms,
            ) from e

        except requests.exceptions.RequestException as e:
            duration_ms = int((time.time() - start) * 1000)
            logger.error(
                f"MailChannels request failed: {e}",
                extra={"extra_fields": {"error_type": type(e).__name__}}
            )
            raise DispatchError(f"request failed: {e}", duration_ms=duration_ms) from e

        return SendResult(
            status_code=response.status_code,
            duration_ms=int((time.time() - start) * 1000),
            dry_run=self._dry_run,
            body=response.text or None,
        )

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "MailChannelsClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


# Global client instance
_mailchannels_client: Optional[MailChannelsClient] = None


def get_mailchannels_client() -> MailChannelsClient:
    """Get global MailChannels client instance."""
    global _mailchannels_client
    if _mailchannels_client is None:
        _mailchannels_client = MailChannelsClient()
    return _mailchannels_client
