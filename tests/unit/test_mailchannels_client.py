"""
Tests for the MailChannels Client.

The HTTP session is replaced with a mock; no request leaves the process.
"""

from unittest.mock import MagicMock

import pytest
import requests

from birthday_mailer.core.exceptions import ConfigurationError, DispatchError
from birthday_mailer.infrastructure.http import MailChannelsClient


SEND_URL = "https://mail.test/tx/v1/send"


def make_response(status_code: int = 202, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Error", response=response
        )
    return response


class TestMailChannelsClient:
    """Tests for MailChannelsClient.send."""

    @pytest.fixture
    def session(self):
        return MagicMock()

    @pytest.fixture
    def client(self, session):
        client = MailChannelsClient(
            send_url=SEND_URL,
            timeout=3,
            sender_email="reminder@birthdays.run",
            sender_name="Birthday Reminders",
            dry_run=False,
        )
        client._session = session
        return client

    def test_posts_provider_payload(self, client, session):
        """Should POST the personalizations/from/subject/content payload."""
        session.post.return_value = make_response(202)

        result = client.send("ada@example.com", "Ada's Birthday", "<p>hi</p>")

        assert result.success
        assert result.status_code == 202
        session.post.assert_called_once()
        args, kwargs = session.post.call_args
        assert args[0] == SEND_URL
        assert kwargs["timeout"] == 3
        assert kwargs["params"] is None
        assert kwargs["json"] == {
            "personalizations": [{"to": [{"email": "ada@example.com"}]}],
            "from": {"email": "reminder@birthdays.run", "name": "Birthday Reminders"},
            "subject": "Ada's Birthday",
            "content": [{"type": "text/html", "value": "<p>hi</p>"}],
        }

    def test_dry_run_adds_query_flag(self, session):
        client = MailChannelsClient(send_url=SEND_URL, dry_run=True)
        client._session = session
        session.post.return_value = make_response(200)

        result = client.send("ada@example.com", "s", "<p></p>")

        assert result.dry_run is True
        assert session.post.call_args.kwargs["params"] == {"dry-run": "true"}

    @pytest.mark.parametrize("status_code, text", [
        (202, ""),
        (200, "queued, not json"),
    ])
    def test_any_2xx_is_success_whatever_the_body(self, client, session, status_code, text):
        """Success answers are not parsed; only the status decides."""
        session.post.return_value = make_response(status_code, text)

        result = client.send("ada@example.com", "s", "<p></p>")

        assert result.success
        assert result.status_code == status_code
        assert result.body == (text or None)

    def test_http_error_raises_dispatch_error(self, client, session):
        """Non-2xx answers are failures carrying the upstream status."""
        session.post.return_value = make_response(500, "upstream exploded")

        with pytest.raises(DispatchError) as exc_info:
            client.send("ada@example.com", "s", "<p></p>")

        assert exc_info.value.upstream_status == 500
        assert "upstream exploded" in str(exc_info.value)
        assert session.post.call_count == 1

    def test_timeout_raises_dispatch_error(self, client, session):
        session.post.side_effect = requests.exceptions.Timeout("read timed out")

        with pytest.raises(DispatchError) as exc_info:
            client.send("ada@example.com", "s", "<p></p>")

        assert "timeout" in str(exc_info.value)

    def test_connection_error_raises_dispatch_error(self, client, session):
        session.post.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(DispatchError):
            client.send("ada@example.com", "s", "<p></p>")

        assert session.post.call_count == 1

    def test_missing_url_raises_configuration_error(self, session):
        client = MailChannelsClient(send_url=SEND_URL)
        client._send_url = ""
        client._session = session

        with pytest.raises(ConfigurationError):
            client.send("ada@example.com", "s", "<p></p>")

        session.post.assert_not_called()


class TestSession:
    """Tests for the lazily created session."""

    def test_sets_json_and_api_key_headers(self):
        client = MailChannelsClient(send_url=SEND_URL, api_key="key-123")

        session = client.session

        assert session.headers["Content-Type"] == "application/json"
        assert session.headers["X-Api-Key"] == "key-123"
        client.close()

    def test_does_not_retry(self):
        client = MailChannelsClient(send_url=SEND_URL)

        adapter = client.session.get_adapter("https://")

        assert adapter.max_retries.total == 0
        client.close()
