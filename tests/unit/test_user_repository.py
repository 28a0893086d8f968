"""
Tests for the User Repository.

Runs the lookup against an in-memory SQLite identity store.
"""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from birthday_mailer.core.exceptions import UserNotFoundError, UserStoreError
from birthday_mailer.config import DatabaseSettings, Settings
from birthday_mailer.infrastructure.database import (
    DatabaseClient,
    UserRecord,
    UserRepository,
)
from birthday_mailer.infrastructure.database import repositories
from birthday_mailer.infrastructure.database.repositories import _timeout_connect_args


class TestUserRepository:
    """Tests for UserRepository."""

    @pytest.fixture
    def repository(self, engine):
        return UserRepository(engine=engine)

    def test_find_by_id_returns_record(self, repository):
        """Should return the matching row as a UserRecord."""
        user = repository.find_by_id("u1")

        assert user == UserRecord(user_id="u1", username="ada", email="ada@example.com")

    def test_find_by_id_returns_none_for_unknown_id(self, repository):
        """Should return None rather than fail when no row matches."""
        assert repository.find_by_id("missing") is None

    def test_get_email_returns_address(self, repository):
        assert repository.get_email("u1") == "ada@example.com"

    def test_get_email_raises_for_unknown_user(self, repository):
        """Should raise UserNotFoundError when no row matches."""
        with pytest.raises(UserNotFoundError) as exc_info:
            repository.get_email("missing")

        assert exc_info.value.user_id == "missing"

    def test_get_email_raises_for_user_without_email(self, repository):
        """Should raise UserNotFoundError when the row has an empty email."""
        with pytest.raises(UserNotFoundError) as exc_info:
            repository.get_email("u2")

        assert "no email" in exc_info.value.reason

    def test_get_email_rejects_empty_id(self, repository):
        with pytest.raises(UserNotFoundError):
            repository.get_email("")

    def test_query_failure_raises_store_error(self):
        """Database errors surface as UserStoreError."""
        engine = MagicMock()
        repository = UserRepository(engine=engine)
        repository._session_factory = MagicMock(
            side_effect=OperationalError("SELECT", {}, Exception("database is locked"))
        )

        with pytest.raises(UserStoreError) as exc_info:
            repository.find_by_id("u1")

        assert "OperationalError" in str(exc_info.value)
        assert "SELECT" not in str(exc_info.value)
        assert "database is locked" not in str(exc_info.value)

    def test_id_is_matched_exactly(self, repository):
        """Ids are not trimmed before the lookup."""
        assert repository.find_by_id(" u1 ") is None

    def test_unknown_user_is_not_logged_as_failure(self, repository):
        """A missing user is a normal outcome, not an error log."""
        with patch("birthday_mailer.infrastructure.logging.get_logger") as mock_get_logger:
            with pytest.raises(UserNotFoundError):
                repository.get_email("missing")

        op_logger = mock_get_logger.return_value
        op_logger.error.assert_not_called()
        op_logger.info.assert_called_once()


class TestUserRecord:
    """Tests for UserRecord."""

    def test_has_email(self):
        assert UserRecord(user_id="u1", username="ada", email="ada@example.com").has_email
        assert not UserRecord(user_id="u2", username="grace", email="   ").has_email


class TestQueryTimeouts:
    """Tests for the driver arguments bounding store queries."""

    @pytest.mark.parametrize("url, expected", [
        ("sqlite:///identity.db", {"timeout": 2.5}),
        ("postgresql://db/identity", {
            "connect_timeout": 2,
            "options": "-c statement_timeout=2500",
        }),
        ("postgresql+psycopg://db/identity", {
            "connect_timeout": 2,
            "options": "-c statement_timeout=2500",
        }),
        ("mysql+pymysql://db/identity", {"connect_timeout": 2, "read_timeout": 2}),
        ("oracle://db/identity", {}),
    ])
    def test_connect_args_per_driver(self, url, expected):
        assert _timeout_connect_args(url, 2.5) == expected

    def test_sub_second_timeout_keeps_one_second_floor(self):
        args = _timeout_connect_args("postgresql://db/identity", 0.2)

        assert args["connect_timeout"] == 1
        assert args["options"] == "-c statement_timeout=200"

    def test_engine_receives_timeout_args(self, monkeypatch):
        """The configured timeout reaches create_engine."""
        monkeypatch.setattr(DatabaseClient, "_engine", None)
        monkeypatch.setattr(repositories, "settings", Settings(
            database=DatabaseSettings(
                url="postgresql://db/identity",
                user_table="user",
                timeout_seconds=3,
            ),
        ))

        with patch.object(repositories, "create_engine") as mock_create_engine:
            engine = DatabaseClient.get_engine()

        assert engine is mock_create_engine.return_value
        args, kwargs = mock_create_engine.call_args
        assert args[0] == "postgresql://db/identity"
        assert kwargs["connect_args"] == {
            "connect_timeout": 3,
            "options": "-c statement_timeout=3000",
        }
