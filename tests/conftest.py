"""
Test Configuration and Fixtures.

Provides shared fixtures for all tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Generator
from unittest.mock import MagicMock

import pytest
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from birthday_mailer.app import create_app
from birthday_mailer.infrastructure.database import Base, User


TEST_TOKEN = "test-shared-secret"

FROZEN_NOW = datetime(2024, 3, 27, 12, 0, 0, tzinfo=timezone.utc)


def to_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


@pytest.fixture
def app() -> Flask:
    """Create test Flask application."""
    test_config = {
        "TESTING": True,
        "API_TOKEN": TEST_TOKEN,
        "UNIFORM_ERROR_STATUS": False,
    }
    return create_app(test_config)


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create test client."""
    return app.test_client()


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {TEST_TOKEN}"}


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory identity store with two users."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    with Session(engine) as session:
        session.add_all([
            User(id="u1", username="ada", email="ada@example.com"),
            User(id="u2", username="grace", email=""),
        ])
        session.commit()

    yield engine
    engine.dispose()


@pytest.fixture
def mock_mail_client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def reminder_payload() -> Dict[str, Any]:
    """Wire-format birthday record, one week ahead of FROZEN_NOW."""
    return {
        "id": "bday-1",
        "userId": "u1",
        "month": 4,
        "day": 3,
        "nextBirthday": to_millis(FROZEN_NOW + timedelta(days=7)),
        "name": "Ada",
        "lastName": "Lovelace",
        "onDay": True,
        "dayBefore": False,
        "oneWeekBefore": True,
        "twoWeeksBefore": False,
    }
