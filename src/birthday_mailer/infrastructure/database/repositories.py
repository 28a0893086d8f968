"""
Identity Store Repositories.

Repository pattern over the relational identity store.
Provides the user id -> email lookup used before each send.
"""

import time
from typing import Any, Dict, Optional

from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from birthday_mailer.config import settings
from birthday_mailer.core.exceptions import UserNotFoundError, UserStoreError
from birthday_mailer.infrastructure.database.models import User, UserRecord
from birthday_mailer.infrastructure.logging import get_logger, log_duration


logger = get_logger(__name__)


def _timeout_connect_args(url: str, timeout_seconds: float) -> Dict[str, Any]:
    """
    Driver arguments bounding connection and query time.

    SQLite only supports a lock-wait timeout; query time itself is unbounded.
    """
    if url.startswith("sqlite"):
        return {"timeout": timeout_seconds}
    if url.startswith("postgresql"):
        return {
            "connect_timeout": max(1, int(timeout_seconds)),
            "options": f"-c statement_timeout={int(timeout_seconds * 1000)}",
        }
    if url.startswith("mysql"):
        return {
            "connect_timeout": max(1, int(timeout_seconds)),
            "read_timeout": max(1, int(timeout_seconds)),
        }
    logger.warning(
        "No query timeout available for database driver",
        extra={"extra_fields": {"scheme": url.split(":", 1)[0]}}
    )
    return {}


class DatabaseClient:
    """SQLAlchemy engine singleton."""

    _engine: Optional[Engine] = None

    @classmethod
    def get_engine(cls) -> Engine:
        """Get or create the engine for the configured identity store."""
        if cls._engine is None:
            url = settings.database.url
            timeout = settings.database.timeout_seconds
            cls._engine = create_engine(
                url,
                connect_args=_timeout_connect_args(url, timeout),
                pool_pre_ping=True,
                pool_recycle=300,
            )
        return cls._engine


class UserRepository:
    """Read-only repository for the identity store user table."""

    def __init__(self, engine: Optional[Engine] = None) -> None:
        self._engine = engine or DatabaseClient.get_engine()
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)

    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        """
        Get the first user whose id matches.

        Args:
            user_id: Identity store user id.

        Returns:
            UserRecord, or None when no row matches.

        Raises:
            UserStoreError: If the query fails.
        """
        start = time.time()
        statement = select(User).where(User.id == user_id).limit(1)

        try:
            with self._session_factory() as session:
                row = session.execute(statement).scalars().first()
                return UserRecord.from_row(row) if row is not None else None
        except SQLAlchemyError as e:
            duration_ms = int((time.time() - start) * 1000)
            logger.error(
                f"User lookup query failed: {e}",
                extra={"extra_fields": {
                    "error_type": type(e).__name__,
                    "duration_ms": duration_ms,
                }}
            )
            raise UserStoreError(
                f"user lookup failed ({type(e).__name__})",
                duration_ms=duration_ms,
            ) from e

    @log_duration("lookup_user_email", expected=(UserNotFoundError,))
    def get_email(self, user_id: str) -> str:
        """
        Resolve a user id to its contact email.

        Raises:
            UserNotFoundError: If no row matches or the row has no email.
            UserStoreError: If the query fails.
        """
        if not user_id:
            raise UserNotFoundError(user_id, "empty user id")

        user = self.find_by_id(user_id)

        if user is None:
            raise UserNotFoundError(user_id)
        if not user.has_email:
            raise UserNotFoundError(user_id, "user has no email address")

        logger.info(
            "Resolved user email",
            extra={"extra_fields": {
                "lookup_user_id": user_id,
                "recipient_email": user.email,
            }}
        )
        return user.email
