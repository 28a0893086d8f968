"""
Identity Store Models.

SQLAlchemy mapping of the identity store's user table and the
immutable record handed to the rest of the service.
"""

from dataclasses import dataclass

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import declarative_base

from birthday_mailer.config import settings


Base = declarative_base()


class User(Base):
    """Row of the identity store user table. Read-only for this service."""
    __tablename__ = settings.database.user_table

    id = Column(String, primary_key=True)
    username = Column(Text, nullable=False)
    email = Column(Text, nullable=False, default="", server_default="")


@dataclass(frozen=True)
class UserRecord:
    """
    A user loaded from the identity store.

    Attributes:
        user_id: Identity store primary key.
        username: Login name.
        email: Contact address, empty when the user never set one.
    """
    user_id: str
    username: str
    email: str = ""

    @classmethod
    def from_row(cls, row: User) -> "UserRecord":
        return cls(
            user_id=row.id,
            username=row.username,
            email=row.email or "",
        )

    @property
    def has_email(self) -> bool:
        return bool(self.email.strip())
