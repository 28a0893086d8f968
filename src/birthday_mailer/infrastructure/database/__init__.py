"""
Identity Store Package.

SQLAlchemy models and repositories for the user table.
"""

from birthday_mailer.infrastructure.database.models import (
    Base,
    User,
    UserRecord,
)
from birthday_mailer.infrastructure.database.repositories import (
    DatabaseClient,
    UserRepository,
)


__all__ = [
    # Models
    "Base",
    "User",
    "UserRecord",
    # Repositories
    "DatabaseClient",
    "UserRepository",
]
