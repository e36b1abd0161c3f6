"""PostgreSQL repository implementations."""

from reviewbot.persistence.repository.session import PostgresSessionRepository
from reviewbot.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresSessionRepository",
    "PostgresUserRepository",
]
