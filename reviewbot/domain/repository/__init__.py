"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from reviewbot.domain.repository.session import SessionRepository
from reviewbot.domain.repository.user import UserRepository

__all__ = [
    "SessionRepository",
    "UserRepository",
]
