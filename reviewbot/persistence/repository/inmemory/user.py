"""In-memory user repository for testing."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError

from reviewbot.domain.model.user import User, provider_id_field
from reviewbot.domain.repository.user import UserRepository
from reviewbot.domain.value import AuthProvider, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Mirrors the unique constraints of the ``users`` table.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    def _check_unique(self, candidate: User) -> None:
        for user in self._users.values():
            if user.id == candidate.id:
                continue
            if user.email == candidate.email:
                raise IntegrityError("Duplicate email", None, Exception())
            if candidate.google_id and user.google_id == candidate.google_id:
                raise IntegrityError("Duplicate google_id", None, Exception())
            if candidate.discord_id and user.discord_id == candidate.discord_id:
                raise IntegrityError("Duplicate discord_id", None, Exception())

    async def create(self, user: User) -> User:
        """Insert a new user."""
        if user.id in self._users:
            raise IntegrityError("Duplicate id", None, Exception())
        self._check_unique(user)
        self._users[user.id] = user
        return user

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_by_provider_id(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[User]:
        """Find a user by a linked OAuth account."""
        for user in self._users.values():
            if user.provider_id(provider) == provider_user_id:
                return user
        return None

    async def update_credential(
        self, user_id: UserId, credential_hash: str
    ) -> Optional[User]:
        """Replace a user's credential hash."""
        user = self._users.get(user_id)
        if not user:
            return None
        updated = user.model_copy(
            update={
                "credential_hash": credential_hash,
                "updated_at": datetime.now(timezone.utc),
            }
        )
        self._users[user_id] = updated
        return updated

    async def update_provider_id(
        self, user_id: UserId, provider: AuthProvider, provider_user_id: str
    ) -> Optional[User]:
        """Link an OAuth account to a user."""
        user = self._users.get(user_id)
        if not user:
            return None
        updated = user.model_copy(
            update={
                provider_id_field(provider): provider_user_id,
                "updated_at": datetime.now(timezone.utc),
            }
        )
        self._check_unique(updated)
        self._users[user_id] = updated
        return updated

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user."""
        return self._users.pop(user_id, None) is not None

    async def find_all(self) -> list[User]:
        """List every user without credential hashes."""
        return [
            user.model_copy(update={"credential_hash": None})
            for user in sorted(self._users.values(), key=lambda u: u.created_at)
        ]
