"""PostgreSQL implementation of User repository."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, select, update

from reviewbot.domain.model import User, provider_id_field
from reviewbot.domain.repository import UserRepository
from reviewbot.domain.value import AuthProvider, UserId
from reviewbot.persistence.mappers import row_to_user, user_to_dict
from reviewbot.persistence.repository.base import PostgresRepository
from reviewbot.persistence.tables import users_table

# Every column except the credential hash
_PUBLIC_COLUMNS = [c for c in users_table.c if c.name != "password"]


class PostgresUserRepository(PostgresRepository, UserRepository):
    """PostgreSQL implementation of UserRepository."""

    async def _first(self, stmt) -> Optional[User]:
        result = await self._execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def create(self, user: User) -> User:
        """Insert a new user.

        The insert runs in a savepoint so a unique violation leaves the
        surrounding transaction usable.

        Args:
            user: User to insert

        Returns:
            Stored user

        Raises:
            IntegrityError: If email or a provider ID is already taken
        """
        async with self.session.begin_nested():
            await self._execute(users_table.insert().values(**user_to_dict(user)))
        return user

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        return await self._first(select(users_table).where(users_table.c.id == user_id))

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: Normalised email to search for

        Returns:
            User if found, None otherwise
        """
        return await self._first(
            select(users_table).where(users_table.c.email == email)
        )

    async def find_by_provider_id(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[User]:
        """Find a user by a linked OAuth account.

        Args:
            provider: OAuth provider
            provider_user_id: Account ID issued by the provider

        Returns:
            User if found, None otherwise
        """
        column = users_table.c[provider_id_field(provider)]
        return await self._first(select(users_table).where(column == provider_user_id))

    async def update_credential(
        self, user_id: UserId, credential_hash: str
    ) -> Optional[User]:
        """Replace a user's credential hash.

        Args:
            user_id: User to update
            credential_hash: Already-hashed credential

        Returns:
            Updated user, None if the user does not exist
        """
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(password=credential_hash, updated_at=datetime.now(timezone.utc))
            .returning(users_table)
        )
        return await self._first(stmt)

    async def update_provider_id(
        self, user_id: UserId, provider: AuthProvider, provider_user_id: str
    ) -> Optional[User]:
        """Link an OAuth account to a user.

        Args:
            user_id: User to update
            provider: OAuth provider
            provider_user_id: Account ID issued by the provider

        Returns:
            Updated user, None if the user does not exist

        Raises:
            IntegrityError: If the provider ID belongs to another user
        """
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(
                {
                    provider_id_field(provider): provider_user_id,
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            .returning(users_table)
        )
        async with self.session.begin_nested():
            return await self._first(stmt)

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user. Their sessions go with them (ON DELETE CASCADE).

        Args:
            user_id: User to delete

        Returns:
            True if a user was deleted
        """
        result = await self._execute(
            delete(users_table).where(users_table.c.id == user_id)
        )
        return result.rowcount > 0

    async def find_all(self) -> list[User]:
        """List every user without credential hashes.

        Returns:
            Users ordered by creation time
        """
        stmt = select(*_PUBLIC_COLUMNS).order_by(users_table.c.created_at)
        result = await self._execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]
