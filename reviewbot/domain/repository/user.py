"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from reviewbot.domain.model.user import User
from reviewbot.domain.value import AuthProvider, UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Uniqueness of email and provider IDs is enforced here, by the store,
    not by callers checking first.
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: The user to insert

        Returns:
            The stored user

        Raises:
            IntegrityError: If email or a provider ID is already taken
        """
        pass

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email (case-insensitive).

        Args:
            email: The email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider_id(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[User]:
        """Find a user by the account ID an OAuth provider issued.

        Args:
            provider: Google or Discord
            provider_user_id: The user's ID on that provider

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def update_credential(
        self, user_id: UserId, credential_hash: str
    ) -> Optional[User]:
        """Replace the stored credential hash.

        Args:
            user_id: The user's unique identifier
            credential_hash: Already-hashed credential

        Returns:
            The updated user, None if the user does not exist
        """
        pass

    @abstractmethod
    async def update_provider_id(
        self, user_id: UserId, provider: AuthProvider, provider_user_id: str
    ) -> Optional[User]:
        """Attach an OAuth provider account ID to a user.

        Args:
            user_id: The user's unique identifier
            provider: Google or Discord
            provider_user_id: The user's ID on that provider

        Returns:
            The updated user, None if the user does not exist

        Raises:
            IntegrityError: If the provider ID belongs to another user
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        """Delete a user.

        Args:
            user_id: The user's unique identifier

        Returns:
            True if a user was deleted
        """
        pass

    @abstractmethod
    async def find_all(self) -> list[User]:
        """List every user, oldest first.

        The credential hash is not loaded; returned users carry None.
        """
        pass
