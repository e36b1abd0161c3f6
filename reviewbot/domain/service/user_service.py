"""User domain service.

This is the only write path to the user store. Credentials are hashed here,
explicitly, before they reach the repository.
"""

from datetime import datetime, timezone
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from reviewbot.domain.error import (
    DuplicateIdentityError,
    NotFoundError,
    ValidationError,
)
from reviewbot.domain.model import User, provider_id_field
from reviewbot.domain.repository import UserRepository
from reviewbot.domain.value import AuthProvider, UserId, normalize_email

from .base import Service
from .password_service import PasswordService


class UserService(Service):
    """Domain service for user operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordService,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            password_service: Credential hasher applied on every credential write
        """
        self.user_repository = user_repository
        self.password_service = password_service

    async def create_user(
        self,
        email: str,
        password: str | None = None,
        provider: AuthProvider = AuthProvider.LOCAL,
        provider_user_id: str | None = None,
    ) -> User:
        """Create a user.

        A non-empty password is hashed before the write; an absent password
        (OAuth sign-up) leaves the credential empty and skips hashing.

        Args:
            email: Email address
            password: Plaintext password, local sign-up only
            provider: Flow creating the account
            provider_user_id: Provider account ID, required for OAuth flows

        Returns:
            Created user

        Raises:
            ValidationError: If the password is too short or is a hash, or the
                provider ID is missing
            DuplicateIdentityError: If the email or provider ID is already taken
        """
        with logfire.span("user_service.create_user", provider=provider.value):
            links: dict[str, str] = {}
            if provider.is_oauth:
                if not provider_user_id:
                    raise ValidationError(f"Missing {provider.value} account ID")
                links[provider_id_field(provider)] = provider_user_id

            credential_hash = None
            if password:
                self._check_plaintext(password)
                credential_hash = await self.password_service.hash_password(password)

            now = datetime.now(timezone.utc)
            user = User(
                id=UserId(uuid4()),
                email=email,
                credential_hash=credential_hash,
                auth_provider=provider,
                created_at=now,
                updated_at=now,
                **links,
            )

            try:
                saved = await self.user_repository.create(user)
            except IntegrityError:
                logfire.warn(
                    "Duplicate identity on create",
                    email=user.email,
                    provider=provider.value,
                )
                raise DuplicateIdentityError("email", user.email)

            logfire.info(
                "User created", user_id=str(saved.id), provider=provider.value
            )
            return saved

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email.

        Args:
            email: User email, any case

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.get_user_by_email"):
            user = await self.user_repository.find_by_email(normalize_email(email))
            if user:
                logfire.info("User found by email", user_id=str(user.id))
            return user

    async def get_user_by_provider_id(
        self, provider: AuthProvider, provider_user_id: str
    ) -> User | None:
        """Get user by OAuth provider account ID.

        Args:
            provider: Google or Discord
            provider_user_id: Provider-specific user ID

        Returns:
            User if found, None otherwise
        """
        with logfire.span(
            "user_service.get_user_by_provider_id",
            provider=provider.value,
            provider_user_id=provider_user_id,
        ):
            user = await self.user_repository.find_by_provider_id(
                provider, provider_user_id
            )
            if user:
                logfire.info(
                    "User found by provider ID",
                    provider=provider.value,
                    user_id=str(user.id),
                )
            return user

    async def update_credential(self, user_id: UserId, password: str) -> User:
        """Set a new local password.

        Writing back the value that is already stored is a no-op. A value that
        is itself an argon2 hash is refused instead of being stored verbatim.

        Args:
            user_id: User ID
            password: New plaintext password

        Returns:
            Updated user

        Raises:
            NotFoundError: If user not found
            ValidationError: If the password is too short or is a hash
        """
        with logfire.span("user_service.update_credential", user_id=str(user_id)):
            user = await self.get_by_id(user_id)

            if user.credential_hash and password == user.credential_hash:
                logfire.info("Credential unchanged", user_id=str(user_id))
                return user

            self._check_plaintext(password)
            credential_hash = await self.password_service.hash_password(password)

            updated = await self.user_repository.update_credential(
                user_id, credential_hash
            )
            if not updated:
                raise NotFoundError("User", str(user_id))

            logfire.info("Credential updated", user_id=str(user_id))
            return updated

    async def rehash_credential(self, user_id: UserId, password: str) -> User:
        """Re-hash a password that was just verified against the stored hash.

        Used after a successful login when the stored hash was produced with
        outdated argon2 parameters. The password policy is not re-applied:
        the password is already the user's accepted credential.

        Args:
            user_id: User ID
            password: Plaintext password that verified

        Returns:
            Updated user

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.rehash_credential", user_id=str(user_id)):
            credential_hash = await self.password_service.hash_password(password)
            updated = await self.user_repository.update_credential(
                user_id, credential_hash
            )
            if not updated:
                raise NotFoundError("User", str(user_id))

            logfire.info("Credential rehashed", user_id=str(user_id))
            return updated

    def _check_plaintext(self, password: str) -> None:
        """Reject weak passwords and values that are already argon2 hashes."""
        if self.password_service.is_hashed(password):
            logfire.warn("Rejected pre-hashed credential")
            raise ValidationError("Password must be provided in plain text")
        self.password_service.validate_strength(password)

    async def link_provider(
        self, user_id: UserId, provider: AuthProvider, provider_user_id: str
    ) -> User:
        """Attach an OAuth provider account to an existing user.

        The local credential is left untouched.

        Args:
            user_id: User ID
            provider: Google or Discord
            provider_user_id: Provider-specific user ID

        Returns:
            Updated user

        Raises:
            NotFoundError: If user not found
            DuplicateIdentityError: If the provider account is linked elsewhere
        """
        with logfire.span(
            "user_service.link_provider",
            user_id=str(user_id),
            provider=provider.value,
        ):
            try:
                updated = await self.user_repository.update_provider_id(
                    user_id, provider, provider_user_id
                )
            except IntegrityError:
                logfire.warn(
                    "Provider account already linked to another user",
                    provider=provider.value,
                    provider_user_id=provider_user_id,
                )
                raise DuplicateIdentityError(
                    f"{provider.value} account", provider_user_id
                )

            if not updated:
                raise NotFoundError("User", str(user_id))

            logfire.info(
                "Provider linked", user_id=str(user_id), provider=provider.value
            )
            return updated

    async def delete_user(self, user_id: UserId) -> None:
        """Delete a user (administrative).

        Args:
            user_id: User ID

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.delete_user", user_id=str(user_id)):
            deleted = await self.user_repository.delete(user_id)
            if not deleted:
                raise NotFoundError("User", str(user_id))
            logfire.info("User deleted", user_id=str(user_id))

    async def list_users(self) -> list[User]:
        """List all users without their credential hashes."""
        with logfire.span("user_service.list_users"):
            users = await self.user_repository.find_all()
            logfire.info("Users listed", count=len(users))
            return users
