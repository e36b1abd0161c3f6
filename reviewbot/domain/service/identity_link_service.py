"""Identity resolution for OAuth logins."""

import logfire

from reviewbot.domain.error import (
    DuplicateIdentityError,
    MissingEmailError,
    ValidationError,
)
from reviewbot.domain.model import User
from reviewbot.domain.value import AuthProvider

from .base import Service
from .user_service import UserService


class IdentityLinkService(Service):
    """Maps an OAuth profile onto a single user.

    One algorithm serves every provider; the provider only decides which
    ID field is read and written. A provider ID match always wins over an
    email match.
    """

    def __init__(self, user_service: UserService) -> None:
        """Initialize identity link service.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def resolve(
        self,
        provider: AuthProvider,
        provider_user_id: str,
        email: str | None,
    ) -> User:
        """Resolve a provider profile to an existing or new user.

        Steps:
        1. Provider ID already linked: return that user unchanged
        2. Email matches a user: link the provider ID to it and return it
        3. No email: fail, an account cannot be created without one
        4. Otherwise create a user with no password, tagged with the provider

        Args:
            provider: Google or Discord
            provider_user_id: Account ID issued by the provider
            email: Email reported by the provider, if any

        Returns:
            The resolved user

        Raises:
            MissingEmailError: If nothing matched and no email was supplied
            ValidationError: If the provider is not an OAuth provider
        """
        if not provider.is_oauth:
            raise ValidationError(f"{provider.value} is not an OAuth provider")

        email = email or None

        with logfire.span(
            "identity_link_service.resolve",
            provider=provider.value,
            provider_user_id=provider_user_id,
            has_email=email is not None,
        ):
            user = await self._find_existing(provider, provider_user_id, email)
            if user:
                return user

            if email is None:
                logfire.warn(
                    "OAuth profile has no email and matches no user",
                    provider=provider.value,
                    provider_user_id=provider_user_id,
                )
                raise MissingEmailError(provider.value)

            try:
                user = await self.user_service.create_user(
                    email=email,
                    provider=provider,
                    provider_user_id=provider_user_id,
                )
            except DuplicateIdentityError:
                # A concurrent request created the identity first
                user = await self._find_existing(provider, provider_user_id, email)
                if user is None:
                    raise
                return user

            logfire.info(
                "User created from OAuth profile",
                user_id=str(user.id),
                provider=provider.value,
            )
            return user

    async def _find_existing(
        self,
        provider: AuthProvider,
        provider_user_id: str,
        email: str | None,
    ) -> User | None:
        user = await self.user_service.get_user_by_provider_id(
            provider, provider_user_id
        )
        if user:
            logfire.info(
                "Repeat OAuth login", user_id=str(user.id), provider=provider.value
            )
            return user

        if email is None:
            return None

        user = await self.user_service.get_user_by_email(email)
        if user is None:
            return None

        previous = user.provider_id(provider)
        if previous and previous != provider_user_id:
            logfire.warn(
                "Replacing linked provider account",
                user_id=str(user.id),
                provider=provider.value,
                previous_provider_user_id=previous,
            )

        return await self.user_service.link_provider(
            user.id, provider, provider_user_id
        )
