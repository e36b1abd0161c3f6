"""OAuth login dispatch.

The domain only knows the two-step shape of an OAuth login; the HTTP
details live in ``reviewbot.adapter``.
"""

from abc import ABC, abstractmethod

import logfire

from reviewbot.domain.error import ValidationError
from reviewbot.domain.value.types import AuthProvider, OAuthProviderInfo

from .base import Service


class OAuthClient(ABC):
    """One OAuth provider, as seen by the domain."""

    @abstractmethod
    async def initiate_authorization(self, state: str) -> str:
        """Start a login and return the provider URL to redirect to.

        Args:
            state: Single-use value echoed back on the callback
        """

    @abstractmethod
    async def complete_authorization(self, code: str, state: str) -> OAuthProviderInfo:
        """Exchange the callback code for the provider's profile.

        Args:
            code: Authorization code from the callback
            state: State issued by ``initiate_authorization``
        """


class AuthService(Service):
    """Routes OAuth logins to the client registered for the provider."""

    def __init__(self, oauth_clients: dict[AuthProvider, OAuthClient]) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Client per OAuth provider
        """
        self.oauth_clients = oauth_clients

    def _client(self, provider: AuthProvider) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if client is None or not provider.is_oauth:
            raise ValidationError(f"Unsupported provider: {provider.value}")
        return client

    async def initiate_login(self, provider: AuthProvider, state: str) -> str:
        """Authorization URL for a provider.

        Raises:
            ValidationError: If the provider has no OAuth client
        """
        client = self._client(provider)
        with logfire.span("auth_service.initiate_login", provider=provider.value):
            return await client.initiate_authorization(state)

    async def complete_login(
        self, provider: AuthProvider, code: str, state: str
    ) -> OAuthProviderInfo:
        """Profile reported by the provider for a completed callback.

        The profile is not trusted for anything beyond identity resolution;
        see ``IdentityLinkService.resolve``.

        Raises:
            ValidationError: If the provider has no OAuth client
        """
        client = self._client(provider)
        with logfire.span("auth_service.complete_login", provider=provider.value):
            info = await client.complete_authorization(code, state)
            logfire.info(
                "OAuth profile received",
                provider=provider.value,
                has_email=info.email is not None,
            )
            return info
