"""OAuth client registry."""

from dishka import Scope, provide

from reviewbot.adapter.discord.client import DiscordOAuthClient
from reviewbot.adapter.google.client import GoogleOAuthClient
from reviewbot.domain.service.auth_service import OAuthClient
from reviewbot.domain.value import AuthProvider
from reviewbot.util.di.base import ProviderBase


class OAuthAggregatorProvider(ProviderBase):
    """Exposes the Google and Discord clients to ``AuthService`` by provider.

    Not mockable itself; it picks up whichever client implementations the
    ``google`` and ``discord`` components provide.
    """

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self,
        google_oauth_client: GoogleOAuthClient,
        discord_oauth_client: DiscordOAuthClient,
    ) -> dict[AuthProvider, OAuthClient]:
        """Provide the client per OAuth provider."""
        return {
            AuthProvider.GOOGLE: google_oauth_client,
            AuthProvider.DISCORD: discord_oauth_client,
        }
