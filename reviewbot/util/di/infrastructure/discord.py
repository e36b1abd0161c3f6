"""Discord infrastructure providers."""

from dishka import Scope, provide

from reviewbot.adapter.discord.client import DiscordOAuthClient, RealDiscordOAuthClient
from reviewbot.config import Settings
from reviewbot.util.di.base import ProviderBase


class DiscordProvider(ProviderBase):
    """Discord OAuth component."""

    __mock_component__ = "discord"


class ProdDiscordProvider(DiscordProvider):
    """Talks to Discord over HTTPS."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_discord_oauth_client(self, settings: Settings) -> DiscordOAuthClient:
        """Provide the Discord OAuth client.

        APP scope: pending authorization states live on the client.

        Raises:
            ConfigurationError: If the Discord credentials are not configured
        """
        client_id, client_secret = settings.auth.discord.credentials(
            "AUTH__DISCORD", settings.is_production
        )
        return RealDiscordOAuthClient(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=settings.auth.discord_callback_url,
        )
