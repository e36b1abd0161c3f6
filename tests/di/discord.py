"""Mock Discord providers for testing."""

from dishka import Scope, provide

from reviewbot.adapter.discord.client import DiscordOAuthClient, MockDiscordOAuthClient
from reviewbot.util.di.infrastructure.discord import DiscordProvider


class MockDiscordProvider(DiscordProvider):
    """Mock Discord provider using mock OAuth client."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_discord_oauth_client(self) -> DiscordOAuthClient:
        """Provide mock Discord OAuth client."""
        return MockDiscordOAuthClient()
