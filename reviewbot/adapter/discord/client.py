"""Discord OAuth 2.0 client implementation."""

from typing import Any

from reviewbot.adapter.error import OAuthError
from reviewbot.adapter.oauth2 import MockOAuth2Client, OAuth2Client
from reviewbot.domain.service.auth_service import OAuthClient
from reviewbot.domain.value.types import AuthProvider, OAuthProviderInfo

_CDN_URL = "https://cdn.discordapp.com"


class DiscordOAuthClient(OAuthClient):
    """Base class for Discord OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealDiscordOAuthClient(OAuth2Client, DiscordOAuthClient):
    """Discord OAuth 2.0 client."""

    provider = AuthProvider.DISCORD
    authorize_url = "https://discord.com/oauth2/authorize"
    token_url = "https://discord.com/api/oauth2/token"
    user_info_url = "https://discord.com/api/users/@me"
    scopes = "identify email"

    def to_provider_info(self, profile: dict[str, Any]) -> OAuthProviderInfo:
        """Translate a ``/users/@me`` payload."""
        user_id = profile.get("id")
        if not user_id:
            raise OAuthError("Discord profile carried no id")

        avatar = profile.get("avatar")
        avatar_url = f"{_CDN_URL}/avatars/{user_id}/{avatar}.png" if avatar else None

        return OAuthProviderInfo(
            provider=AuthProvider.DISCORD,
            provider_user_id=str(user_id),
            email=profile.get("email") or None,
            display_name=profile.get("global_name") or profile.get("username"),
            avatar_url=avatar_url,
        )


class MockDiscordOAuthClient(MockOAuth2Client, DiscordOAuthClient):
    """Mock Discord OAuth client for testing."""

    provider = AuthProvider.DISCORD
    authorize_url = "https://discord.com/oauth2/authorize"
