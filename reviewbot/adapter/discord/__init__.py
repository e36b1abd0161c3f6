"""Discord OAuth adapter."""

from .client import DiscordOAuthClient, MockDiscordOAuthClient, RealDiscordOAuthClient

__all__ = ["DiscordOAuthClient", "RealDiscordOAuthClient", "MockDiscordOAuthClient"]
