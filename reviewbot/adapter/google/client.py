"""Google OAuth 2.0 client implementation.

Uses the OpenID Connect userinfo endpoint; ``sub`` is the durable account key.
"""

from typing import Any

from reviewbot.adapter.error import OAuthError
from reviewbot.adapter.oauth2 import MockOAuth2Client, OAuth2Client
from reviewbot.domain.service.auth_service import OAuthClient
from reviewbot.domain.value.types import AuthProvider, OAuthProviderInfo


class GoogleOAuthClient(OAuthClient):
    """Base class for Google OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealGoogleOAuthClient(OAuth2Client, GoogleOAuthClient):
    """Google OAuth 2.0 client with PKCE support."""

    provider = AuthProvider.GOOGLE
    authorize_url = "https://accounts.google.com/o/oauth2/v2/auth"
    token_url = "https://oauth2.googleapis.com/token"
    user_info_url = "https://openidconnect.googleapis.com/v1/userinfo"
    scopes = "openid email profile"
    use_pkce = True

    def authorization_params(self) -> dict[str, str]:
        return {"prompt": "select_account"}

    def to_provider_info(self, profile: dict[str, Any]) -> OAuthProviderInfo:
        """Translate an OpenID userinfo payload.

        Unverified emails are dropped so they cannot be used to link accounts.
        """
        sub = profile.get("sub")
        if not sub:
            raise OAuthError("Google profile carried no subject")

        email = profile.get("email") if profile.get("email_verified") else None

        return OAuthProviderInfo(
            provider=AuthProvider.GOOGLE,
            provider_user_id=str(sub),
            email=email,
            display_name=profile.get("name"),
            avatar_url=profile.get("picture"),
        )


class MockGoogleOAuthClient(MockOAuth2Client, GoogleOAuthClient):
    """Mock Google OAuth client for testing."""

    provider = AuthProvider.GOOGLE
    authorize_url = "https://accounts.google.com/o/oauth2/v2/auth"
