"""Google infrastructure providers."""

from dishka import Scope, provide

from reviewbot.adapter.google.client import GoogleOAuthClient, RealGoogleOAuthClient
from reviewbot.config import Settings
from reviewbot.util.di.base import ProviderBase


class GoogleProvider(ProviderBase):
    """Google OAuth component."""

    __mock_component__ = "google"


class ProdGoogleProvider(GoogleProvider):
    """Talks to Google over HTTPS."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_google_oauth_client(self, settings: Settings) -> GoogleOAuthClient:
        """Provide the Google OAuth client.

        APP scope: pending authorization states live on the client.

        Raises:
            ConfigurationError: If the Google credentials are not configured
        """
        client_id, client_secret = settings.auth.google.credentials(
            "AUTH__GOOGLE", settings.is_production
        )
        return RealGoogleOAuthClient(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=settings.auth.google_callback_url,
        )
