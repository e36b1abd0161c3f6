"""Settings derived values and credential checks."""

import pytest

from reviewbot.config import GoogleOAuthSettings, Settings
from reviewbot.util.error import ConfigurationError


class TestSettings:
    def test_callback_urls_follow_host(self):
        settings = Settings(environment="production", host="api.example.com")

        assert settings.api.base_url == "https://api.example.com"
        assert (
            settings.auth.google_callback_url
            == "https://api.example.com/api/auth/google/callback"
        )
        assert settings.is_production

    def test_local_development_urls(self):
        settings = Settings(environment="development")

        assert settings.api.frontend_url == "http://localhost:3000"
        assert (
            settings.auth.discord_callback_url
            == "http://localhost:8000/api/auth/discord/callback"
        )

    def test_session_max_age(self):
        assert Settings().session.max_age_seconds == 24 * 60 * 60


class TestOAuthCredentials:
    def test_configured(self):
        google = GoogleOAuthSettings(client_id="id", client_secret="secret")

        assert google.credentials("AUTH__GOOGLE", is_production=True) == (
            "id",
            "secret",
        )

    def test_empty_value(self):
        google = GoogleOAuthSettings(client_id="", client_secret="secret")

        with pytest.raises(ConfigurationError) as exc_info:
            google.credentials("AUTH__GOOGLE", is_production=False)

        assert exc_info.value.setting == "AUTH__GOOGLE__CLIENT_ID"

    def test_placeholder_only_refused_in_production(self):
        google = GoogleOAuthSettings()

        google.credentials("AUTH__GOOGLE", is_production=False)
        with pytest.raises(ConfigurationError):
            google.credentials("AUTH__GOOGLE", is_production=True)
