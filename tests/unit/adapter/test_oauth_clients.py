"""Unit tests for the Google and Discord OAuth clients."""

from urllib.parse import parse_qs, urlparse

import pytest

from reviewbot.adapter.discord import MockDiscordOAuthClient, RealDiscordOAuthClient
from reviewbot.adapter.error import OAuthError
from reviewbot.adapter.google import MockGoogleOAuthClient, RealGoogleOAuthClient
from reviewbot.domain.value import AuthProvider


@pytest.fixture
def google() -> RealGoogleOAuthClient:
    return RealGoogleOAuthClient(
        client_id="google-client",
        client_secret="google-secret",
        redirect_uri="http://localhost:8000/api/auth/google/callback",
    )


@pytest.fixture
def discord() -> RealDiscordOAuthClient:
    return RealDiscordOAuthClient(
        client_id="discord-client",
        client_secret="discord-secret",
        redirect_uri="http://localhost:8000/api/auth/discord/callback",
    )


class TestInitiateAuthorization:
    """Tests for authorization URL construction."""

    @pytest.mark.asyncio
    async def test_google_url_uses_pkce(self, google):
        url = await google.initiate_authorization("state-1")

        parsed = urlparse(url)
        params = parse_qs(parsed.query)
        assert parsed.netloc == "accounts.google.com"
        assert params["client_id"] == ["google-client"]
        assert params["state"] == ["state-1"]
        assert params["scope"] == ["openid email profile"]
        assert params["code_challenge_method"] == ["S256"]
        assert params["redirect_uri"] == [
            "http://localhost:8000/api/auth/google/callback"
        ]

    @pytest.mark.asyncio
    async def test_discord_url(self, discord):
        url = await discord.initiate_authorization("state-2")

        params = parse_qs(urlparse(url).query)
        assert params["scope"] == ["identify email"]
        assert params["response_type"] == ["code"]
        assert "code_challenge" not in params


class FakeClock:
    """Controllable replacement for the client clock."""

    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock(google, discord, monkeypatch) -> FakeClock:
    fake = FakeClock()
    monkeypatch.setattr(google, "_clock", fake)
    monkeypatch.setattr(discord, "_clock", fake)
    return fake


class TestStateExpiry:
    """Pending states are dropped after the TTL."""

    @pytest.mark.asyncio
    async def test_expired_state_rejected(self, google, clock):
        await google.initiate_authorization("stale")
        clock.now += google.state_ttl + 1

        with pytest.raises(OAuthError, match="expired"):
            await google.complete_authorization("code", "stale")

    @pytest.mark.asyncio
    async def test_abandoned_states_do_not_accumulate(self, discord, clock):
        for i in range(50):
            await discord.initiate_authorization(f"abandoned-{i}")
        clock.now += discord.state_ttl + 1

        await discord.initiate_authorization("fresh")

        assert list(discord._pending) == ["fresh"]

    @pytest.mark.asyncio
    async def test_state_within_ttl_kept(self, discord, clock):
        await discord.initiate_authorization("old")
        clock.now += discord.state_ttl - 1
        await discord.initiate_authorization("new")

        assert set(discord._pending) == {"old", "new"}


class TestCompleteAuthorization:
    """Tests for the callback half of the flow."""

    @pytest.mark.asyncio
    async def test_unknown_state_rejected(self, google):
        with pytest.raises(OAuthError, match="state"):
            await google.complete_authorization("code", "never-issued")

    @pytest.mark.asyncio
    async def test_state_is_single_use(self, discord, monkeypatch):
        async def fake_exchange(code, verifier):
            return "access-token"

        async def fake_user_info(access_token):
            return {"id": "80351110224678912", "username": "nelly", "email": None}

        monkeypatch.setattr(discord, "_exchange_code_for_token", fake_exchange)
        monkeypatch.setattr(discord, "_get_user_info", fake_user_info)
        await discord.initiate_authorization("state-3")

        info = await discord.complete_authorization("code", "state-3")

        assert info.provider == AuthProvider.DISCORD
        assert info.provider_user_id == "80351110224678912"
        assert info.email is None
        with pytest.raises(OAuthError):
            await discord.complete_authorization("code", "state-3")

    @pytest.mark.asyncio
    async def test_pkce_verifier_sent_with_exchange(self, google, monkeypatch):
        seen = {}

        async def fake_exchange(code, verifier):
            seen["verifier"] = verifier
            return "access-token"

        async def fake_user_info(access_token):
            return {"sub": "1234", "email": "a@example.com", "email_verified": True}

        monkeypatch.setattr(google, "_exchange_code_for_token", fake_exchange)
        monkeypatch.setattr(google, "_get_user_info", fake_user_info)
        await google.initiate_authorization("state-4")

        info = await google.complete_authorization("code", "state-4")

        assert seen["verifier"]
        assert info.provider_user_id == "1234"
        assert info.email == "a@example.com"


class TestProfileTranslation:
    """Tests for provider payload translation."""

    def test_google_unverified_email_dropped(self, google):
        info = google.to_provider_info(
            {"sub": "42", "email": "a@example.com", "email_verified": False}
        )

        assert info.provider_user_id == "42"
        assert info.email is None

    def test_google_profile_without_subject(self, google):
        with pytest.raises(OAuthError):
            google.to_provider_info({"email": "a@example.com"})

    def test_discord_avatar_url(self, discord):
        info = discord.to_provider_info(
            {
                "id": "7",
                "username": "nelly",
                "global_name": "Nelly",
                "avatar": "abc",
                "email": "nelly@example.com",
            }
        )

        assert info.display_name == "Nelly"
        assert info.avatar_url == "https://cdn.discordapp.com/avatars/7/abc.png"
        assert info.email == "nelly@example.com"


class TestMockClients:
    """Tests for the mock clients used by the test container."""

    @pytest.mark.asyncio
    async def test_registered_profile(self):
        client = MockGoogleOAuthClient()
        client.register_profile("code", "g-1", None)

        info = await client.complete_authorization("code", "any-state")

        assert info.provider == AuthProvider.GOOGLE
        assert info.provider_user_id == "g-1"
        assert info.email is None

    @pytest.mark.asyncio
    async def test_derived_profile_is_deterministic(self):
        client = MockDiscordOAuthClient()

        first = await client.complete_authorization("zoe", "s1")
        second = await client.complete_authorization("zoe", "s2")

        assert first == second
        assert first.email == "zoe@discord.example.com"
