"""OAuth 2.0 authorization-code flow shared by the provider clients."""

import time
from typing import Any
from urllib.parse import urlencode

import httpx
import logfire

from reviewbot.adapter.error import OAuthError
from reviewbot.adapter.pkce import generate_pkce_pair
from reviewbot.domain.service.auth_service import OAuthClient
from reviewbot.domain.value.types import AuthProvider, OAuthProviderInfo


class OAuth2Client(OAuthClient):
    """Authorization-code client for a single provider.

    Subclasses set the endpoints and scopes and translate the provider's
    profile payload. Pending states live in this instance, so it must be
    shared across requests; each state is consumed once and expires after
    ``state_ttl`` seconds.
    """

    provider: AuthProvider
    authorize_url: str
    token_url: str
    user_info_url: str
    scopes: str
    use_pkce: bool = False

    _clock = staticmethod(time.monotonic)

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 30.0,
        state_ttl: float = 600.0,
    ) -> None:
        """Initialize OAuth client.

        Args:
            client_id: OAuth client ID
            client_secret: OAuth client secret
            redirect_uri: Callback URL registered with the provider
            timeout: HTTP timeout in seconds
            state_ttl: Seconds a user may spend on the consent screen
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self.state_ttl = state_ttl

        # state -> (PKCE verifier, issue time); verifier is "" without PKCE.
        # Insertion order is issue order.
        # TODO: move pending states to a shared store to run more than one worker
        self._pending: dict[str, tuple[str, float]] = {}

    def _expire_states(self, now: float) -> None:
        cutoff = now - self.state_ttl
        while self._pending:
            oldest = next(iter(self._pending))
            if self._pending[oldest][1] > cutoff:
                break
            del self._pending[oldest]

    def authorization_params(self) -> dict[str, str]:
        """Provider-specific extra query parameters."""
        return {}

    async def initiate_authorization(self, state: str) -> str:
        """Build the provider's authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": self.scopes,
            "state": state,
            **self.authorization_params(),
        }

        verifier = ""
        if self.use_pkce:
            verifier, challenge = generate_pkce_pair()
            params["code_challenge"] = challenge
            params["code_challenge_method"] = "S256"

        now = self._clock()
        self._expire_states(now)
        self._pending.pop(state, None)
        self._pending[state] = (verifier, now)

        logfire.info(
            "OAuth authorization initiated",
            provider=self.provider.value,
            redirect_uri=self.redirect_uri,
        )

        return f"{self.authorize_url}?{urlencode(params)}"

    async def complete_authorization(self, code: str, state: str) -> OAuthProviderInfo:
        """Exchange the callback code and fetch the provider profile.

        Args:
            code: Authorization code from the callback
            state: State parameter issued by ``initiate_authorization``

        Returns:
            Provider user information

        Raises:
            OAuthError: If the state is unknown or the provider call fails
        """
        self._expire_states(self._clock())
        pending = self._pending.pop(state, None)
        if pending is None:
            raise OAuthError("Invalid or expired OAuth state")
        verifier, _ = pending

        access_token = await self._exchange_code_for_token(code, verifier)
        profile = await self._get_user_info(access_token)
        info = self.to_provider_info(profile)

        logfire.info(
            "OAuth authorization completed",
            provider=self.provider.value,
            provider_user_id=info.provider_user_id,
            has_email=info.email is not None,
        )
        return info

    def to_provider_info(self, profile: dict[str, Any]) -> OAuthProviderInfo:
        """Translate the provider's profile payload."""
        raise NotImplementedError

    async def _exchange_code_for_token(self, code: str, code_verifier: str) -> str:
        """Exchange authorization code for access token.

        Args:
            code: Authorization code from callback
            code_verifier: PKCE code verifier, empty when PKCE is not used

        Returns:
            Access token

        Raises:
            OAuthError: If token exchange fails
        """
        data = {
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": self.redirect_uri,
        }
        if code_verifier:
            data["code_verifier"] = code_verifier

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.token_url,
                    data=data,
                    auth=(self.client_id, self.client_secret),
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as e:
            logfire.error(
                "OAuth token exchange HTTP error",
                provider=self.provider.value,
                error=str(e),
            )
            raise OAuthError(f"HTTP error during token exchange: {e}") from e

        if response.status_code != 200:
            logfire.error(
                "OAuth token exchange failed",
                provider=self.provider.value,
                status_code=response.status_code,
                error=response.text,
            )
            raise OAuthError(f"Token exchange failed: {response.status_code}")

        access_token = response.json().get("access_token")
        if not access_token:
            raise OAuthError("Token response carried no access token")
        return access_token

    async def _get_user_info(self, access_token: str) -> dict[str, Any]:
        """Get the authenticated user's profile.

        Args:
            access_token: OAuth access token

        Returns:
            Profile payload

        Raises:
            OAuthError: If API request fails
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    self.user_info_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
        except httpx.HTTPError as e:
            logfire.error(
                "OAuth user info HTTP error",
                provider=self.provider.value,
                error=str(e),
            )
            raise OAuthError(f"HTTP error fetching user info: {e}") from e

        if response.status_code != 200:
            logfire.error(
                "OAuth user info request failed",
                provider=self.provider.value,
                status_code=response.status_code,
                error=response.text,
            )
            raise OAuthError(f"User info request failed: {response.status_code}")

        return response.json()


class MockOAuth2Client(OAuthClient):
    """Deterministic OAuth client for tests.

    Any code completes; profiles can be registered per code, otherwise one is
    derived from the code itself.
    """

    provider: AuthProvider
    authorize_url: str

    def __init__(self) -> None:
        self._profiles: dict[str, OAuthProviderInfo] = {}

    def register_profile(
        self,
        code: str,
        provider_user_id: str,
        email: str | None,
        display_name: str | None = None,
    ) -> OAuthProviderInfo:
        """Make ``code`` complete with the given profile.

        Args:
            code: Authorization code the callback will carry
            provider_user_id: Provider account ID to report
            email: Email to report, None to simulate a profile without one
            display_name: Optional display name

        Returns:
            The registered profile
        """
        info = OAuthProviderInfo(
            provider=self.provider,
            provider_user_id=provider_user_id,
            email=email,
            display_name=display_name,
        )
        self._profiles[code] = info
        return info

    async def initiate_authorization(self, state: str) -> str:
        """Return mock authorization URL."""
        return f"{self.authorize_url}?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> OAuthProviderInfo:
        """Return the registered or derived profile for ``code``."""
        if code in self._profiles:
            return self._profiles[code]
        return OAuthProviderInfo(
            provider=self.provider,
            provider_user_id=f"{self.provider.value}-{code}",
            email=f"{code}@{self.provider.value}.example.com",
            display_name=f"Mock {self.provider.value} user",
        )
