"""OAuth login use case."""

import logfire
from pydantic import BaseModel

from reviewbot.application.usecase.base import BaseUseCase
from reviewbot.application.usecase.user.user_info import UserInfo
from reviewbot.domain.service import AuthService, IdentityLinkService, SessionService
from reviewbot.domain.value import AuthProvider, SessionToken


class OAuthLoginRequest(BaseModel):
    """Login request from an OAuth callback.

    These parameters come from the OAuth provider in the callback URL.
    """

    provider: AuthProvider
    code: str  # OAuth authorization code
    state: str  # State parameter issued when the flow started
    current_token: SessionToken | None = None


class OAuthLoginResponse(BaseModel):
    """OAuth login response."""

    user: UserInfo
    token: str


class OAuthLoginUseCase(BaseUseCase):
    """Use case for Google and Discord login."""

    def __init__(
        self,
        auth_service: AuthService,
        identity_link_service: IdentityLinkService,
        session_service: SessionService,
    ) -> None:
        """Initialize OAuth login use case.

        Args:
            auth_service: Authentication domain service (handles all providers)
            identity_link_service: Maps provider profiles onto users
            session_service: Session domain service
        """
        self.auth_service = auth_service
        self.identity_link_service = identity_link_service
        self.session_service = session_service

    async def execute(self, request: OAuthLoginRequest) -> OAuthLoginResponse:
        """Execute OAuth login flow.

        Steps:
        1. Complete OAuth flow with provider and get profile
        2. Resolve the profile to a user (existing, linked by email, or new)
        3. Bind the user to a fresh session

        Args:
            request: OAuth callback parameters

        Returns:
            Resolved user and session token

        Raises:
            OAuthError: If the provider flow fails
            MissingEmailError: If a new account would have no email
        """
        with logfire.span("oauth_login", provider=request.provider.value):
            info = await self.auth_service.complete_login(
                request.provider, request.code, request.state
            )

            user = await self.identity_link_service.resolve(
                info.provider, info.provider_user_id, info.email
            )
            session = await self.session_service.bind(user.id, request.current_token)

            return OAuthLoginResponse(user=UserInfo.from_user(user), token=session.token)
