"""Domain layer DI providers."""

from dishka import Scope, provide

from reviewbot.config import PasswordSettings, SessionSettings
from reviewbot.domain.repository import SessionRepository, UserRepository
from reviewbot.domain.service import (
    AuthService,
    IdentityLinkService,
    OAuthClient,
    PasswordService,
    SessionService,
    UserService,
)
from reviewbot.domain.value import AuthProvider
from reviewbot.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    The password service holds no per-request state and is shared.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_password_service(self, password_settings: PasswordSettings) -> PasswordService:
        """Provide credential hashing service."""
        return PasswordService(password_settings=password_settings)

    @provide
    def get_auth_service(
        self, oauth_clients: dict[AuthProvider, OAuthClient]
    ) -> AuthService:
        """Provide multi-provider authentication domain service.

        Args:
            oauth_clients: Dictionary mapping providers to their OAuth clients

        Returns:
            AuthService configured with all available OAuth clients
        """
        return AuthService(oauth_clients=oauth_clients)

    @provide
    def get_user_service(
        self, user_repository: UserRepository, password_service: PasswordService
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository, password_service=password_service
        )

    @provide
    def get_identity_link_service(self, user_service: UserService) -> IdentityLinkService:
        """Provide identity link domain service."""
        return IdentityLinkService(user_service=user_service)

    @provide
    def get_session_service(
        self,
        session_repository: SessionRepository,
        user_service: UserService,
        session_settings: SessionSettings,
    ) -> SessionService:
        """Provide session domain service."""
        return SessionService(
            session_repository=session_repository,
            user_service=user_service,
            session_settings=session_settings,
        )
