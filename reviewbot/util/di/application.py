"""Application layer DI providers."""

from dishka import Scope, provide

from reviewbot.application.usecase.auth import (
    ChangePasswordUseCase,
    GetCurrentUserUseCase,
    LoginUseCase,
    LogoutUseCase,
    OAuthLoginUseCase,
    SignupUseCase,
)
from reviewbot.application.usecase.user import (
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
)
from reviewbot.domain.service import (
    AuthService,
    IdentityLinkService,
    PasswordService,
    SessionService,
    UserService,
)
from reviewbot.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Auth use cases
    @provide
    def get_signup_use_case(
        self,
        user_service: UserService,
        password_service: PasswordService,
        session_service: SessionService,
    ) -> SignupUseCase:
        """Provide signup use case."""
        return SignupUseCase(
            user_service=user_service,
            password_service=password_service,
            session_service=session_service,
        )

    @provide
    def get_login_use_case(
        self,
        user_service: UserService,
        password_service: PasswordService,
        session_service: SessionService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            user_service=user_service,
            password_service=password_service,
            session_service=session_service,
        )

    @provide
    def get_logout_use_case(self, session_service: SessionService) -> LogoutUseCase:
        """Provide logout use case."""
        return LogoutUseCase(session_service=session_service)

    @provide
    def get_oauth_login_use_case(
        self,
        auth_service: AuthService,
        identity_link_service: IdentityLinkService,
        session_service: SessionService,
    ) -> OAuthLoginUseCase:
        """Provide OAuth login use case."""
        return OAuthLoginUseCase(
            auth_service=auth_service,
            identity_link_service=identity_link_service,
            session_service=session_service,
        )

    @provide
    def get_current_user_use_case(
        self, session_service: SessionService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(session_service=session_service)

    @provide
    def get_change_password_use_case(
        self,
        user_service: UserService,
        password_service: PasswordService,
        session_service: SessionService,
    ) -> ChangePasswordUseCase:
        """Provide change password use case."""
        return ChangePasswordUseCase(
            user_service=user_service,
            password_service=password_service,
            session_service=session_service,
        )

    # User use cases
    @provide
    def get_get_user_use_case(self, user_service: UserService) -> GetUserUseCase:
        """Provide get user use case."""
        return GetUserUseCase(user_service=user_service)

    @provide
    def get_list_users_use_case(self, user_service: UserService) -> ListUsersUseCase:
        """Provide list users use case."""
        return ListUsersUseCase(user_service=user_service)

    @provide
    def get_delete_user_use_case(
        self, user_service: UserService, session_service: SessionService
    ) -> DeleteUserUseCase:
        """Provide delete user use case."""
        return DeleteUserUseCase(
            user_service=user_service, session_service=session_service
        )
