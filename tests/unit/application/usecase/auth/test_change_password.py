"""Unit tests for ChangePasswordUseCase, LogoutUseCase and GetCurrentUserUseCase."""

from uuid import UUID

from dishka import AsyncContainer
import pytest

from reviewbot.application.usecase.auth import (
    ChangePasswordUseCase,
    GetCurrentUserUseCase,
    LoginUseCase,
    LogoutUseCase,
    OAuthLoginUseCase,
    SignupUseCase,
)
from reviewbot.application.usecase.auth.change_password import ChangePasswordRequest
from reviewbot.application.usecase.auth.get_current_user import GetCurrentUserRequest
from reviewbot.application.usecase.auth.login import LoginRequest
from reviewbot.application.usecase.auth.logout import LogoutRequest
from reviewbot.application.usecase.auth.oauth_login import OAuthLoginRequest
from reviewbot.application.usecase.auth.signup import SignupRequest
from reviewbot.domain.error import AuthenticationFailure, ValidationError
from reviewbot.domain.service import SessionService
from reviewbot.domain.value import AuthProvider
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestChangePasswordUseCase:
    """Tests for ChangePasswordUseCase."""

    @pytest.mark.asyncio
    async def test_change_password(self, unit_env: AsyncContainer):
        # Arrange
        signup = await unit_env.get(SignupUseCase)
        login = await unit_env.get(LoginUseCase)
        change = await unit_env.get(ChangePasswordUseCase)
        session_service = await unit_env.get(SessionService)
        created = await signup.execute(
            SignupRequest(email="alice@example.com", password="correct horse")
        )
        other = await login.execute(
            LoginRequest(email="alice@example.com", password="correct horse")
        )

        # Act
        result = await change.execute(
            ChangePasswordRequest(
                user_id=UUID(created.user.id),
                token=created.token,
                current_password="correct horse",
                new_password="battery staple",
            )
        )

        # Assert
        assert result.success
        assert result.sessions_revoked == 1
        assert (await session_service.check(created.token)).is_authenticated
        assert not (await session_service.check(other.token)).is_authenticated
        with pytest.raises(AuthenticationFailure):
            await login.execute(
                LoginRequest(email="alice@example.com", password="correct horse")
            )
        await login.execute(
            LoginRequest(email="alice@example.com", password="battery staple")
        )

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, unit_env: AsyncContainer):
        signup = await unit_env.get(SignupUseCase)
        change = await unit_env.get(ChangePasswordUseCase)
        created = await signup.execute(
            SignupRequest(email="alice@example.com", password="correct horse")
        )

        with pytest.raises(AuthenticationFailure, match="Current password"):
            await change.execute(
                ChangePasswordRequest(
                    user_id=UUID(created.user.id),
                    token=created.token,
                    current_password="wrong password",
                    new_password="battery staple",
                )
            )

    @pytest.mark.asyncio
    async def test_oauth_user_sets_first_password(self, unit_env: AsyncContainer):
        oauth_login = await unit_env.get(OAuthLoginUseCase)
        change = await unit_env.get(ChangePasswordUseCase)
        login = await unit_env.get(LoginUseCase)
        linked = await oauth_login.execute(
            OAuthLoginRequest(provider=AuthProvider.GOOGLE, code="erin", state="s")
        )

        await change.execute(
            ChangePasswordRequest(
                user_id=UUID(linked.user.id),
                token=linked.token,
                new_password="battery staple",
            )
        )

        response = await login.execute(
            LoginRequest(email=linked.user.email, password="battery staple")
        )
        assert response.user.google_id == linked.user.google_id

    @pytest.mark.asyncio
    async def test_new_password_required(self, unit_env: AsyncContainer):
        signup = await unit_env.get(SignupUseCase)
        change = await unit_env.get(ChangePasswordUseCase)
        created = await signup.execute(
            SignupRequest(email="alice@example.com", password="correct horse")
        )

        with pytest.raises(ValidationError):
            await change.execute(
                ChangePasswordRequest(
                    user_id=UUID(created.user.id),
                    token=created.token,
                    current_password="correct horse",
                    new_password="short",
                )
            )


class TestSessionUseCases:
    """Tests for LogoutUseCase and GetCurrentUserUseCase."""

    @pytest.mark.asyncio
    async def test_logout_then_current_user_fails(self, unit_env: AsyncContainer):
        signup = await unit_env.get(SignupUseCase)
        logout = await unit_env.get(LogoutUseCase)
        current = await unit_env.get(GetCurrentUserUseCase)
        created = await signup.execute(
            SignupRequest(email="alice@example.com", password="correct horse")
        )

        me = await current.execute(GetCurrentUserRequest(token=created.token))
        result = await logout.execute(LogoutRequest(token=created.token))

        assert me.id == created.user.id
        assert result.success
        with pytest.raises(AuthenticationFailure):
            await current.execute(GetCurrentUserRequest(token=created.token))

    @pytest.mark.asyncio
    async def test_logout_without_session(self, unit_env: AsyncContainer):
        logout = await unit_env.get(LogoutUseCase)

        result = await logout.execute(LogoutRequest())

        assert result.success
