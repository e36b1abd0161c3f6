"""Unit tests for SignupUseCase."""

import asyncio

from dishka import AsyncContainer
import pytest

from reviewbot.application.usecase.auth import SignupUseCase
from reviewbot.application.usecase.auth.signup import SignupRequest
from reviewbot.domain.error import DuplicateIdentityError, ValidationError
from reviewbot.domain.repository import UserRepository
from reviewbot.domain.service import SessionService
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestSignupUseCase:
    """Tests for SignupUseCase."""

    @pytest.mark.asyncio
    async def test_signup_creates_user_and_session(self, unit_env: AsyncContainer):
        # Arrange
        signup = await unit_env.get(SignupUseCase)
        session_service = await unit_env.get(SessionService)

        # Act
        response = await signup.execute(
            SignupRequest(email="Alice@Example.com", password="correct horse")
        )

        # Assert
        assert response.user.email == "alice@example.com"
        assert response.user.has_password
        context = await session_service.check(response.token)
        assert context.is_authenticated
        assert str(context.user.id) == response.user.id

    @pytest.mark.asyncio
    async def test_response_never_exposes_hash(self, unit_env: AsyncContainer):
        signup = await unit_env.get(SignupUseCase)

        response = await signup.execute(
            SignupRequest(email="alice@example.com", password="correct horse")
        )

        dumped = response.user.model_dump()
        assert "credential_hash" not in dumped
        assert "password" not in dumped

    @pytest.mark.asyncio
    async def test_duplicate_email(self, unit_env: AsyncContainer):
        signup = await unit_env.get(SignupUseCase)
        await signup.execute(
            SignupRequest(email="alice@example.com", password="correct horse")
        )

        with pytest.raises(DuplicateIdentityError):
            await signup.execute(
                SignupRequest(email="ALICE@example.com", password="another one")
            )

    @pytest.mark.asyncio
    async def test_concurrent_signups_create_one_user(self, unit_env: AsyncContainer):
        """Both requests pass the pre-check while hashing; the store decides."""
        signup = await unit_env.get(SignupUseCase)
        user_repo = await unit_env.get(UserRepository)

        results = await asyncio.gather(
            signup.execute(
                SignupRequest(email="alice@example.com", password="correct horse")
            ),
            signup.execute(
                SignupRequest(email="ALICE@example.com", password="battery staple")
            ),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], DuplicateIdentityError)
        users = await user_repo.find_all()
        assert [u.email for u in users] == ["alice@example.com"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,password,message",
        [
            (None, "correct horse", "required"),
            ("alice@example.com", None, "required"),
            ("not-an-email", "correct horse", "valid email"),
            ("alice@example", "correct horse", "valid email"),
            ("alice@example.com", "short", "at least 8"),
        ],
    )
    async def test_invalid_input_creates_nothing(
        self, unit_env: AsyncContainer, email, password, message
    ):
        signup = await unit_env.get(SignupUseCase)
        user_repo = await unit_env.get(UserRepository)

        with pytest.raises(ValidationError, match=message):
            await signup.execute(SignupRequest(email=email, password=password))

        assert await user_repo.find_all() == []

    @pytest.mark.asyncio
    async def test_signup_rotates_existing_session(self, unit_env: AsyncContainer):
        signup = await unit_env.get(SignupUseCase)
        session_service = await unit_env.get(SessionService)
        first = await signup.execute(
            SignupRequest(email="alice@example.com", password="correct horse")
        )

        second = await signup.execute(
            SignupRequest(
                email="bob@example.com",
                password="correct horse",
                current_token=first.token,
            )
        )

        assert not (await session_service.check(first.token)).is_authenticated
        context = await session_service.check(second.token)
        assert context.user.email == "bob@example.com"
