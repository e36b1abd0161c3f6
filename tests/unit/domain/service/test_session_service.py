"""Unit tests for SessionService."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from reviewbot.config import PasswordSettings, SessionSettings
from reviewbot.domain.error import AuthenticationFailure
from reviewbot.domain.model import Session
from reviewbot.domain.service import PasswordService, SessionService, UserService
from reviewbot.domain.value import SessionToken
from reviewbot.persistence.repository.inmemory import (
    InMemorySessionRepository,
    InMemoryUserRepository,
)


@pytest.fixture
def user_service() -> UserService:
    password_service = PasswordService(
        PasswordSettings(time_cost=1, memory_cost=8192, parallelism=1)
    )
    return UserService(InMemoryUserRepository(), password_service)


@pytest.fixture
def session_repo() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def session_service(session_repo, user_service) -> SessionService:
    return SessionService(session_repo, user_service, SessionSettings())


@pytest_asyncio.fixture
async def user(user_service):
    return await user_service.create_user("alice@example.com", "correct horse")


class TestBind:
    """Tests for SessionService.bind()."""

    @pytest.mark.asyncio
    async def test_bind_then_check(self, session_service, user):
        session = await session_service.bind(user.id)

        context = await session_service.check(session.token)

        assert context.is_authenticated
        assert context.user.id == user.id
        assert context.token == session.token

    @pytest.mark.asyncio
    async def test_session_lifetime(self, session_service, user):
        session = await session_service.bind(user.id)

        assert session.expires_at - session.created_at == timedelta(hours=24)

    @pytest.mark.asyncio
    async def test_bind_rotates_current_token(self, session_service, user):
        old = await session_service.bind(user.id)

        new = await session_service.bind(user.id, current_token=old.token)

        assert new.token != old.token
        assert not (await session_service.check(old.token)).is_authenticated
        assert (await session_service.check(new.token)).is_authenticated


class TestGates:
    """Tests for check() and require()."""

    @pytest.mark.asyncio
    async def test_check_without_token_is_anonymous(self, session_service):
        context = await session_service.check(None)

        assert not context.is_authenticated
        assert context.user is None

    @pytest.mark.asyncio
    async def test_check_unknown_token_is_anonymous(self, session_service):
        context = await session_service.check(SessionToken("nope"))

        assert not context.is_authenticated

    @pytest.mark.asyncio
    async def test_require_rejects_anonymous(self, session_service):
        with pytest.raises(AuthenticationFailure, match="must be logged in"):
            await session_service.require(None)

    @pytest.mark.asyncio
    async def test_expired_session_is_anonymous(
        self, session_service, session_repo, user
    ):
        past = datetime.now(timezone.utc) - timedelta(days=2)
        await session_repo.bind(
            Session(
                token=SessionToken("stale"),
                user_id=user.id,
                created_at=past,
                expires_at=past + timedelta(hours=24),
            )
        )

        context = await session_service.check(SessionToken("stale"))

        assert not context.is_authenticated

    @pytest.mark.asyncio
    async def test_session_of_deleted_user_is_anonymous(
        self, session_service, user_service, user
    ):
        session = await session_service.bind(user.id)
        await user_service.delete_user(user.id)

        context = await session_service.check(session.token)

        assert not context.is_authenticated


class TestUnbind:
    """Tests for unbind() and revoke_other_sessions()."""

    @pytest.mark.asyncio
    async def test_unbind_is_idempotent(self, session_service, user):
        session = await session_service.bind(user.id)

        await session_service.unbind(session.token)
        await session_service.unbind(session.token)
        await session_service.unbind(None)

        assert not (await session_service.check(session.token)).is_authenticated

    @pytest.mark.asyncio
    async def test_revoke_other_sessions_keeps_current(self, session_service, user):
        current = await session_service.bind(user.id)
        other = await session_service.bind(user.id)

        revoked = await session_service.revoke_other_sessions(
            user.id, keep=current.token
        )

        assert revoked == 1
        assert (await session_service.check(current.token)).is_authenticated
        assert not (await session_service.check(other.token)).is_authenticated
