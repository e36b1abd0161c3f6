"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from reviewbot.config import Settings
from reviewbot.domain.repository import SessionRepository, UserRepository
from reviewbot.persistence.database import create_engine, create_session_factory
from reviewbot.persistence.repository import (
    PostgresSessionRepository,
    PostgresUserRepository,
)
from reviewbot.persistence.transaction import RequestTransaction, request_session
from reviewbot.util.di.base import ProviderBase
from reviewbot.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Identity and session stores."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Stores backed by PostgreSQL."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """One pooled engine per process, disposed with the container."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        transaction: RequestTransaction,
    ) -> AsyncIterator[AsyncSession]:
        """One transaction per request, see ``request_session``."""
        async with request_session(session_factory, transaction) as session:
            yield session

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide the identity store."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_session_repository(self, session: AsyncSession) -> SessionRepository:
        """Provide the session store."""
        return PostgresSessionRepository(session)
