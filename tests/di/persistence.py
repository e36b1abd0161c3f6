"""Mock persistence providers for testing."""

from dishka import Scope, provide

from reviewbot.domain.repository import SessionRepository, UserRepository
from reviewbot.persistence.repository.inmemory import (
    InMemorySessionRepository,
    InMemoryUserRepository,
)
from reviewbot.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Repositories are APP-scoped so that state survives across the requests of
    one test; every test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_session_repository(self) -> SessionRepository:
        """Provide in-memory session repository."""
        return InMemorySessionRepository()
