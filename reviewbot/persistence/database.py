"""Engine, sessions and schema bootstrap for the identity store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from reviewbot.config import Settings
from reviewbot.persistence.tables import metadata


def create_engine(settings: Settings) -> AsyncEngine:
    """Pooled asyncpg engine.

    SQL echo follows ``DEBUG``; bound parameters (credential hashes, token
    digests) are hidden from error messages.

    Args:
        settings: Application settings
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        hide_parameters=not settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        connect_args={"server_settings": {"application_name": "reviewbot-auth"}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for request-scoped sessions.

    Rows are mapped to frozen domain models right away, so nothing relies on
    attribute refresh after commit.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def create_schema(engine: AsyncEngine) -> None:
    """Create the users and sessions tables if they do not exist.

    Args:
        engine: Database engine
    """
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
