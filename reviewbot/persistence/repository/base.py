"""Shared plumbing for the PostgreSQL repositories."""

from sqlalchemy.engine import Result
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from reviewbot.domain.error import StoreUnavailableError


class PostgresRepository:
    """Runs statements on the request session.

    Lost connections surface as ``StoreUnavailableError``; constraint
    violations still raise ``IntegrityError`` for the services to translate.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _execute(self, stmt: Executable) -> Result:
        try:
            return await self.session.execute(stmt)
        except (OperationalError, InterfaceError, OSError) as e:
            raise StoreUnavailableError("Database unavailable") from e
