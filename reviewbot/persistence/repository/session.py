"""PostgreSQL implementation of Session repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select

from reviewbot.domain.model import Session
from reviewbot.domain.repository import SessionRepository
from reviewbot.domain.value import SessionToken, UserId
from reviewbot.persistence.mappers import hash_session_token, session_to_dict
from reviewbot.persistence.repository.base import PostgresRepository
from reviewbot.persistence.tables import sessions_table


class PostgresSessionRepository(PostgresRepository, SessionRepository):
    """PostgreSQL implementation of SessionRepository.

    Tokens are looked up by digest; the raw token is never written.
    """

    async def bind(self, session: Session) -> Session:
        """Persist a session binding."""
        await self._execute(
            sessions_table.insert().values(**session_to_dict(session))
        )
        return session

    async def unbind(self, token: SessionToken) -> bool:
        """Remove a session binding."""
        result = await self._execute(
            delete(sessions_table).where(
                sessions_table.c.token_hash == hash_session_token(token)
            )
        )
        return result.rowcount > 0

    async def resolve(self, token: SessionToken, now: datetime) -> Optional[UserId]:
        """Look up the user bound to a live token."""
        stmt = (
            select(sessions_table.c.user_id)
            .where(sessions_table.c.token_hash == hash_session_token(token))
            .where(sessions_table.c.expires_at > now)
        )
        result = await self._execute(stmt)
        user_id = result.scalar_one_or_none()
        return UserId(user_id) if user_id else None

    async def unbind_all_for_user(
        self, user_id: UserId, keep: Optional[SessionToken] = None
    ) -> int:
        """Remove every binding of a user except ``keep``."""
        stmt = delete(sessions_table).where(sessions_table.c.user_id == user_id)
        if keep:
            stmt = stmt.where(sessions_table.c.token_hash != hash_session_token(keep))
        result = await self._execute(stmt)
        return result.rowcount
