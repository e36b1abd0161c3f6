"""In-memory session repository for testing."""

from datetime import datetime
from typing import Optional

from reviewbot.domain.model import Session
from reviewbot.domain.repository import SessionRepository
from reviewbot.domain.value import SessionToken, UserId


class InMemorySessionRepository(SessionRepository):
    """In-memory implementation of SessionRepository for testing."""

    def __init__(self) -> None:
        self._sessions: dict[SessionToken, Session] = {}

    async def bind(self, session: Session) -> Session:
        """Persist a session binding."""
        self._sessions[session.token] = session
        return session

    async def unbind(self, token: SessionToken) -> bool:
        """Remove a session binding."""
        return self._sessions.pop(token, None) is not None

    async def resolve(self, token: SessionToken, now: datetime) -> Optional[UserId]:
        """Look up the user bound to a live token."""
        session = self._sessions.get(token)
        if not session:
            return None
        if session.is_expired(now):
            del self._sessions[token]
            return None
        return session.user_id

    async def unbind_all_for_user(
        self, user_id: UserId, keep: Optional[SessionToken] = None
    ) -> int:
        """Remove every binding of a user except ``keep``."""
        doomed = [
            token
            for token, session in self._sessions.items()
            if session.user_id == user_id and token != keep
        ]
        for token in doomed:
            del self._sessions[token]
        return len(doomed)
