"""Session repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from reviewbot.domain.model.session import Session
from reviewbot.domain.value import SessionToken, UserId


class SessionRepository(ABC):
    """Store of session bindings (token -> user).

    Expiry is owned by the store: a binding past ``expires_at`` resolves to
    nothing.
    """

    @abstractmethod
    async def bind(self, session: Session) -> Session:
        """Persist a session binding.

        Args:
            session: The binding to store

        Returns:
            The stored binding
        """
        pass

    @abstractmethod
    async def unbind(self, token: SessionToken) -> bool:
        """Remove a session binding.

        Args:
            token: Session token

        Returns:
            True if a binding was removed
        """
        pass

    @abstractmethod
    async def resolve(self, token: SessionToken, now: datetime) -> Optional[UserId]:
        """Look up the user bound to a token.

        Args:
            token: Session token
            now: Current time, used for expiry

        Returns:
            The bound user ID, None if unknown or expired
        """
        pass

    @abstractmethod
    async def unbind_all_for_user(
        self, user_id: UserId, keep: Optional[SessionToken] = None
    ) -> int:
        """Remove every binding of a user.

        Args:
            user_id: The user whose sessions are revoked
            keep: Token to leave in place (the caller's own session)

        Returns:
            Number of bindings removed
        """
        pass
