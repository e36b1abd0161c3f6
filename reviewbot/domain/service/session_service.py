"""Session binding and request gating."""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import logfire

from reviewbot.config import SessionSettings
from reviewbot.domain.error import AuthenticationFailure, NotFoundError
from reviewbot.domain.model import Session, User
from reviewbot.domain.repository import SessionRepository
from reviewbot.domain.value import SessionToken, UserId

from .base import Service
from .user_service import UserService


@dataclass(frozen=True)
class AuthContext:
    """Authentication state of one request.

    ``user`` and ``token`` are set exactly when ``is_authenticated`` is True.
    """

    is_authenticated: bool
    user: User | None = None
    token: SessionToken | None = None

    @classmethod
    def anonymous(cls) -> "AuthContext":
        return cls(is_authenticated=False)


class SessionService(Service):
    """Binds users to session tokens and gates requests on them.

    A session is Anonymous until ``bind`` succeeds and Authenticated until
    ``unbind`` or store-side expiry. Concurrent writes for one session are
    last-write-wins.
    """

    def __init__(
        self,
        session_repository: SessionRepository,
        user_service: UserService,
        session_settings: SessionSettings,
    ) -> None:
        """Initialize session service.

        Args:
            session_repository: Session store
            user_service: User domain service, used to load bound users
            session_settings: Session lifetime configuration
        """
        self.session_repository = session_repository
        self.user_service = user_service
        self.session_settings = session_settings

    async def bind(
        self, user_id: UserId, current_token: SessionToken | None = None
    ) -> Session:
        """Bind a user to a fresh session.

        Any token the client already holds is unbound first, so a login
        never reuses a pre-existing session identifier.

        Args:
            user_id: User to bind
            current_token: Session token presented with the request, if any

        Returns:
            New session binding
        """
        with logfire.span("session_service.bind", user_id=str(user_id)):
            if current_token:
                await self.session_repository.unbind(current_token)

            now = datetime.now(timezone.utc)
            session = Session(
                token=SessionToken(secrets.token_urlsafe(32)),
                user_id=user_id,
                created_at=now,
                expires_at=now + timedelta(hours=self.session_settings.max_age_hours),
            )
            await self.session_repository.bind(session)

            logfire.info("Session bound", user_id=str(user_id))
            return session

    async def unbind(self, token: SessionToken | None) -> None:
        """Destroy a session. Unknown or missing tokens are ignored.

        Args:
            token: Session token
        """
        if not token:
            return

        with logfire.span("session_service.unbind"):
            removed = await self.session_repository.unbind(token)
            logfire.info("Session unbound", removed=removed)

    async def revoke_other_sessions(
        self, user_id: UserId, keep: SessionToken | None = None
    ) -> int:
        """Destroy every session of a user except ``keep``.

        Args:
            user_id: User whose sessions are revoked
            keep: Session to leave in place

        Returns:
            Number of sessions removed
        """
        with logfire.span("session_service.revoke_other_sessions", user_id=str(user_id)):
            removed = await self.session_repository.unbind_all_for_user(
                user_id, keep=keep
            )
            logfire.info("Sessions revoked", user_id=str(user_id), count=removed)
            return removed

    async def check(self, token: SessionToken | None) -> AuthContext:
        """Non-blocking gate: report who, if anyone, the session belongs to.

        Args:
            token: Session token from the request, if any

        Returns:
            Authentication context; anonymous when unbound, expired, or bound
            to a user that no longer exists
        """
        if not token:
            return AuthContext.anonymous()

        with logfire.span("session_service.check"):
            user_id = await self.session_repository.resolve(
                token, datetime.now(timezone.utc)
            )
            if user_id is None:
                return AuthContext.anonymous()

            try:
                user = await self.user_service.get_by_id(user_id)
            except NotFoundError:
                logfire.warn("Session bound to missing user", user_id=str(user_id))
                return AuthContext.anonymous()

            return AuthContext(is_authenticated=True, user=user, token=token)

    async def require(self, token: SessionToken | None) -> AuthContext:
        """Blocking gate: fail unless the session is bound to a user.

        Args:
            token: Session token from the request, if any

        Returns:
            Authenticated context

        Raises:
            AuthenticationFailure: If the session is anonymous
        """
        context = await self.check(token)
        if not context.is_authenticated:
            raise AuthenticationFailure(
                "You must be logged in to access this resource"
            )
        return context
