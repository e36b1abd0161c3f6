"""Session gates for routes.

``require_auth`` blocks anonymous requests with a 401 before the handler
runs; ``check_auth`` never blocks and reports what it found.
"""

from dishka import AsyncContainer
from fastapi import Request

from reviewbot.config import SessionSettings
from reviewbot.domain.service import AuthContext, SessionService
from reviewbot.domain.value import SessionToken


def _container(request: Request) -> AsyncContainer:
    return request.state.dishka_container


async def session_token(request: Request) -> SessionToken | None:
    """Session token carried by the request cookie, if any."""
    settings = await _container(request).get(SessionSettings)
    token = request.cookies.get(settings.cookie_name)
    return SessionToken(token) if token else None


async def require_auth(request: Request) -> AuthContext:
    """Authenticated context or an ``AuthenticationFailure`` (401)."""
    service = await _container(request).get(SessionService)
    return await service.require(await session_token(request))


async def check_auth(request: Request) -> AuthContext:
    """Authentication context, anonymous when no user is bound."""
    service = await _container(request).get(SessionService)
    return await service.check(await session_token(request))
