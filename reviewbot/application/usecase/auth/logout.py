"""Logout use case."""

from pydantic import BaseModel

from reviewbot.application.usecase.base import BaseUseCase
from reviewbot.domain.service import SessionService
from reviewbot.domain.value import SessionToken


class LogoutRequest(BaseModel):
    """Logout request."""

    token: SessionToken | None = None


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


class LogoutUseCase(BaseUseCase):
    """Use case for ending the current session. Always succeeds."""

    def __init__(self, session_service: SessionService) -> None:
        self.session_service = session_service

    async def execute(self, request: LogoutRequest) -> LogoutResponse:
        await self.session_service.unbind(request.token)
        return LogoutResponse(success=True, message="Logged out successfully")
