"""Get current user use case."""

from pydantic import BaseModel

from reviewbot.application.usecase.base import BaseUseCase
from reviewbot.application.usecase.user.user_info import UserInfo
from reviewbot.domain.service import SessionService
from reviewbot.domain.value import SessionToken


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: SessionToken | None = None  # Session cookie value


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for getting current authenticated user."""

    def __init__(self, session_service: SessionService) -> None:
        """Initialize get current user use case.

        Args:
            session_service: Session domain service
        """
        self.session_service = session_service

    async def execute(self, request: GetCurrentUserRequest) -> UserInfo:
        """Return the user bound to the session.

        Raises:
            AuthenticationFailure: If the session is not bound to a user
        """
        context = await self.session_service.require(request.token)
        return UserInfo.from_user(context.user)
