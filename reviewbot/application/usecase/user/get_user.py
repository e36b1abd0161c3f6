"""Get user use case."""

from uuid import UUID

from pydantic import BaseModel

from reviewbot.application.usecase.base import BaseUseCase
from reviewbot.domain.service import UserService
from reviewbot.domain.value import UserId

from .user_info import UserInfo


class GetUserRequest(BaseModel):
    """Get user request."""

    user_id: UUID


class GetUserUseCase(BaseUseCase):
    """Use case for looking up a user by ID."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetUserRequest) -> UserInfo:
        """Load a user.

        Args:
            request: Request with the user ID

        Returns:
            Public user information

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.user_service.get_by_id(UserId(request.user_id))
        return UserInfo.from_user(user)
