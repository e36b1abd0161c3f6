"""List users use case."""

from pydantic import BaseModel

from reviewbot.application.usecase.base import BaseUseCase
from reviewbot.domain.service import UserService

from .user_info import UserInfo


class ListUsersResponse(BaseModel):
    """List users response."""

    users: list[UserInfo]
    total: int


class ListUsersUseCase(BaseUseCase):
    """Administrative listing of every user."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: None = None) -> ListUsersResponse:
        users = await self.user_service.list_users()
        return ListUsersResponse(
            users=[UserInfo.from_user(user) for user in users],
            total=len(users),
        )
