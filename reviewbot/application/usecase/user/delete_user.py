"""Delete user use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from reviewbot.application.usecase.base import BaseUseCase
from reviewbot.domain.service import SessionService, UserService
from reviewbot.domain.value import UserId


class DeleteUserRequest(BaseModel):
    """Delete user request."""

    user_id: UUID


class DeleteUserResponse(BaseModel):
    """Delete user response."""

    user_id: str
    sessions_revoked: int


class DeleteUserUseCase(BaseUseCase):
    """Administrative removal of a user and every session bound to it."""

    def __init__(
        self, user_service: UserService, session_service: SessionService
    ) -> None:
        """Initialize delete user use case.

        Args:
            user_service: User domain service
            session_service: Session domain service
        """
        self.user_service = user_service
        self.session_service = session_service

    async def execute(self, request: DeleteUserRequest) -> DeleteUserResponse:
        """Delete a user.

        Steps:
        1. Ensure the user exists
        2. Revoke all of their sessions
        3. Delete the user

        Raises:
            NotFoundError: If the user does not exist
        """
        user_id = UserId(request.user_id)
        await self.user_service.get_by_id(user_id)

        revoked = await self.session_service.revoke_other_sessions(user_id)
        await self.user_service.delete_user(user_id)

        logfire.info("User deleted", user_id=str(user_id), sessions_revoked=revoked)
        return DeleteUserResponse(user_id=str(user_id), sessions_revoked=revoked)
