"""Change password use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from reviewbot.application.usecase.base import BaseUseCase
from reviewbot.domain.error import AuthenticationFailure, ValidationError
from reviewbot.domain.service import PasswordService, SessionService, UserService
from reviewbot.domain.value import SessionToken, UserId


class ChangePasswordRequest(BaseModel):
    """Change password request."""

    user_id: UUID
    token: SessionToken  # Session kept alive after the change
    current_password: str | None = None
    new_password: str | None = None


class ChangePasswordResponse(BaseModel):
    """Change password response."""

    success: bool
    message: str
    sessions_revoked: int


class ChangePasswordUseCase(BaseUseCase):
    """Use case for setting or replacing a local password.

    OAuth-only accounts may set a first password without supplying a current
    one; accounts that already have one must prove it.
    """

    def __init__(
        self,
        user_service: UserService,
        password_service: PasswordService,
        session_service: SessionService,
    ) -> None:
        """Initialize change password use case.

        Args:
            user_service: User domain service
            password_service: Credential hasher
            session_service: Session domain service
        """
        self.user_service = user_service
        self.password_service = password_service
        self.session_service = session_service

    async def execute(self, request: ChangePasswordRequest) -> ChangePasswordResponse:
        """Execute change password flow.

        Steps:
        1. Verify the current password when the account has one
        2. Store the new password through the user service (hashed there)
        3. Revoke every other session of the user

        Raises:
            ValidationError: If the new password is missing or too short
            AuthenticationFailure: If the current password does not match
        """
        if not request.new_password:
            raise ValidationError("New password is required")

        user_id = UserId(request.user_id)

        with logfire.span("change_password", user_id=str(user_id)):
            user = await self.user_service.get_by_id(user_id)

            if user.credential_hash:
                if not request.current_password or not (
                    await self.password_service.verify_password(
                        request.current_password, user.credential_hash
                    )
                ):
                    logfire.info("Password change rejected", user_id=str(user_id))
                    raise AuthenticationFailure("Current password is incorrect")

            await self.user_service.update_credential(user_id, request.new_password)
            revoked = await self.session_service.revoke_other_sessions(
                user_id, keep=request.token
            )

            return ChangePasswordResponse(
                success=True,
                message="Password updated successfully",
                sessions_revoked=revoked,
            )
