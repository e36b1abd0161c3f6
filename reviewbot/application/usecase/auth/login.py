"""Login use case."""

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from reviewbot.application.usecase.base import BaseUseCase
from reviewbot.application.usecase.user.user_info import UserInfo
from reviewbot.domain.error import AuthenticationFailure, ValidationError
from reviewbot.domain.service import PasswordService, SessionService, UserService
from reviewbot.domain.value import Email, SessionToken


class LoginRequest(BaseModel):
    """Local login request."""

    email: str | None = None
    password: str | None = None
    current_token: SessionToken | None = None


class LoginResponse(BaseModel):
    """Login response."""

    user: UserInfo
    token: str


class LoginUseCase(BaseUseCase):
    """Use case for email + password login."""

    def __init__(
        self,
        user_service: UserService,
        password_service: PasswordService,
        session_service: SessionService,
    ) -> None:
        """Initialize login use case.

        Args:
            user_service: User domain service
            password_service: Credential hasher
            session_service: Session domain service
        """
        self.user_service = user_service
        self.password_service = password_service
        self.session_service = session_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute login flow.

        Unknown email, an OAuth-only account and a wrong password all fail
        with the same ``AuthenticationFailure``; only the logs tell them apart.

        Args:
            request: Login request

        Returns:
            Authenticated user and new session token

        Raises:
            ValidationError: If email or password is missing, or the email is
                malformed
            AuthenticationFailure: If the credentials do not match
        """
        if not request.email or not request.password:
            raise ValidationError("Email and password are required")

        try:
            email = Email(request.email).root
        except PydanticValidationError:
            raise ValidationError("Please provide a valid email address")

        with logfire.span("login"):
            user = await self.user_service.get_user_by_email(email)
            if not user:
                logfire.info("Login failed", reason="unknown_email")
                raise AuthenticationFailure()

            if not user.credential_hash:
                logfire.info(
                    "Login failed", reason="no_local_password", user_id=str(user.id)
                )
                raise AuthenticationFailure()

            if not await self.password_service.verify_password(
                request.password, user.credential_hash
            ):
                logfire.info(
                    "Login failed", reason="wrong_password", user_id=str(user.id)
                )
                raise AuthenticationFailure()

            if self.password_service.needs_rehash(user.credential_hash):
                user = await self.user_service.rehash_credential(
                    user.id, request.password
                )

            session = await self.session_service.bind(user.id, request.current_token)
            logfire.info("Login succeeded", user_id=str(user.id))

            return LoginResponse(user=UserInfo.from_user(user), token=session.token)
