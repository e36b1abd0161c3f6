"""Signup use case."""

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from reviewbot.application.usecase.base import BaseUseCase
from reviewbot.application.usecase.user.user_info import UserInfo
from reviewbot.domain.error import DuplicateIdentityError, ValidationError
from reviewbot.domain.service import PasswordService, SessionService, UserService
from reviewbot.domain.value import Email, SessionToken


class SignupRequest(BaseModel):
    """Local signup request."""

    email: str | None = None
    password: str | None = None
    current_token: SessionToken | None = None  # Session the client already holds


class SignupResponse(BaseModel):
    """Signup response."""

    user: UserInfo
    token: str


class SignupUseCase(BaseUseCase):
    """Use case for creating a local email + password account."""

    def __init__(
        self,
        user_service: UserService,
        password_service: PasswordService,
        session_service: SessionService,
    ) -> None:
        """Initialize signup use case.

        Args:
            user_service: User domain service
            password_service: Credential hasher
            session_service: Session domain service
        """
        self.user_service = user_service
        self.password_service = password_service
        self.session_service = session_service

    async def execute(self, request: SignupRequest) -> SignupResponse:
        """Execute signup flow.

        Steps:
        1. Validate presence, email syntax and password length
        2. Reject an email that is already registered
        3. Create the user (the password is hashed on the way in)
        4. Bind the new user to a fresh session

        Args:
            request: Signup request

        Returns:
            Created user and session token

        Raises:
            ValidationError: If input is missing or malformed
            DuplicateIdentityError: If the email is already registered
        """
        if not request.email or not request.password:
            raise ValidationError("Email and password are required")

        try:
            email = Email(request.email).root
        except PydanticValidationError:
            raise ValidationError("Please provide a valid email address")

        self.password_service.validate_strength(request.password)

        with logfire.span("signup"):
            # The store constraint still decides under concurrency
            if await self.user_service.get_user_by_email(email):
                logfire.info("Signup with registered email rejected")
                raise DuplicateIdentityError("email", email)

            user = await self.user_service.create_user(
                email=email, password=request.password
            )
            session = await self.session_service.bind(user.id, request.current_token)

            return SignupResponse(user=UserInfo.from_user(user), token=session.token)
