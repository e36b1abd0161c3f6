"""Authentication routes."""

import logging
import secrets

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from reviewbot.adapter.error import OAuthError
from reviewbot.application.usecase.auth import (
    ChangePasswordUseCase,
    GetCurrentUserUseCase,
    LoginUseCase,
    LogoutUseCase,
    OAuthLoginUseCase,
    SignupUseCase,
)
from reviewbot.application.usecase.auth.change_password import ChangePasswordRequest
from reviewbot.application.usecase.auth.get_current_user import GetCurrentUserRequest
from reviewbot.application.usecase.auth.login import LoginRequest
from reviewbot.application.usecase.auth.logout import LogoutRequest
from reviewbot.application.usecase.auth.oauth_login import OAuthLoginRequest
from reviewbot.application.usecase.auth.signup import SignupRequest
from reviewbot.application.usecase.user import UserInfo
from reviewbot.config import Settings
from reviewbot.domain.error import DomainError, MissingEmailError
from reviewbot.domain.service import AuthContext, AuthService
from reviewbot.domain.value import AuthProvider
from reviewbot.interface.api.cookies import clear_session_cookie, set_session_cookie
from reviewbot.interface.api.dependencies import (
    check_auth,
    require_auth,
    session_token,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["authentication"], route_class=DishkaRoute)


class CredentialsBody(BaseModel):
    """Email + password payload for signup and login.

    Fields are optional so that missing values produce our own 400.
    """

    email: str | None = None
    password: str | None = None


class ChangePasswordBody(BaseModel):
    """Password change payload."""

    current_password: str | None = None
    new_password: str | None = None


class UserEnvelope(BaseModel):
    """Successful response carrying a user."""

    success: bool = True
    message: str | None = None
    data: UserInfo


class MessageResponse(BaseModel):
    """Successful response carrying only a message."""

    success: bool
    message: str


class AuthStatusResponse(BaseModel):
    """Authentication status without raising for anonymous sessions."""

    authenticated: bool
    user: UserInfo | None = None


@router.post(
    "/signup", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED
)
async def signup(
    body: CredentialsBody,
    request: Request,
    response: Response,
    signup_use_case: FromDishka[SignupUseCase],
    settings: FromDishka[Settings],
) -> UserEnvelope:
    """Create a local account and log it in.

    Example:
        POST /api/signup
        {"email": "alice@example.com", "password": "correct horse"}

        Response (201):
        {"success": true, "message": "User created successfully", "data": {...}}
    """
    result = await signup_use_case.execute(
        SignupRequest(
            email=body.email,
            password=body.password,
            current_token=await session_token(request),
        )
    )
    set_session_cookie(response, result.token, settings)
    logger.info(f"User signed up: {result.user.id}")

    return UserEnvelope(message="User created successfully", data=result.user)


@router.post("/login", response_model=UserEnvelope)
async def login(
    body: CredentialsBody,
    request: Request,
    response: Response,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
) -> UserEnvelope:
    """Log in with email and password.

    Any credential mismatch answers 401 with the same message.
    """
    result = await login_use_case.execute(
        LoginRequest(
            email=body.email,
            password=body.password,
            current_token=await session_token(request),
        )
    )
    set_session_cookie(response, result.token, settings)

    return UserEnvelope(message="Login successful", data=result.user)


@router.post("/auth/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    logout_use_case: FromDishka[LogoutUseCase],
    settings: FromDishka[Settings],
) -> MessageResponse:
    """End the current session. Succeeds whether or not one exists."""
    result = await logout_use_case.execute(
        LogoutRequest(token=await session_token(request))
    )
    clear_session_cookie(response, settings)

    return MessageResponse(success=result.success, message=result.message)


@router.get("/auth/me", response_model=UserEnvelope)
async def get_current_user(
    request: Request,
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
) -> UserEnvelope:
    """Current user, or 401 when the session is anonymous."""
    user = await get_current_user_use_case.execute(
        GetCurrentUserRequest(token=await session_token(request))
    )
    return UserEnvelope(data=user)


@router.get("/auth/status", response_model=AuthStatusResponse)
async def auth_status(context: AuthContext = Depends(check_auth)) -> AuthStatusResponse:
    """Authentication status; never fails for anonymous sessions."""
    if not context.is_authenticated:
        return AuthStatusResponse(authenticated=False)
    return AuthStatusResponse(
        authenticated=True, user=UserInfo.from_user(context.user)
    )


@router.put("/auth/password", response_model=MessageResponse)
async def change_password(
    body: ChangePasswordBody,
    change_password_use_case: FromDishka[ChangePasswordUseCase],
    context: AuthContext = Depends(require_auth),
) -> MessageResponse:
    """Set or replace the local password. Other sessions are logged out."""
    result = await change_password_use_case.execute(
        ChangePasswordRequest(
            user_id=context.user.id,
            token=context.token,
            current_password=body.current_password,
            new_password=body.new_password,
        )
    )
    return MessageResponse(success=result.success, message=result.message)


@router.get("/auth/google")
async def google_login(auth_service: FromDishka[AuthService]) -> RedirectResponse:
    """Redirect to Google's consent screen."""
    return await _initiate_oauth(AuthProvider.GOOGLE, auth_service)


@router.get("/auth/google/callback")
async def google_callback(
    request: Request,
    oauth_login_use_case: FromDishka[OAuthLoginUseCase],
    settings: FromDishka[Settings],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    """Handle Google OAuth callback and complete login."""
    return await _handle_oauth_callback(
        provider=AuthProvider.GOOGLE,
        request=request,
        code=code,
        state=state,
        error=error,
        oauth_login_use_case=oauth_login_use_case,
        settings=settings,
    )


@router.get("/auth/discord")
async def discord_login(auth_service: FromDishka[AuthService]) -> RedirectResponse:
    """Redirect to Discord's consent screen."""
    return await _initiate_oauth(AuthProvider.DISCORD, auth_service)


@router.get("/auth/discord/callback")
async def discord_callback(
    request: Request,
    oauth_login_use_case: FromDishka[OAuthLoginUseCase],
    settings: FromDishka[Settings],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    """Handle Discord OAuth callback and complete login."""
    return await _handle_oauth_callback(
        provider=AuthProvider.DISCORD,
        request=request,
        code=code,
        state=state,
        error=error,
        oauth_login_use_case=oauth_login_use_case,
        settings=settings,
    )


async def _initiate_oauth(
    provider: AuthProvider, auth_service: AuthService
) -> RedirectResponse:
    state = secrets.token_urlsafe(32)
    auth_url = await auth_service.initiate_login(provider, state)
    logger.info(f"Initiating {provider.value} login")
    return RedirectResponse(url=auth_url, status_code=status.HTTP_302_FOUND)


def _failure_redirect(settings: Settings, error: str) -> RedirectResponse:
    return RedirectResponse(
        url=f"{settings.api.frontend_url}{settings.auth.failure_path}?error={error}",
        status_code=status.HTTP_302_FOUND,
    )


async def _handle_oauth_callback(
    provider: AuthProvider,
    request: Request,
    code: str | None,
    state: str | None,
    error: str | None,
    oauth_login_use_case: OAuthLoginUseCase,
    settings: Settings,
) -> RedirectResponse:
    """Shared OAuth callback handler for all providers.

    Success redirects to the frontend with the session cookie set; any failure
    redirects to the frontend login page with an error code.
    """
    if error or not code or not state:
        logger.warning(f"{provider.value} callback without code: error={error}")
        return _failure_redirect(settings, "auth_failed")

    try:
        result = await oauth_login_use_case.execute(
            OAuthLoginRequest(
                provider=provider,
                code=code,
                state=state,
                current_token=await session_token(request),
            )
        )
    except MissingEmailError as e:
        logger.warning(f"{provider.value} login without email: {e}")
        return _failure_redirect(settings, "missing_email")
    except (OAuthError, DomainError) as e:
        logger.error(f"{provider.value} login failed: {e}")
        return _failure_redirect(settings, "auth_failed")

    # Cookies must be set on the returned response object
    redirect_response = RedirectResponse(
        url=f"{settings.api.frontend_url}{settings.auth.success_path}",
        status_code=status.HTTP_302_FOUND,
    )
    set_session_cookie(redirect_response, result.token, settings)
    logger.info(f"{provider.value} login successful for user: {result.user.id}")

    return redirect_response
