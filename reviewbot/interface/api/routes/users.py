"""User routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from reviewbot.application.usecase.user import GetUserUseCase, UserInfo
from reviewbot.application.usecase.user.get_user import GetUserRequest
from reviewbot.domain.error import ValidationError
from reviewbot.domain.service import AuthContext
from reviewbot.interface.api.dependencies import require_auth

router = APIRouter(prefix="/api/user", tags=["users"], route_class=DishkaRoute)


class UserResponse(BaseModel):
    """User lookup response."""

    success: bool = True
    data: UserInfo


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    get_user_use_case: FromDishka[GetUserUseCase],
    _: AuthContext = Depends(require_auth),
) -> UserResponse:
    """Get a user by ID. Requires an authenticated session.

    Example:
        GET /api/user/123e4567-e89b-12d3-a456-426614174000
    """
    try:
        parsed = UUID(user_id)
    except ValueError:
        raise ValidationError("Invalid user ID")

    user = await get_user_use_case.execute(GetUserRequest(user_id=parsed))
    return UserResponse(data=user)
