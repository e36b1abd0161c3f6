"""Public view of a user."""

from datetime import datetime

from pydantic import BaseModel

from reviewbot.domain.model import User
from reviewbot.domain.value import AuthProvider


class UserInfo(BaseModel):
    """User as returned to clients. Never carries the credential hash."""

    id: str
    email: str
    auth_provider: AuthProvider
    has_password: bool
    google_id: str | None
    discord_id: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            auth_provider=user.auth_provider,
            has_password=user.has_password,
            google_id=user.google_id,
            discord_id=user.discord_id,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
