"""Domain services."""

from .auth_service import AuthService, OAuthClient
from .base import Service
from .identity_link_service import IdentityLinkService
from .password_service import PasswordService
from .session_service import AuthContext, SessionService
from .user_service import UserService

__all__ = [
    "AuthContext",
    "AuthService",
    "IdentityLinkService",
    "OAuthClient",
    "PasswordService",
    "Service",
    "SessionService",
    "UserService",
]
