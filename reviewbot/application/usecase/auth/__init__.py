"""Authentication use cases."""

from .change_password import ChangePasswordUseCase
from .get_current_user import GetCurrentUserUseCase
from .login import LoginUseCase
from .logout import LogoutUseCase
from .oauth_login import OAuthLoginUseCase
from .signup import SignupUseCase

__all__ = [
    "ChangePasswordUseCase",
    "GetCurrentUserUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "OAuthLoginUseCase",
    "SignupUseCase",
]
