"""User use cases."""

from .delete_user import DeleteUserUseCase
from .get_user import GetUserUseCase
from .list_users import ListUsersUseCase
from .user_info import UserInfo

__all__ = ["DeleteUserUseCase", "GetUserUseCase", "ListUsersUseCase", "UserInfo"]
