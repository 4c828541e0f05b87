from __future__ import annotations

import logging

from smarttube.application.dto.admin import UpdateUserInput, UserListInput, UserPageOutput
from smarttube.application.ports.user_directory_port import UserDirectoryPort
from smarttube.domain.entities.user import User
from smarttube.domain.exceptions import UserNotFoundError

from .auth_common import normalize_email


USER_ROLES = ("user", "admin")
MAX_PAGE_SIZE = 100
logger = logging.getLogger(__name__)


def page_window(page: int, page_size: int) -> tuple[int, int]:
    if page < 1:
        raise ValueError("page must be >= 1.")
    if page_size < 1 or page_size > MAX_PAGE_SIZE:
        raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}.")
    return (page - 1) * page_size, page_size


class ListUsersUseCase:
    def __init__(self, *, user_directory: UserDirectoryPort):
        self._user_directory = user_directory

    def execute(self, command: UserListInput) -> UserPageOutput:
        offset, limit = page_window(command.page, command.page_size)
        search = (command.search or "").strip() or None
        users, total = self._user_directory.list_users(search=search, offset=offset, limit=limit)
        return UserPageOutput(items=users, total=total, page=command.page, page_size=command.page_size)


class ToggleAdminUseCase:
    def __init__(self, *, user_directory: UserDirectoryPort):
        self._user_directory = user_directory

    def execute(self, *, user_id: str, is_admin: bool) -> User:
        user = self._user_directory.set_user_role(user_id=user_id, role="admin" if is_admin else "user")
        if user is None:
            raise UserNotFoundError("User not found.")
        logger.info("admin_users: role_changed user_id=%s role=%s", user_id, user.role)
        return user


class ToggleBanUseCase:
    def __init__(self, *, user_directory: UserDirectoryPort):
        self._user_directory = user_directory

    def execute(self, *, user_id: str, is_banned: bool) -> User:
        user = self._user_directory.set_user_banned(user_id=user_id, is_banned=is_banned)
        if user is None:
            raise UserNotFoundError("User not found.")
        logger.info("admin_users: ban_changed user_id=%s is_banned=%s", user_id, is_banned)
        return user


class UpdateUserUseCase:
    def __init__(self, *, user_directory: UserDirectoryPort):
        self._user_directory = user_directory

    def execute(self, command: UpdateUserInput) -> User:
        full_name = command.full_name.strip()
        email = normalize_email(command.email)
        if not full_name or "@" not in email:
            raise ValueError("full_name and a valid email are required.")
        if command.role not in USER_ROLES:
            raise ValueError(f"role must be one of: {', '.join(USER_ROLES)}.")
        user = self._user_directory.update_user(
            user_id=command.user_id,
            full_name=full_name,
            email=email,
            role=command.role,
        )
        if user is None:
            raise UserNotFoundError("User not found.")
        return user


class DeleteUserUseCase:
    def __init__(self, *, user_directory: UserDirectoryPort):
        self._user_directory = user_directory

    def execute(self, *, user_id: str) -> None:
        if not self._user_directory.delete_user(user_id=user_id):
            raise UserNotFoundError("User not found.")
        logger.info("admin_users: deleted user_id=%s", user_id)
