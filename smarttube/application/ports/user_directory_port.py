from __future__ import annotations

from typing import Protocol

from smarttube.domain.entities.user import User


class UserDirectoryPort(Protocol):
    def list_users(self, *, search: str | None, offset: int, limit: int) -> tuple[list[User], int]:
        ...

    def set_user_role(self, *, user_id: str, role: str) -> User | None:
        ...

    def set_user_banned(self, *, user_id: str, is_banned: bool) -> User | None:
        ...

    def update_user(self, *, user_id: str, full_name: str, email: str, role: str) -> User | None:
        ...

    def delete_user(self, *, user_id: str) -> bool:
        ...
