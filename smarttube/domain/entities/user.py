from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal


AuthProvider = Literal["local"]
UserRole = Literal["user", "admin"]


@dataclass(frozen=True)
class User:
    id: str
    full_name: str
    email: str
    avatar_url: str | None
    role: UserRole
    email_verified: bool
    is_active: bool
    is_banned: bool
    stripe_customer_id: str | None
    created_at: datetime
    updated_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


@dataclass(frozen=True)
class AuthIdentity:
    id: str
    user_id: str
    provider: AuthProvider
    password_hash: str | None
    created_at: datetime


@dataclass(frozen=True)
class AuthSession:
    id: str
    user_id: str
    refresh_token_hash: str
    expires_at: datetime
    revoked_at: datetime | None
    user_agent: str | None
    ip: str | None
    created_at: datetime


@dataclass(frozen=True)
class PasswordResetToken:
    id: str
    user_id: str
    token_hash: str
    expires_at: datetime
    used_at: datetime | None
    created_at: datetime
