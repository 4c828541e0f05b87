from __future__ import annotations

from typing import Any, Mapping

from smarttube.domain.entities.user import AuthIdentity, AuthSession, PasswordResetToken, User


USER_COLUMNS = (
    "id, full_name, email, avatar_url, role, email_verified, is_active, is_banned, "
    "stripe_customer_id, created_at, updated_at"
)


def _as_str(value: Any) -> str:
    return str(value)


def map_row_to_user(row: Mapping[str, Any]) -> User:
    return User(
        id=_as_str(row["id"]),
        full_name=row["full_name"] or "",
        email=row["email"],
        avatar_url=row.get("avatar_url"),
        role=row["role"],
        email_verified=bool(row["email_verified"]),
        is_active=bool(row["is_active"]),
        is_banned=bool(row["is_banned"]),
        stripe_customer_id=row.get("stripe_customer_id"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def map_row_to_auth_identity(row: Mapping[str, Any]) -> AuthIdentity:
    return AuthIdentity(
        id=_as_str(row["id"]),
        user_id=_as_str(row["user_id"]),
        provider=row["provider"],
        password_hash=row.get("password_hash"),
        created_at=row["created_at"],
    )


def map_row_to_auth_session(row: Mapping[str, Any]) -> AuthSession:
    return AuthSession(
        id=_as_str(row["id"]),
        user_id=_as_str(row["user_id"]),
        refresh_token_hash=row["refresh_token_hash"],
        expires_at=row["expires_at"],
        revoked_at=row.get("revoked_at"),
        user_agent=row.get("user_agent"),
        ip=row.get("ip"),
        created_at=row["created_at"],
    )


def map_row_to_password_reset_token(row: Mapping[str, Any]) -> PasswordResetToken:
    return PasswordResetToken(
        id=_as_str(row["id"]),
        user_id=_as_str(row["user_id"]),
        token_hash=row["token_hash"],
        expires_at=row["expires_at"],
        used_at=row.get("used_at"),
        created_at=row["created_at"],
    )
