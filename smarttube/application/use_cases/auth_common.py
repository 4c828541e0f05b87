from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from uuid import uuid4

from smarttube.application.dto.auth import AuthTokensOutput, AuthUserOutput
from smarttube.application.ports.auth_port import AuthPort
from smarttube.application.ports.token_port import TokenPort
from smarttube.domain.entities.user import User
from smarttube.domain.exceptions import UserBannedError, UserInactiveError


MIN_PASSWORD_LENGTH = 8


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"password must have at least {MIN_PASSWORD_LENGTH} characters.")


def ensure_user_can_sign_in(user: User) -> None:
    if not user.is_active:
        raise UserInactiveError("User is inactive.")
    if user.is_banned:
        raise UserBannedError("User is banned.")


def promote_if_configured_admin(
    *,
    user: User,
    auth_port: AuthPort,
    admin_emails: frozenset[str],
) -> User:
    if user.is_admin or normalize_email(user.email) not in admin_emails:
        return user
    auth_port.update_user_role(user_id=user.id, role="admin")
    return replace(user, role="admin")


def build_auth_user_output(user: User) -> AuthUserOutput:
    return AuthUserOutput(
        id=user.id,
        full_name=user.full_name,
        email=user.email,
        avatar_url=user.avatar_url,
        role=user.role,
        is_admin=user.is_admin,
        email_verified=user.email_verified,
        is_active=user.is_active,
    )


def issue_tokens(
    *,
    user: User,
    auth_port: AuthPort,
    token_port: TokenPort,
    user_agent: str | None,
    ip: str | None,
) -> AuthTokensOutput:
    now = utcnow()
    access_token, access_expires_at = token_port.create_access_token(user_id=user.id, role=user.role, now=now)
    refresh_token = token_port.new_opaque_token()
    refresh_hash = token_port.digest_token(token=refresh_token)
    refresh_expires_at = token_port.session_expires_at(now=now)
    auth_port.create_session(
        session_id=str(uuid4()),
        user_id=user.id,
        refresh_token_hash=refresh_hash,
        expires_at=refresh_expires_at,
        revoked_at=None,
        user_agent=user_agent,
        ip=ip,
        created_at=now,
    )
    return AuthTokensOutput(
        user=build_auth_user_output(user),
        access_token=access_token,
        refresh_token=refresh_token,
        access_expires_at=access_expires_at,
        refresh_expires_at=refresh_expires_at,
    )
