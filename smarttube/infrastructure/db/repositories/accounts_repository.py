from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Callable, TypeVar

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from smarttube.application.ports.auth_port import AuthPort
from smarttube.application.ports.user_directory_port import UserDirectoryPort
from smarttube.domain.exceptions import EmailAlreadyExistsError
from smarttube.infrastructure.db.mappers.accounts_mapper import (
    USER_COLUMNS,
    map_row_to_auth_identity,
    map_row_to_auth_session,
    map_row_to_password_reset_token,
    map_row_to_user,
)


T = TypeVar("T")


class SqlAccountsRepository(AuthPort, UserDirectoryPort):
    def __init__(self, engine, *, conn=None):
        self._engine = engine
        self._conn = conn

    def execute_in_transaction(self, fn: Callable[[AuthPort], T]) -> T:
        if self._conn is not None:
            return fn(self)
        with self._engine.begin() as conn:
            return fn(SqlAccountsRepository(self._engine, conn=conn))

    @contextmanager
    def _connect(self):
        if self._conn is not None:
            yield self._conn
            return
        with self._engine.connect() as conn:
            yield conn

    @contextmanager
    def _begin(self):
        if self._conn is not None:
            yield self._conn
            return
        with self._engine.begin() as conn:
            yield conn

    def _fetch_user(self, where: str, params: dict):
        sql = f"""
            SELECT {USER_COLUMNS}
            FROM public.users
            WHERE {where}
            LIMIT 1
        """
        with self._connect() as conn:
            row = conn.execute(text(sql), params).mappings().first()
        if row is None:
            return None
        return map_row_to_user(row)

    def _update_user_returning(self, assignments: str, params: dict):
        sql = f"""
            UPDATE public.users
            SET {assignments},
                updated_at = now()
            WHERE id = :user_id
            RETURNING {USER_COLUMNS}
        """
        try:
            with self._begin() as conn:
                row = conn.execute(text(sql), params).mappings().first()
        except IntegrityError as exc:
            raise EmailAlreadyExistsError("Email already registered.") from exc
        if row is None:
            return None
        return map_row_to_user(row)

    def get_user_by_id(self, *, user_id: str):
        return self._fetch_user("id = :user_id", {"user_id": user_id})

    def get_user_by_email(self, *, email: str):
        return self._fetch_user("lower(email) = :email", {"email": email.lower()})

    def get_user_by_stripe_customer_id(self, *, stripe_customer_id: str):
        return self._fetch_user(
            "stripe_customer_id = :stripe_customer_id",
            {"stripe_customer_id": stripe_customer_id},
        )

    def create_user(
        self,
        *,
        user_id: str,
        full_name: str,
        email: str,
        role: str,
        email_verified: bool,
        is_active: bool,
        created_at: datetime,
        updated_at: datetime,
    ):
        sql = f"""
            INSERT INTO public.users (
                id, full_name, email, role, email_verified, is_active, created_at, updated_at
            ) VALUES (
                :id, :full_name, :email, :role, :email_verified, :is_active, :created_at, :updated_at
            )
            RETURNING {USER_COLUMNS}
        """
        params = {
            "id": user_id,
            "full_name": full_name,
            "email": email,
            "role": role,
            "email_verified": email_verified,
            "is_active": is_active,
            "created_at": created_at,
            "updated_at": updated_at,
        }
        try:
            with self._begin() as conn:
                row = conn.execute(text(sql), params).mappings().one()
        except IntegrityError as exc:
            raise EmailAlreadyExistsError("Email already registered.") from exc
        return map_row_to_user(row)

    def update_user_profile(self, *, user_id: str, full_name: str, avatar_url: str | None):
        return self._update_user_returning(
            "full_name = :full_name, avatar_url = :avatar_url",
            {"user_id": user_id, "full_name": full_name, "avatar_url": avatar_url},
        )

    def update_user_role(self, *, user_id: str, role: str) -> None:
        self._update_user_returning("role = :role", {"user_id": user_id, "role": role})

    def update_user_stripe_customer_id(self, *, user_id: str, stripe_customer_id: str) -> None:
        sql = """
            UPDATE public.users
            SET stripe_customer_id = :stripe_customer_id,
                updated_at = now()
            WHERE id = :user_id
        """
        with self._begin() as conn:
            conn.execute(
                text(sql),
                {
                    "user_id": user_id,
                    "stripe_customer_id": stripe_customer_id,
                },
            )

    def delete_user(self, *, user_id: str) -> bool:
        sql = """
            DELETE FROM public.users
            WHERE id = :user_id
        """
        with self._begin() as conn:
            result = conn.execute(text(sql), {"user_id": user_id})
        return result.rowcount > 0

    def create_identity(
        self,
        *,
        identity_id: str,
        user_id: str,
        provider: str,
        password_hash: str | None,
        created_at: datetime,
    ):
        sql = """
            INSERT INTO public.auth_identities (
                id, user_id, provider, password_hash, created_at
            ) VALUES (
                :id, :user_id, :provider, :password_hash, :created_at
            )
            RETURNING id, user_id, provider, password_hash, created_at
        """
        with self._begin() as conn:
            row = conn.execute(
                text(sql),
                {
                    "id": identity_id,
                    "user_id": user_id,
                    "provider": provider,
                    "password_hash": password_hash,
                    "created_at": created_at,
                },
            ).mappings().one()
        return map_row_to_auth_identity(row)

    def get_identity_for_user_provider(self, *, user_id: str, provider: str):
        sql = """
            SELECT id, user_id, provider, password_hash, created_at
            FROM public.auth_identities
            WHERE user_id = :user_id
              AND provider = :provider
            LIMIT 1
        """
        with self._connect() as conn:
            row = conn.execute(
                text(sql),
                {
                    "user_id": user_id,
                    "provider": provider,
                },
            ).mappings().first()
        if row is None:
            return None
        return map_row_to_auth_identity(row)

    def update_identity_password_hash(self, *, identity_id: str, password_hash: str) -> None:
        sql = """
            UPDATE public.auth_identities
            SET password_hash = :password_hash
            WHERE id = :identity_id
        """
        with self._begin() as conn:
            conn.execute(text(sql), {"identity_id": identity_id, "password_hash": password_hash})

    def get_local_identity_by_email(self, *, email: str):
        sql = """
            SELECT
                u.id AS user_id,
                u.full_name,
                u.email,
                u.avatar_url,
                u.role,
                u.email_verified,
                u.is_active,
                u.is_banned,
                u.stripe_customer_id,
                u.created_at AS user_created_at,
                u.updated_at AS user_updated_at,
                i.id AS identity_id,
                i.provider,
                i.password_hash,
                i.created_at AS identity_created_at
            FROM public.users u
            JOIN public.auth_identities i
              ON i.user_id = u.id
            WHERE lower(u.email) = :email
              AND i.provider = 'local'
            LIMIT 1
        """
        with self._connect() as conn:
            row = conn.execute(text(sql), {"email": email.lower()}).mappings().first()
        if row is None:
            return None

        user = map_row_to_user(
            {
                "id": row["user_id"],
                "full_name": row["full_name"],
                "email": row["email"],
                "avatar_url": row["avatar_url"],
                "role": row["role"],
                "email_verified": row["email_verified"],
                "is_active": row["is_active"],
                "is_banned": row["is_banned"],
                "stripe_customer_id": row["stripe_customer_id"],
                "created_at": row["user_created_at"],
                "updated_at": row["user_updated_at"],
            }
        )
        identity = map_row_to_auth_identity(
            {
                "id": row["identity_id"],
                "user_id": row["user_id"],
                "provider": row["provider"],
                "password_hash": row["password_hash"],
                "created_at": row["identity_created_at"],
            }
        )
        return user, identity

    def create_session(
        self,
        *,
        session_id: str,
        user_id: str,
        refresh_token_hash: str,
        expires_at: datetime,
        revoked_at: datetime | None,
        user_agent: str | None,
        ip: str | None,
        created_at: datetime,
    ):
        sql = """
            INSERT INTO public.auth_sessions (
                id, user_id, refresh_token_hash, expires_at, revoked_at, user_agent, ip, created_at
            ) VALUES (
                :id, :user_id, :refresh_token_hash, :expires_at, :revoked_at, :user_agent, :ip, :created_at
            )
            RETURNING id, user_id, refresh_token_hash, expires_at, revoked_at, user_agent, ip, created_at
        """
        params = {
            "id": session_id,
            "user_id": user_id,
            "refresh_token_hash": refresh_token_hash,
            "expires_at": expires_at,
            "revoked_at": revoked_at,
            "user_agent": user_agent,
            "ip": ip,
            "created_at": created_at,
        }
        with self._begin() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_auth_session(row)

    def get_session_by_refresh_token_hash(self, *, refresh_token_hash: str):
        sql = """
            SELECT id, user_id, refresh_token_hash, expires_at, revoked_at, user_agent, ip, created_at
            FROM public.auth_sessions
            WHERE refresh_token_hash = :refresh_token_hash
            LIMIT 1
        """
        with self._connect() as conn:
            row = conn.execute(text(sql), {"refresh_token_hash": refresh_token_hash}).mappings().first()
        if row is None:
            return None
        return map_row_to_auth_session(row)

    def revoke_session(self, *, session_id: str, revoked_at: datetime) -> None:
        sql = """
            UPDATE public.auth_sessions
            SET revoked_at = :revoked_at
            WHERE id = :session_id
              AND revoked_at IS NULL
        """
        with self._begin() as conn:
            conn.execute(text(sql), {"session_id": session_id, "revoked_at": revoked_at})

    def revoke_user_sessions(self, *, user_id: str, revoked_at: datetime) -> None:
        sql = """
            UPDATE public.auth_sessions
            SET revoked_at = :revoked_at
            WHERE user_id = :user_id
              AND revoked_at IS NULL
        """
        with self._begin() as conn:
            conn.execute(text(sql), {"user_id": user_id, "revoked_at": revoked_at})

    def create_password_reset_token(
        self,
        *,
        token_id: str,
        user_id: str,
        token_hash: str,
        expires_at: datetime,
        created_at: datetime,
    ):
        sql = """
            INSERT INTO public.password_reset_tokens (
                id, user_id, token_hash, expires_at, created_at
            ) VALUES (
                :id, :user_id, :token_hash, :expires_at, :created_at
            )
            RETURNING id, user_id, token_hash, expires_at, used_at, created_at
        """
        params = {
            "id": token_id,
            "user_id": user_id,
            "token_hash": token_hash,
            "expires_at": expires_at,
            "created_at": created_at,
        }
        with self._begin() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_password_reset_token(row)

    def get_password_reset_token_by_hash(self, *, token_hash: str):
        sql = """
            SELECT id, user_id, token_hash, expires_at, used_at, created_at
            FROM public.password_reset_tokens
            WHERE token_hash = :token_hash
            LIMIT 1
        """
        with self._connect() as conn:
            row = conn.execute(text(sql), {"token_hash": token_hash}).mappings().first()
        if row is None:
            return None
        return map_row_to_password_reset_token(row)

    def mark_password_reset_token_used(self, *, token_id: str, used_at: datetime) -> None:
        sql = """
            UPDATE public.password_reset_tokens
            SET used_at = :used_at
            WHERE id = :token_id
        """
        with self._begin() as conn:
            conn.execute(text(sql), {"token_id": token_id, "used_at": used_at})

    def list_users(self, *, search: str | None, offset: int, limit: int):
        where = ""
        params: dict = {"offset": offset, "limit": limit}
        if search:
            where = "WHERE email ILIKE :pattern OR full_name ILIKE :pattern"
            params["pattern"] = f"%{search}%"

        list_sql = f"""
            SELECT {USER_COLUMNS}
            FROM public.users
            {where}
            ORDER BY created_at DESC
            OFFSET :offset
            LIMIT :limit
        """
        count_sql = f"""
            SELECT count(*) AS total
            FROM public.users
            {where}
        """
        with self._connect() as conn:
            rows = conn.execute(text(list_sql), params).mappings().all()
            total = conn.execute(text(count_sql), params).scalar_one()
        return [map_row_to_user(row) for row in rows], int(total)

    def set_user_role(self, *, user_id: str, role: str):
        return self._update_user_returning("role = :role", {"user_id": user_id, "role": role})

    def set_user_banned(self, *, user_id: str, is_banned: bool):
        return self._update_user_returning("is_banned = :is_banned", {"user_id": user_id, "is_banned": is_banned})

    def update_user(self, *, user_id: str, full_name: str, email: str, role: str):
        return self._update_user_returning(
            "full_name = :full_name, email = :email, role = :role",
            {"user_id": user_id, "full_name": full_name, "email": email, "role": role},
        )
