from __future__ import annotations

import hashlib
import secrets
from datetime import datetime, timedelta

import jwt

from smarttube.application.dto.auth import AccessTokenPayload
from smarttube.application.ports.token_port import TokenPort


ALGORITHM = "HS256"
ISSUER = "smarttube"


class JwtTokenService(TokenPort):
    """Signed access tokens carrying the user role, plus opaque secrets for sessions and password resets.

    Opaque secrets are stored only as sha256 digests.
    """

    def __init__(
        self,
        *,
        jwt_secret: str,
        access_ttl_minutes: int,
        refresh_ttl_days: int,
    ):
        if not jwt_secret:
            raise ValueError("JWT_SECRET is required.")
        self._jwt_secret = jwt_secret
        self._access_ttl_minutes = access_ttl_minutes
        self._refresh_ttl_days = refresh_ttl_days

    def create_access_token(self, *, user_id: str, role: str, now: datetime) -> tuple[str, datetime]:
        exp = now + timedelta(minutes=self._access_ttl_minutes)
        payload = {
            "sub": user_id,
            "role": role,
            "type": "access",
            "iss": ISSUER,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        token = jwt.encode(payload, self._jwt_secret, algorithm=ALGORITHM)
        return token, exp

    def decode_access_token(self, *, token: str) -> AccessTokenPayload:
        try:
            payload = jwt.decode(token, self._jwt_secret, algorithms=[ALGORITHM], issuer=ISSUER)
        except jwt.PyJWTError as exc:
            raise ValueError("Invalid access token.") from exc

        if payload.get("type") != "access":
            raise ValueError("Invalid token type.")

        user_id = payload.get("sub")
        if not user_id or not isinstance(user_id, str):
            raise ValueError("Invalid token subject.")

        return AccessTokenPayload(user_id=user_id, role=str(payload.get("role") or "user"))

    def new_opaque_token(self) -> str:
        return secrets.token_urlsafe(48)

    def digest_token(self, *, token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    def session_expires_at(self, *, now: datetime) -> datetime:
        return now + timedelta(days=self._refresh_ttl_days)
