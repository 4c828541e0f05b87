from __future__ import annotations

from datetime import datetime
from typing import Protocol

from smarttube.application.dto.auth import AccessTokenPayload


class TokenPort(Protocol):
    """Access tokens for API calls; opaque secrets back refresh sessions and password resets."""

    def create_access_token(self, *, user_id: str, role: str, now: datetime) -> tuple[str, datetime]:
        ...

    def decode_access_token(self, *, token: str) -> AccessTokenPayload:
        ...

    def new_opaque_token(self) -> str:
        ...

    def digest_token(self, *, token: str) -> str:
        ...

    def session_expires_at(self, *, now: datetime) -> datetime:
        ...
