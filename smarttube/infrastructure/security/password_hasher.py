from __future__ import annotations

from passlib.context import CryptContext

from smarttube.application.ports.password_hasher_port import PasswordHasherPort


DEFAULT_SCHEMES = ("argon2", "bcrypt")


class PasswordHasher(PasswordHasherPort):
    """Hashes with argon2; bcrypt hashes still verify and get upgraded on login."""

    def __init__(self, schemes: tuple[str, ...] = DEFAULT_SCHEMES):
        self._ctx = CryptContext(schemes=list(schemes), deprecated="auto")

    def hash(self, plain_password: str) -> str:
        return self._ctx.hash(plain_password)

    def verify(self, plain_password: str, password_hash: str) -> bool:
        if not password_hash:
            return False
        try:
            return self._ctx.verify(plain_password, password_hash)
        except (ValueError, TypeError):
            return False

    def verify_and_update(self, plain_password: str, password_hash: str) -> tuple[bool, str | None]:
        if not password_hash:
            return False, None
        try:
            verified, replacement_hash = self._ctx.verify_and_update(plain_password, password_hash)
        except (ValueError, TypeError):
            return False, None
        return bool(verified), replacement_hash
