from __future__ import annotations

from uuid import uuid4

from smarttube.application.dto.auth import ResetPasswordInput
from smarttube.application.ports.auth_port import AuthPort
from smarttube.application.ports.password_hasher_port import PasswordHasherPort
from smarttube.application.ports.token_port import TokenPort
from smarttube.domain.exceptions import PasswordResetTokenInvalidError

from .auth_common import utcnow, validate_password


class ResetPasswordUseCase:
    def __init__(
        self,
        *,
        auth_port: AuthPort,
        token_port: TokenPort,
        password_hasher: PasswordHasherPort,
    ):
        self._auth_port = auth_port
        self._token_port = token_port
        self._password_hasher = password_hasher

    def execute(self, command: ResetPasswordInput) -> None:
        token = command.token.strip()
        if not token:
            raise PasswordResetTokenInvalidError("Missing reset token.")
        validate_password(command.new_password)

        token_hash = self._token_port.digest_token(token=token)
        password_hash = self._password_hasher.hash(command.new_password)

        def _tx(auth_port: AuthPort) -> None:
            now = utcnow()
            reset_token = auth_port.get_password_reset_token_by_hash(token_hash=token_hash)
            if reset_token is None:
                raise PasswordResetTokenInvalidError("Invalid reset token.")
            if reset_token.used_at is not None:
                raise PasswordResetTokenInvalidError("Reset token already used.")
            if reset_token.expires_at <= now:
                raise PasswordResetTokenInvalidError("Reset token expired.")

            identity = auth_port.get_identity_for_user_provider(user_id=reset_token.user_id, provider="local")
            if identity is None:
                auth_port.create_identity(
                    identity_id=str(uuid4()),
                    user_id=reset_token.user_id,
                    provider="local",
                    password_hash=password_hash,
                    created_at=now,
                )
            else:
                auth_port.update_identity_password_hash(identity_id=identity.id, password_hash=password_hash)

            auth_port.mark_password_reset_token_used(token_id=reset_token.id, used_at=now)
            auth_port.revoke_user_sessions(user_id=reset_token.user_id, revoked_at=now)

        self._auth_port.execute_in_transaction(_tx)
