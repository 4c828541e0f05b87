from __future__ import annotations

import logging

from smarttube.application.dto.auth import AuthUserOutput, ChangePasswordInput, UpdateProfileInput
from smarttube.application.ports.auth_port import AuthPort
from smarttube.application.ports.password_hasher_port import PasswordHasherPort
from smarttube.domain.exceptions import InvalidCredentialsError, UserNotFoundError

from .auth_common import build_auth_user_output, utcnow, validate_password


logger = logging.getLogger(__name__)


class UpdateProfileUseCase:
    def __init__(self, *, auth_port: AuthPort):
        self._auth_port = auth_port

    def execute(self, command: UpdateProfileInput) -> AuthUserOutput:
        user = self._auth_port.get_user_by_id(user_id=command.user_id)
        if user is None:
            raise UserNotFoundError("User not found.")

        full_name = user.full_name if command.full_name is None else command.full_name.strip()
        if not full_name:
            raise ValueError("full_name cannot be empty.")
        avatar_url = user.avatar_url if command.avatar_url is None else (command.avatar_url.strip() or None)

        updated = self._auth_port.update_user_profile(
            user_id=user.id,
            full_name=full_name,
            avatar_url=avatar_url,
        )
        return build_auth_user_output(updated)


class ChangePasswordUseCase:
    def __init__(self, *, auth_port: AuthPort, password_hasher: PasswordHasherPort):
        self._auth_port = auth_port
        self._password_hasher = password_hasher

    def execute(self, command: ChangePasswordInput) -> None:
        validate_password(command.new_password)
        identity = self._auth_port.get_identity_for_user_provider(user_id=command.user_id, provider="local")
        if identity is None or not identity.password_hash:
            raise InvalidCredentialsError("Current password is incorrect.")
        if not self._password_hasher.verify(command.current_password, identity.password_hash):
            raise InvalidCredentialsError("Current password is incorrect.")

        self._auth_port.update_identity_password_hash(
            identity_id=identity.id,
            password_hash=self._password_hasher.hash(command.new_password),
        )
        logger.info("manage_account: password_changed user_id=%s", command.user_id)


class DeleteAccountUseCase:
    def __init__(self, *, auth_port: AuthPort):
        self._auth_port = auth_port

    def execute(self, *, user_id: str) -> None:
        def _tx(auth_port: AuthPort) -> None:
            auth_port.revoke_user_sessions(user_id=user_id, revoked_at=utcnow())
            if not auth_port.delete_user(user_id=user_id):
                raise UserNotFoundError("User not found.")

        self._auth_port.execute_in_transaction(_tx)
        logger.info("manage_account: account_deleted user_id=%s", user_id)
