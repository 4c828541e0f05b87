from __future__ import annotations

import logging

from smarttube.application.dto.auth import AuthTokensOutput, LoginLocalInput
from smarttube.application.ports.auth_port import AuthPort
from smarttube.application.ports.password_hasher_port import PasswordHasherPort
from smarttube.application.ports.token_port import TokenPort
from smarttube.domain.exceptions import InvalidCredentialsError

from .auth_common import ensure_user_can_sign_in, issue_tokens, normalize_email, promote_if_configured_admin


logger = logging.getLogger(__name__)


class LoginLocalUseCase:
    def __init__(
        self,
        *,
        auth_port: AuthPort,
        password_hasher: PasswordHasherPort,
        token_port: TokenPort,
        admin_emails: frozenset[str] = frozenset(),
    ):
        self._auth_port = auth_port
        self._password_hasher = password_hasher
        self._token_port = token_port
        self._admin_emails = admin_emails

    def execute(self, command: LoginLocalInput) -> AuthTokensOutput:
        email = normalize_email(command.email)
        result = self._auth_port.get_local_identity_by_email(email=email)
        if result is None:
            raise InvalidCredentialsError("Invalid credentials.")

        user, identity = result
        if not identity.password_hash:
            raise InvalidCredentialsError("Invalid credentials.")

        verified, replacement_hash = self._password_hasher.verify_and_update(
            command.password,
            identity.password_hash,
        )
        if not verified:
            raise InvalidCredentialsError("Invalid credentials.")

        ensure_user_can_sign_in(user)

        if replacement_hash:
            self._auth_port.update_identity_password_hash(
                identity_id=identity.id,
                password_hash=replacement_hash,
            )
            logger.info("login_local: password_rehashed user_id=%s", user.id)

        user = promote_if_configured_admin(
            user=user,
            auth_port=self._auth_port,
            admin_emails=self._admin_emails,
        )
        return issue_tokens(
            user=user,
            auth_port=self._auth_port,
            token_port=self._token_port,
            user_agent=command.user_agent,
            ip=command.ip,
        )
