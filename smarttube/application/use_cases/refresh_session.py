from __future__ import annotations

import logging
from datetime import datetime

from smarttube.application.dto.auth import AuthTokensOutput, RefreshSessionInput
from smarttube.application.ports.auth_port import AuthPort
from smarttube.application.ports.token_port import TokenPort
from smarttube.domain.entities.user import AuthSession
from smarttube.domain.exceptions import RefreshSessionInvalidError

from .auth_common import ensure_user_can_sign_in, issue_tokens, utcnow


logger = logging.getLogger(__name__)

SESSION_ENDED = "Your session has ended. Please sign in again."


def _ensure_session_usable(session: AuthSession | None, *, now: datetime) -> AuthSession:
    if session is None or session.revoked_at is not None or session.expires_at <= now:
        raise RefreshSessionInvalidError(SESSION_ENDED)
    return session


class RefreshSessionUseCase:
    """Rotates a refresh session: the presented one is revoked and a new pair is issued."""

    def __init__(self, *, auth_port: AuthPort, token_port: TokenPort):
        self._auth_port = auth_port
        self._token_port = token_port

    def execute(self, command: RefreshSessionInput) -> AuthTokensOutput:
        presented = command.refresh_token.strip()
        if not presented:
            raise RefreshSessionInvalidError(SESSION_ENDED)
        digest = self._token_port.digest_token(token=presented)

        def _rotate(auth_port: AuthPort) -> AuthTokensOutput:
            now = utcnow()
            session = _ensure_session_usable(
                auth_port.get_session_by_refresh_token_hash(refresh_token_hash=digest),
                now=now,
            )
            user = auth_port.get_user_by_id(user_id=session.user_id)
            if user is None:
                raise RefreshSessionInvalidError(SESSION_ENDED)
            # banned or deactivated users cannot refresh
            ensure_user_can_sign_in(user)

            auth_port.revoke_session(session_id=session.id, revoked_at=now)
            logger.info("refresh_session: rotated user_id=%s", user.id)
            return issue_tokens(
                user=user,
                auth_port=auth_port,
                token_port=self._token_port,
                user_agent=command.user_agent,
                ip=command.ip,
            )

        return self._auth_port.execute_in_transaction(_rotate)
