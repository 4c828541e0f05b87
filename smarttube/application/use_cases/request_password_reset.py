from __future__ import annotations

import logging
from datetime import timedelta
from uuid import uuid4

from smarttube.application.dto.auth import RequestPasswordResetInput
from smarttube.application.ports.auth_port import AuthPort
from smarttube.application.ports.mailer_port import MailerPort
from smarttube.application.ports.token_port import TokenPort
from smarttube.domain.exceptions import MailDeliveryError

from .auth_common import normalize_email, utcnow


logger = logging.getLogger(__name__)


class RequestPasswordResetUseCase:
    """Always completes silently for unknown emails so accounts cannot be enumerated."""

    def __init__(
        self,
        *,
        auth_port: AuthPort,
        token_port: TokenPort,
        mailer: MailerPort,
        reset_url: str,
        ttl_minutes: int,
    ):
        self._auth_port = auth_port
        self._token_port = token_port
        self._mailer = mailer
        self._reset_url = reset_url
        self._ttl_minutes = ttl_minutes

    def execute(self, command: RequestPasswordResetInput) -> None:
        email = normalize_email(command.email)
        user = self._auth_port.get_user_by_email(email=email)
        if user is None or not user.is_active:
            logger.info("request_password_reset: unknown_email")
            return

        now = utcnow()
        token = self._token_port.new_opaque_token()
        expires_at = now + timedelta(minutes=self._ttl_minutes)
        self._auth_port.create_password_reset_token(
            token_id=str(uuid4()),
            user_id=user.id,
            token_hash=self._token_port.digest_token(token=token),
            expires_at=expires_at,
            created_at=now,
        )

        link = f"{self._reset_url}?token={token}"
        try:
            self._mailer.send(
                to_email=user.email,
                subject="Reset your SmartTube password",
                body=(
                    f"Hi {user.full_name},\n\n"
                    f"Use the link below to choose a new password. It expires in {self._ttl_minutes} minutes.\n\n"
                    f"{link}\n\n"
                    "If you did not request a password reset you can ignore this email."
                ),
                html_body=(
                    f"<p>Hi {user.full_name},</p>"
                    f"<p>Use the link below to choose a new password. It expires in {self._ttl_minutes} minutes.</p>"
                    f'<p><a href="{link}">Reset password</a></p>'
                    "<p>If you did not request a password reset you can ignore this email.</p>"
                ),
            )
        except MailDeliveryError:
            logger.warning("request_password_reset: mail_failed user_id=%s", user.id)
            return
        logger.info("request_password_reset: sent user_id=%s", user.id)
