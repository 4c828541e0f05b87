from __future__ import annotations

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from smarttube.application.ports.mailer_port import MailerPort
from smarttube.domain.exceptions import MailDeliveryError


logger = logging.getLogger(__name__)


class SmtpMailer(MailerPort):
    def __init__(
        self,
        *,
        host: str,
        port: int,
        username: str,
        password: str,
        from_email: str,
        use_tls: bool = True,
    ):
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._from_email = from_email
        self._use_tls = use_tls

    def send(self, *, to_email: str, subject: str, body: str, html_body: str | None = None) -> None:
        message = MIMEMultipart("alternative")
        message["From"] = self._from_email
        message["To"] = to_email
        message["Subject"] = subject
        message.attach(MIMEText(body, "plain"))
        if html_body:
            message.attach(MIMEText(html_body, "html"))

        try:
            with smtplib.SMTP(self._host, self._port) as server:
                if self._use_tls:
                    server.starttls()
                if self._username:
                    server.login(self._username, self._password)
                server.sendmail(self._from_email, [to_email], message.as_string())
        except (smtplib.SMTPException, OSError) as exc:  # pragma: no cover - external service
            logger.error("smtp_mailer: send_failed to=%s error=%s", to_email, exc)
            raise MailDeliveryError("Failed to send email.") from exc
        logger.info("smtp_mailer: sent to=%s subject=%s", to_email, subject)
