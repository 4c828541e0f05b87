from __future__ import annotations

from typing import Protocol


class MailerPort(Protocol):
    def send(self, *, to_email: str, subject: str, body: str, html_body: str | None = None) -> None:
        ...
