from __future__ import annotations

import logging
from uuid import uuid4

from smarttube.application.dto.announcements import AnnouncementInput
from smarttube.application.ports.announcements_port import AnnouncementsPort
from smarttube.domain.entities.announcement import ANNOUNCEMENT_PRIORITIES, ANNOUNCEMENT_TYPES, Announcement
from smarttube.domain.exceptions import AnnouncementInputError, AnnouncementNotFoundError

from .auth_common import utcnow


logger = logging.getLogger(__name__)


def _validate(command: AnnouncementInput) -> tuple[str, str]:
    title = command.title.strip()
    message = command.message.strip()
    if not title or not message:
        raise AnnouncementInputError("title and message are required.")
    if command.priority not in ANNOUNCEMENT_PRIORITIES:
        raise AnnouncementInputError(f"priority must be one of: {', '.join(ANNOUNCEMENT_PRIORITIES)}.")
    if command.announcement_type not in ANNOUNCEMENT_TYPES:
        raise AnnouncementInputError(f"announcement_type must be one of: {', '.join(ANNOUNCEMENT_TYPES)}.")
    return title, message


class ListActiveAnnouncementsUseCase:
    def __init__(self, *, announcements_port: AnnouncementsPort):
        self._announcements_port = announcements_port

    def execute(self, *, announcement_type: str) -> list[Announcement]:
        if announcement_type not in ANNOUNCEMENT_TYPES:
            raise AnnouncementInputError(f"type must be one of: {', '.join(ANNOUNCEMENT_TYPES)}.")
        return self._announcements_port.list_active(announcement_type=announcement_type, now=utcnow())


class ListAnnouncementsUseCase:
    def __init__(self, *, announcements_port: AnnouncementsPort):
        self._announcements_port = announcements_port

    def execute(self) -> list[Announcement]:
        return self._announcements_port.list_all()


class CreateAnnouncementUseCase:
    def __init__(self, *, announcements_port: AnnouncementsPort):
        self._announcements_port = announcements_port

    def execute(self, command: AnnouncementInput) -> Announcement:
        title, message = _validate(command)
        announcement = self._announcements_port.create(
            announcement_id=str(uuid4()),
            title=title,
            message=message,
            priority=command.priority,
            announcement_type=command.announcement_type,
            expiry_date=command.expiry_date,
            is_active=command.is_active,
            created_at=utcnow(),
        )
        logger.info("announcements: created announcement_id=%s", announcement.id)
        return announcement


class UpdateAnnouncementUseCase:
    def __init__(self, *, announcements_port: AnnouncementsPort):
        self._announcements_port = announcements_port

    def execute(self, *, announcement_id: str, command: AnnouncementInput) -> Announcement:
        title, message = _validate(command)
        announcement = self._announcements_port.update(
            announcement_id=announcement_id,
            title=title,
            message=message,
            priority=command.priority,
            announcement_type=command.announcement_type,
            expiry_date=command.expiry_date,
            is_active=command.is_active,
        )
        if announcement is None:
            raise AnnouncementNotFoundError("Announcement not found.")
        return announcement


class ToggleAnnouncementUseCase:
    def __init__(self, *, announcements_port: AnnouncementsPort):
        self._announcements_port = announcements_port

    def execute(self, *, announcement_id: str, is_active: bool) -> Announcement:
        announcement = self._announcements_port.set_active(announcement_id=announcement_id, is_active=is_active)
        if announcement is None:
            raise AnnouncementNotFoundError("Announcement not found.")
        return announcement


class DeleteAnnouncementUseCase:
    def __init__(self, *, announcements_port: AnnouncementsPort):
        self._announcements_port = announcements_port

    def execute(self, *, announcement_id: str) -> None:
        if not self._announcements_port.delete(announcement_id=announcement_id):
            raise AnnouncementNotFoundError("Announcement not found.")
        logger.info("announcements: deleted announcement_id=%s", announcement_id)
