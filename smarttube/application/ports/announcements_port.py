from __future__ import annotations

from datetime import datetime
from typing import Protocol

from smarttube.domain.entities.announcement import Announcement


class AnnouncementsPort(Protocol):
    def list_active(self, *, announcement_type: str, now: datetime) -> list[Announcement]:
        ...

    def list_all(self) -> list[Announcement]:
        ...

    def create(
        self,
        *,
        announcement_id: str,
        title: str,
        message: str,
        priority: str,
        announcement_type: str,
        expiry_date: datetime | None,
        is_active: bool,
        created_at: datetime,
    ) -> Announcement:
        ...

    def update(
        self,
        *,
        announcement_id: str,
        title: str,
        message: str,
        priority: str,
        announcement_type: str,
        expiry_date: datetime | None,
        is_active: bool,
    ) -> Announcement | None:
        ...

    def set_active(self, *, announcement_id: str, is_active: bool) -> Announcement | None:
        ...

    def delete(self, *, announcement_id: str) -> bool:
        ...
