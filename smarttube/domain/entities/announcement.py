from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal


AnnouncementPriority = Literal["low", "medium", "high"]
AnnouncementType = Literal["bar", "dialog"]

ANNOUNCEMENT_PRIORITIES = ("low", "medium", "high")
ANNOUNCEMENT_TYPES = ("bar", "dialog")


@dataclass(frozen=True)
class Announcement:
    id: str
    title: str
    message: str
    priority: AnnouncementPriority
    announcement_type: AnnouncementType
    expiry_date: datetime | None
    is_active: bool
    created_at: datetime
