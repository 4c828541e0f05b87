from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AnnouncementInput:
    title: str
    message: str
    priority: str
    announcement_type: str
    expiry_date: datetime | None
    is_active: bool
