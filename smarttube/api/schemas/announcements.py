from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AnnouncementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    message: str
    priority: str
    announcement_type: str
    expiry_date: datetime | None
    is_active: bool
    created_at: datetime


class AnnouncementRequest(BaseModel):
    title: str = Field(..., max_length=200)
    message: str = Field(..., max_length=5000)
    priority: str = "medium"
    announcement_type: str = "bar"
    expiry_date: datetime | None = None
    is_active: bool = True


class ToggleActiveRequest(BaseModel):
    is_active: bool
