from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    maintenance_mode: bool
    banner_message: str
    banner_enabled: bool
    support_email: str
    max_upload_size: int
    openrouter_api_key: str | None


class PublicSettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    maintenance_mode: bool
    banner_message: str
    banner_enabled: bool
    support_email: str
    max_upload_size: int


class SettingsRequest(BaseModel):
    maintenance_mode: bool = False
    banner_message: str = Field(default="", max_length=500)
    banner_enabled: bool = False
    support_email: str = Field(default="", max_length=255)
    max_upload_size: int = Field(default=5, ge=1)
    openrouter_api_key: str | None = None
