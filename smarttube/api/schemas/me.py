from __future__ import annotations

from pydantic import BaseModel, Field

from .auth import AuthUserResponse
from .usage import FeatureUsageResponse


class MeResponse(BaseModel):
    user: AuthUserResponse
    plan_name: str
    is_admin: bool
    usage: list[FeatureUsageResponse]


class UpdateProfileRequest(BaseModel):
    full_name: str | None = Field(default=None, max_length=120)
    avatar_url: str | None = Field(default=None, max_length=2048)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=256)
    new_password: str = Field(..., min_length=8, max_length=256)
