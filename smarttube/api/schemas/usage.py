from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FeatureUsageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    feature: str
    limit_value: int
    current_usage: int
    remaining: int
    is_unlimited: bool
    display: str


class UserUsageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    plan_name: str
    is_admin: bool
    features: list[FeatureUsageResponse]


class FeatureCheckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    feature: str
    allowed: bool
    usage: FeatureUsageResponse


class UseFeatureRequest(BaseModel):
    feature: str = Field(..., min_length=1, max_length=120)
