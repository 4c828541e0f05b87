from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GoalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    category: str
    target_value: int
    deadline: datetime | None
    progress: int
    status: str
    created_at: datetime
    completed_at: datetime | None


class BadgeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    badge_id: str
    badge_name: str
    awarded_at: datetime


class GoalsOverviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    goals: list[GoalResponse]
    badges: list[BadgeResponse]
    xp: int
    level: int
    level_progress: int
    storage: str


class CreateGoalRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    category: str
    target_value: int
    deadline: datetime | None = None


class UpdateGoalProgressRequest(BaseModel):
    progress: int
