from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal


GoalCategory = Literal["Content", "Growth", "Engagement", "Monetization"]
GoalStatus = Literal["pending", "completed"]

GOAL_CATEGORIES = ("Content", "Growth", "Engagement", "Monetization")


@dataclass(frozen=True)
class Goal:
    id: str
    user_id: str
    title: str
    category: GoalCategory
    target_value: int
    deadline: datetime | None
    progress: int
    status: GoalStatus
    created_at: datetime
    completed_at: datetime | None


@dataclass(frozen=True)
class Badge:
    id: str
    user_id: str
    badge_id: str
    badge_name: str
    awarded_at: datetime
