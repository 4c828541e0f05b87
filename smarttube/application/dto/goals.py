from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from smarttube.domain.entities.goal import Badge, Goal


@dataclass(frozen=True)
class CreateGoalInput:
    user_id: str
    title: str
    category: str
    target_value: int
    deadline: datetime | None


@dataclass(frozen=True)
class UpdateGoalProgressInput:
    user_id: str
    goal_id: str
    progress: int


@dataclass(frozen=True)
class GoalsOverviewOutput:
    goals: list[Goal]
    badges: list[Badge]
    xp: int
    level: int
    level_progress: int
    storage: str
