from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from smarttube.domain.entities.goal import GOAL_CATEGORIES, Goal
from smarttube.domain.exceptions import GoalInputError


XP_PER_COMPLETED_GOAL = 50
XP_PER_LEVEL = 100


@dataclass(frozen=True)
class GoalProgress:
    xp: int
    level: int
    level_progress: int


def compute_progress(goals: list[Goal]) -> GoalProgress:
    completed = sum(1 for goal in goals if goal.status == "completed")
    xp = completed * XP_PER_COMPLETED_GOAL
    return GoalProgress(xp=xp, level=xp // XP_PER_LEVEL, level_progress=xp % XP_PER_LEVEL)


def validate_goal_fields(*, title: str, category: str, target_value: int) -> None:
    if not title.strip():
        raise GoalInputError("title is required.")
    if category not in GOAL_CATEGORIES:
        raise GoalInputError(f"category must be one of: {', '.join(GOAL_CATEGORIES)}.")
    if target_value <= 0:
        raise GoalInputError("target_value must be greater than zero.")


def clamp_progress(progress: int) -> int:
    return max(0, min(100, progress))


def complete_goal(goal: Goal, *, now: datetime) -> Goal:
    return replace(goal, status="completed", progress=100, completed_at=now)
