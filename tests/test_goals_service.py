from __future__ import annotations

from datetime import datetime, timezone

import pytest

from smarttube.domain.entities.goal import Goal
from smarttube.domain.exceptions import GoalInputError
from smarttube.domain.services.goals import clamp_progress, complete_goal, compute_progress, validate_goal_fields


NOW = datetime(2026, 3, 10, tzinfo=timezone.utc)


def _goal(goal_id: str, status: str = "pending") -> Goal:
    return Goal(
        id=goal_id,
        user_id="user-1",
        title=f"Goal {goal_id}",
        category="Growth",
        target_value=1000,
        deadline=None,
        progress=0,
        status=status,
        created_at=NOW,
        completed_at=None,
    )


def test_compute_progress_awards_xp_per_completed_goal():
    goals = [_goal("1", "completed"), _goal("2", "completed"), _goal("3", "completed"), _goal("4")]

    progress = compute_progress(goals)

    assert progress.xp == 150
    assert progress.level == 1
    assert progress.level_progress == 50


def test_compute_progress_without_goals():
    progress = compute_progress([])

    assert (progress.xp, progress.level, progress.level_progress) == (0, 0, 0)


@pytest.mark.parametrize(
    "title,category,target",
    [("  ", "Growth", 10), ("Subs", "Fame", 10), ("Subs", "Growth", 0)],
)
def test_validate_goal_fields_rejects_bad_input(title, category, target):
    with pytest.raises(GoalInputError):
        validate_goal_fields(title=title, category=category, target_value=target)


def test_clamp_and_complete():
    assert clamp_progress(-5) == 0
    assert clamp_progress(140) == 100

    done = complete_goal(_goal("1"), now=NOW)

    assert done.status == "completed"
    assert done.progress == 100
    assert done.completed_at == NOW
