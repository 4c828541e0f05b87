from __future__ import annotations

import pytest

from smarttube.application.dto.goals import CreateGoalInput, UpdateGoalProgressInput
from smarttube.application.use_cases.channel_goals import (
    CompleteGoalUseCase,
    CreateGoalUseCase,
    DeleteGoalUseCase,
    GoalStore,
    ListGoalsUseCase,
    UpdateGoalProgressUseCase,
)
from smarttube.domain.exceptions import GoalConflictError, GoalInputError, GoalNotFoundError, GoalsTableMissingError
from smarttube.infrastructure.storage.json_goal_store import JsonGoalStore


class MissingTableGoalsPort:
    def __getattr__(self, name):
        def _missing(**kwargs):
            raise GoalsTableMissingError("channel_goals table does not exist.")

        return _missing


def _store(tmp_path, *, primary=None) -> GoalStore:
    fallback = JsonGoalStore(base_dir=tmp_path)
    return GoalStore(goals_port=primary or fallback, fallback_port=fallback)


def _create(store: GoalStore, title: str = "Reach 1k subs"):
    return CreateGoalUseCase(goal_store=store).execute(
        CreateGoalInput(user_id="user-1", title=title, category="Growth", target_value=1000, deadline=None)
    )


def test_missing_table_falls_back_to_local_storage(tmp_path):
    store = _store(tmp_path, primary=MissingTableGoalsPort())

    goal = _create(store)
    overview = ListGoalsUseCase(goal_store=store).execute(user_id="user-1")

    assert overview.storage == "local"
    assert [item.id for item in overview.goals] == [goal.id]
    assert overview.badges == []


def test_progress_to_100_completes_goal_and_awards_xp(tmp_path):
    store = _store(tmp_path)
    goal = _create(store)

    updated = UpdateGoalProgressUseCase(goal_store=store).execute(
        UpdateGoalProgressInput(user_id="user-1", goal_id=goal.id, progress=140)
    )
    overview = ListGoalsUseCase(goal_store=store).execute(user_id="user-1")

    assert updated.status == "completed"
    assert updated.progress == 100
    assert overview.xp == 50
    assert overview.level_progress == 50


def test_completed_goal_cannot_be_completed_again(tmp_path):
    store = _store(tmp_path)
    goal = _create(store)
    use_case = CompleteGoalUseCase(goal_store=store)
    use_case.execute(user_id="user-1", goal_id=goal.id)

    with pytest.raises(GoalConflictError):
        use_case.execute(user_id="user-1", goal_id=goal.id)


def test_goals_are_scoped_per_user(tmp_path):
    store = _store(tmp_path)
    goal = _create(store)

    with pytest.raises(GoalNotFoundError):
        CompleteGoalUseCase(goal_store=store).execute(user_id="user-2", goal_id=goal.id)
    with pytest.raises(GoalNotFoundError):
        DeleteGoalUseCase(goal_store=store).execute(user_id="user-2", goal_id=goal.id)

    DeleteGoalUseCase(goal_store=store).execute(user_id="user-1", goal_id=goal.id)
    assert ListGoalsUseCase(goal_store=store).execute(user_id="user-1").goals == []


def test_create_rejects_unknown_category(tmp_path):
    with pytest.raises(GoalInputError):
        CreateGoalUseCase(goal_store=_store(tmp_path)).execute(
            CreateGoalInput(user_id="user-1", title="x", category="Fame", target_value=1, deadline=None)
        )
