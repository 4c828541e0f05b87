from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, TypeVar
from uuid import uuid4

from smarttube.application.dto.goals import CreateGoalInput, GoalsOverviewOutput, UpdateGoalProgressInput
from smarttube.application.ports.goals_port import GoalsPort
from smarttube.domain.entities.goal import Badge, Goal
from smarttube.domain.exceptions import GoalConflictError, GoalNotFoundError, GoalsTableMissingError
from smarttube.domain.services.goals import clamp_progress, complete_goal, compute_progress, validate_goal_fields

from .auth_common import utcnow


T = TypeVar("T")
logger = logging.getLogger(__name__)

STORAGE_DATABASE = "database"
STORAGE_LOCAL = "local"


class GoalStore:
    """Routes goal reads and writes to the database, or to the local store when its table is missing."""

    def __init__(self, *, goals_port: GoalsPort, fallback_port: GoalsPort):
        self._goals_port = goals_port
        self._fallback_port = fallback_port

    def call(self, fn: Callable[[GoalsPort], T]) -> tuple[T, str]:
        try:
            return fn(self._goals_port), STORAGE_DATABASE
        except GoalsTableMissingError:
            logger.warning("channel_goals: table_missing fallback=local")
            return fn(self._fallback_port), STORAGE_LOCAL


def _build_overview(store: GoalStore, user_id: str) -> GoalsOverviewOutput:
    def _load(port: GoalsPort) -> tuple[list[Goal], list[Badge]]:
        return port.list_goals(user_id=user_id), port.list_badges(user_id=user_id)

    (goals, badges), storage = store.call(_load)
    progress = compute_progress(goals)
    return GoalsOverviewOutput(
        goals=goals,
        badges=badges,
        xp=progress.xp,
        level=progress.level,
        level_progress=progress.level_progress,
        storage=storage,
    )


def _get_existing(port: GoalsPort, *, user_id: str, goal_id: str) -> Goal:
    goal = port.get_goal(user_id=user_id, goal_id=goal_id)
    if goal is None:
        raise GoalNotFoundError("Goal not found.")
    return goal


class ListGoalsUseCase:
    def __init__(self, *, goal_store: GoalStore):
        self._goal_store = goal_store

    def execute(self, *, user_id: str) -> GoalsOverviewOutput:
        return _build_overview(self._goal_store, user_id)


class CreateGoalUseCase:
    def __init__(self, *, goal_store: GoalStore):
        self._goal_store = goal_store

    def execute(self, command: CreateGoalInput) -> Goal:
        title = command.title.strip()
        validate_goal_fields(title=title, category=command.category, target_value=command.target_value)
        goal = Goal(
            id=str(uuid4()),
            user_id=command.user_id,
            title=title,
            category=command.category,
            target_value=command.target_value,
            deadline=command.deadline,
            progress=0,
            status="pending",
            created_at=utcnow(),
            completed_at=None,
        )
        created, storage = self._goal_store.call(lambda port: port.create_goal(goal=goal))
        logger.info("channel_goals: created user_id=%s goal_id=%s storage=%s", command.user_id, goal.id, storage)
        return created


class UpdateGoalProgressUseCase:
    def __init__(self, *, goal_store: GoalStore):
        self._goal_store = goal_store

    def execute(self, command: UpdateGoalProgressInput) -> Goal:
        def _update(port: GoalsPort) -> Goal:
            goal = _get_existing(port, user_id=command.user_id, goal_id=command.goal_id)
            if goal.status == "completed":
                raise GoalConflictError("Goal is already completed.")
            progress = clamp_progress(command.progress)
            if progress >= 100:
                return port.update_goal(goal=complete_goal(goal, now=utcnow()))
            return port.update_goal(goal=replace(goal, progress=progress))

        updated, _ = self._goal_store.call(_update)
        return updated


class CompleteGoalUseCase:
    def __init__(self, *, goal_store: GoalStore):
        self._goal_store = goal_store

    def execute(self, *, user_id: str, goal_id: str) -> Goal:
        def _complete(port: GoalsPort) -> Goal:
            goal = _get_existing(port, user_id=user_id, goal_id=goal_id)
            if goal.status == "completed":
                raise GoalConflictError("Goal is already completed.")
            return port.update_goal(goal=complete_goal(goal, now=utcnow()))

        completed, _ = self._goal_store.call(_complete)
        logger.info("channel_goals: completed user_id=%s goal_id=%s", user_id, goal_id)
        return completed


class DeleteGoalUseCase:
    def __init__(self, *, goal_store: GoalStore):
        self._goal_store = goal_store

    def execute(self, *, user_id: str, goal_id: str) -> None:
        deleted, _ = self._goal_store.call(lambda port: port.delete_goal(user_id=user_id, goal_id=goal_id))
        if not deleted:
            raise GoalNotFoundError("Goal not found.")
