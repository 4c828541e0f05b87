from __future__ import annotations

from typing import Protocol

from smarttube.domain.entities.goal import Badge, Goal


class GoalsPort(Protocol):
    """Raises GoalsTableMissingError when the backing table is not provisioned."""

    def list_goals(self, *, user_id: str) -> list[Goal]:
        ...

    def get_goal(self, *, user_id: str, goal_id: str) -> Goal | None:
        ...

    def create_goal(self, *, goal: Goal) -> Goal:
        ...

    def update_goal(self, *, goal: Goal) -> Goal:
        ...

    def delete_goal(self, *, user_id: str, goal_id: str) -> bool:
        ...

    def list_badges(self, *, user_id: str) -> list[Badge]:
        ...
