from __future__ import annotations

from contextlib import contextmanager

from sqlalchemy import text
from sqlalchemy.exc import ProgrammingError

from smarttube.application.ports.goals_port import GoalsPort
from smarttube.domain.entities.goal import Goal
from smarttube.domain.exceptions import GoalsTableMissingError
from smarttube.infrastructure.db.mappers.content_mapper import map_row_to_badge, map_row_to_goal


UNDEFINED_TABLE = "42P01"
GOAL_COLUMNS = "id, user_id, title, category, target_value, deadline, progress, status, created_at, completed_at"


def _is_undefined_table(exc: ProgrammingError) -> bool:
    code = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
    return code == UNDEFINED_TABLE


class SqlGoalsRepository(GoalsPort):
    def __init__(self, engine):
        self._engine = engine

    @contextmanager
    def _translate_missing_table(self):
        try:
            yield
        except ProgrammingError as exc:
            if _is_undefined_table(exc):
                raise GoalsTableMissingError("Goals storage is not provisioned.") from exc
            raise

    def list_goals(self, *, user_id: str):
        sql = f"""
            SELECT {GOAL_COLUMNS}
            FROM public.user_goals
            WHERE user_id = :user_id
            ORDER BY created_at DESC
        """
        with self._translate_missing_table(), self._engine.connect() as conn:
            rows = conn.execute(text(sql), {"user_id": user_id}).mappings().all()
        return [map_row_to_goal(row) for row in rows]

    def get_goal(self, *, user_id: str, goal_id: str):
        sql = f"""
            SELECT {GOAL_COLUMNS}
            FROM public.user_goals
            WHERE user_id = :user_id
              AND id = :goal_id
            LIMIT 1
        """
        with self._translate_missing_table(), self._engine.connect() as conn:
            row = conn.execute(text(sql), {"user_id": user_id, "goal_id": goal_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_goal(row)

    def create_goal(self, *, goal: Goal):
        sql = f"""
            INSERT INTO public.user_goals (
                id, user_id, title, category, target_value, deadline, progress, status, created_at, completed_at
            ) VALUES (
                :id, :user_id, :title, :category, :target_value, :deadline, :progress, :status,
                :created_at, :completed_at
            )
            RETURNING {GOAL_COLUMNS}
        """
        params = {
            "id": goal.id,
            "user_id": goal.user_id,
            "title": goal.title,
            "category": goal.category,
            "target_value": goal.target_value,
            "deadline": goal.deadline,
            "progress": goal.progress,
            "status": goal.status,
            "created_at": goal.created_at,
            "completed_at": goal.completed_at,
        }
        with self._translate_missing_table(), self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_goal(row)

    def update_goal(self, *, goal: Goal):
        sql = f"""
            UPDATE public.user_goals
            SET title = :title,
                category = :category,
                target_value = :target_value,
                deadline = :deadline,
                progress = :progress,
                status = :status,
                completed_at = :completed_at
            WHERE id = :id
              AND user_id = :user_id
            RETURNING {GOAL_COLUMNS}
        """
        params = {
            "id": goal.id,
            "user_id": goal.user_id,
            "title": goal.title,
            "category": goal.category,
            "target_value": goal.target_value,
            "deadline": goal.deadline,
            "progress": goal.progress,
            "status": goal.status,
            "completed_at": goal.completed_at,
        }
        with self._translate_missing_table(), self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_goal(row)

    def delete_goal(self, *, user_id: str, goal_id: str) -> bool:
        sql = """
            DELETE FROM public.user_goals
            WHERE id = :goal_id
              AND user_id = :user_id
        """
        with self._translate_missing_table(), self._engine.begin() as conn:
            result = conn.execute(text(sql), {"user_id": user_id, "goal_id": goal_id})
        return result.rowcount > 0

    def list_badges(self, *, user_id: str):
        sql = """
            SELECT id, user_id, badge_id, badge_name, awarded_at
            FROM public.user_badges
            WHERE user_id = :user_id
            ORDER BY awarded_at DESC
        """
        with self._translate_missing_table(), self._engine.connect() as conn:
            rows = conn.execute(text(sql), {"user_id": user_id}).mappings().all()
        return [map_row_to_badge(row) for row in rows]
