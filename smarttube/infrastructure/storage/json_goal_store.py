from __future__ import annotations

import json
import logging
import re
import threading
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any

from smarttube.application.ports.goals_port import GoalsPort
from smarttube.domain.entities.goal import Badge, Goal


logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"[^A-Za-z0-9_.-]")


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)


def _goal_to_json(goal: Goal) -> dict[str, Any]:
    data = asdict(goal)
    for key in ("deadline", "created_at", "completed_at"):
        value = data[key]
        data[key] = value.isoformat() if value is not None else None
    return data


def _goal_from_json(data: dict[str, Any]) -> Goal:
    return Goal(
        id=str(data["id"]),
        user_id=str(data["user_id"]),
        title=str(data["title"]),
        category=data["category"],
        target_value=int(data["target_value"]),
        deadline=_parse_datetime(data.get("deadline")),
        progress=int(data.get("progress") or 0),
        status=data.get("status") or "pending",
        created_at=_parse_datetime(data["created_at"]),
        completed_at=_parse_datetime(data.get("completed_at")),
    )


class JsonGoalStore(GoalsPort):
    """Keeps goals in one JSON file per user when the goals table is not provisioned."""

    def __init__(self, *, base_dir: str | Path):
        self._base_dir = Path(base_dir) / "goals"
        self._lock = threading.Lock()

    def _path(self, user_id: str) -> Path:
        return self._base_dir / f"{_SAFE_ID.sub('_', user_id)}.json"

    def _read(self, user_id: str) -> list[Goal]:
        path = self._path(user_id)
        if not path.exists():
            return []
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("json_goal_store: unreadable_file path=%s", path)
            return []
        return [_goal_from_json(item) for item in raw]

    def _write(self, user_id: str, goals: list[Goal]) -> None:
        path = self._path(user_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps([_goal_to_json(goal) for goal in goals], indent=2), encoding="utf-8")
        tmp_path.replace(path)

    def list_goals(self, *, user_id: str) -> list[Goal]:
        with self._lock:
            goals = self._read(user_id)
        return sorted(goals, key=lambda goal: goal.created_at, reverse=True)

    def get_goal(self, *, user_id: str, goal_id: str) -> Goal | None:
        with self._lock:
            goals = self._read(user_id)
        return next((goal for goal in goals if goal.id == goal_id), None)

    def create_goal(self, *, goal: Goal) -> Goal:
        with self._lock:
            goals = self._read(goal.user_id)
            goals.append(goal)
            self._write(goal.user_id, goals)
        return goal

    def update_goal(self, *, goal: Goal) -> Goal:
        with self._lock:
            goals = self._read(goal.user_id)
            updated = [goal if item.id == goal.id else item for item in goals]
            self._write(goal.user_id, updated)
        return goal

    def delete_goal(self, *, user_id: str, goal_id: str) -> bool:
        with self._lock:
            goals = self._read(user_id)
            remaining = [goal for goal in goals if goal.id != goal_id]
            if len(remaining) == len(goals):
                return False
            self._write(user_id, remaining)
        return True

    def list_badges(self, *, user_id: str) -> list[Badge]:
        return []
