from __future__ import annotations

from typing import Any, Mapping

from smarttube.domain.entities.announcement import Announcement
from smarttube.domain.entities.goal import Badge, Goal
from smarttube.domain.entities.settings import AppSettings


def map_row_to_announcement(row: Mapping[str, Any]) -> Announcement:
    return Announcement(
        id=str(row["id"]),
        title=row["title"],
        message=row["message"],
        priority=row["priority"],
        announcement_type=row["announcement_type"],
        expiry_date=row.get("expiry_date"),
        is_active=bool(row["is_active"]),
        created_at=row["created_at"],
    )


def map_row_to_settings(row: Mapping[str, Any]) -> AppSettings:
    return AppSettings(
        maintenance_mode=bool(row["maintenance_mode"]),
        banner_message=row["banner_message"] or "",
        banner_enabled=bool(row["banner_enabled"]),
        support_email=row["support_email"] or "",
        max_upload_size=int(row["max_upload_size"]),
        openrouter_api_key=row.get("openrouter_api_key"),
    )


def map_row_to_goal(row: Mapping[str, Any]) -> Goal:
    return Goal(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        title=row["title"],
        category=row["category"],
        target_value=int(row["target_value"]),
        deadline=row.get("deadline"),
        progress=int(row["progress"]),
        status=row["status"],
        created_at=row["created_at"],
        completed_at=row.get("completed_at"),
    )


def map_row_to_badge(row: Mapping[str, Any]) -> Badge:
    return Badge(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        badge_id=row["badge_id"],
        badge_name=row["badge_name"],
        awarded_at=row["awarded_at"],
    )
