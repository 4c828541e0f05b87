from __future__ import annotations

from datetime import datetime

from sqlalchemy import text

from smarttube.application.ports.announcements_port import AnnouncementsPort
from smarttube.infrastructure.db.mappers.content_mapper import map_row_to_announcement


ANNOUNCEMENT_COLUMNS = "id, title, message, priority, announcement_type, expiry_date, is_active, created_at"


class SqlAnnouncementsRepository(AnnouncementsPort):
    def __init__(self, engine):
        self._engine = engine

    def list_active(self, *, announcement_type: str, now: datetime):
        sql = f"""
            SELECT {ANNOUNCEMENT_COLUMNS}
            FROM public.announcements
            WHERE is_active = true
              AND announcement_type = :announcement_type
              AND (expiry_date IS NULL OR expiry_date > :now)
            ORDER BY
                CASE priority
                    WHEN 'high' THEN 3
                    WHEN 'medium' THEN 2
                    WHEN 'low' THEN 1
                    ELSE 0
                END DESC,
                created_at DESC
        """
        with self._engine.connect() as conn:
            rows = conn.execute(
                text(sql),
                {"announcement_type": announcement_type, "now": now},
            ).mappings().all()
        return [map_row_to_announcement(row) for row in rows]

    def list_all(self):
        sql = f"""
            SELECT {ANNOUNCEMENT_COLUMNS}
            FROM public.announcements
            ORDER BY created_at DESC
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql)).mappings().all()
        return [map_row_to_announcement(row) for row in rows]

    def create(
        self,
        *,
        announcement_id: str,
        title: str,
        message: str,
        priority: str,
        announcement_type: str,
        expiry_date: datetime | None,
        is_active: bool,
        created_at: datetime,
    ):
        sql = f"""
            INSERT INTO public.announcements (
                id, title, message, priority, announcement_type, expiry_date, is_active, created_at
            ) VALUES (
                :id, :title, :message, :priority, :announcement_type, :expiry_date, :is_active, :created_at
            )
            RETURNING {ANNOUNCEMENT_COLUMNS}
        """
        params = {
            "id": announcement_id,
            "title": title,
            "message": message,
            "priority": priority,
            "announcement_type": announcement_type,
            "expiry_date": expiry_date,
            "is_active": is_active,
            "created_at": created_at,
        }
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_announcement(row)

    def update(
        self,
        *,
        announcement_id: str,
        title: str,
        message: str,
        priority: str,
        announcement_type: str,
        expiry_date: datetime | None,
        is_active: bool,
    ):
        sql = f"""
            UPDATE public.announcements
            SET title = :title,
                message = :message,
                priority = :priority,
                announcement_type = :announcement_type,
                expiry_date = :expiry_date,
                is_active = :is_active
            WHERE id = :id
            RETURNING {ANNOUNCEMENT_COLUMNS}
        """
        params = {
            "id": announcement_id,
            "title": title,
            "message": message,
            "priority": priority,
            "announcement_type": announcement_type,
            "expiry_date": expiry_date,
            "is_active": is_active,
        }
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().first()
        if row is None:
            return None
        return map_row_to_announcement(row)

    def set_active(self, *, announcement_id: str, is_active: bool):
        sql = f"""
            UPDATE public.announcements
            SET is_active = :is_active
            WHERE id = :id
            RETURNING {ANNOUNCEMENT_COLUMNS}
        """
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), {"id": announcement_id, "is_active": is_active}).mappings().first()
        if row is None:
            return None
        return map_row_to_announcement(row)

    def delete(self, *, announcement_id: str) -> bool:
        with self._engine.begin() as conn:
            result = conn.execute(text("DELETE FROM public.announcements WHERE id = :id"), {"id": announcement_id})
        return result.rowcount > 0
