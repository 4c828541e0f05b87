from __future__ import annotations

from sqlalchemy import text

from smarttube.application.ports.settings_port import SettingsPort
from smarttube.domain.entities.settings import AppSettings
from smarttube.infrastructure.db.mappers.content_mapper import map_row_to_settings


SETTINGS_ROW_ID = 1
SETTINGS_COLUMNS = (
    "maintenance_mode, banner_message, banner_enabled, support_email, max_upload_size, openrouter_api_key"
)


class SqlSettingsRepository(SettingsPort):
    def __init__(self, engine):
        self._engine = engine

    def get_settings(self):
        sql = f"""
            SELECT {SETTINGS_COLUMNS}
            FROM public.app_settings
            WHERE id = :id
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"id": SETTINGS_ROW_ID}).mappings().first()
        if row is None:
            return None
        return map_row_to_settings(row)

    def save_settings(self, *, settings: AppSettings):
        sql = f"""
            INSERT INTO public.app_settings (
                id, {SETTINGS_COLUMNS}, updated_at
            ) VALUES (
                :id, :maintenance_mode, :banner_message, :banner_enabled, :support_email,
                :max_upload_size, :openrouter_api_key, now()
            )
            ON CONFLICT (id) DO UPDATE
            SET maintenance_mode = EXCLUDED.maintenance_mode,
                banner_message = EXCLUDED.banner_message,
                banner_enabled = EXCLUDED.banner_enabled,
                support_email = EXCLUDED.support_email,
                max_upload_size = EXCLUDED.max_upload_size,
                openrouter_api_key = EXCLUDED.openrouter_api_key,
                updated_at = now()
            RETURNING {SETTINGS_COLUMNS}
        """
        params = {
            "id": SETTINGS_ROW_ID,
            "maintenance_mode": settings.maintenance_mode,
            "banner_message": settings.banner_message,
            "banner_enabled": settings.banner_enabled,
            "support_email": settings.support_email,
            "max_upload_size": settings.max_upload_size,
            "openrouter_api_key": settings.openrouter_api_key,
        }
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_settings(row)

    def get_openrouter_api_key(self) -> str | None:
        settings = self.get_settings()
        return settings.openrouter_api_key if settings else None
