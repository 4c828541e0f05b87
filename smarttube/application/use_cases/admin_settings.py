from __future__ import annotations

import logging
from dataclasses import replace

from smarttube.application.dto.admin import SettingsInput
from smarttube.application.ports.settings_port import SettingsPort
from smarttube.domain.entities.settings import AppSettings


DEFAULT_SETTINGS = AppSettings(
    maintenance_mode=False,
    banner_message="",
    banner_enabled=False,
    support_email="",
    max_upload_size=5,
    openrouter_api_key=None,
)
MASK_PREFIX = "****"
logger = logging.getLogger(__name__)


def mask_secret(value: str | None) -> str | None:
    if not value:
        return None
    return f"{MASK_PREFIX}{value[-4:]}" if len(value) > 4 else MASK_PREFIX


def _current(settings_port: SettingsPort) -> AppSettings:
    return settings_port.get_settings() or DEFAULT_SETTINGS


class GetSettingsUseCase:
    def __init__(self, *, settings_port: SettingsPort):
        self._settings_port = settings_port

    def execute(self) -> AppSettings:
        settings = _current(self._settings_port)
        return replace(settings, openrouter_api_key=mask_secret(settings.openrouter_api_key))


class GetPublicSettingsUseCase:
    """Settings safe to expose without authentication."""

    def __init__(self, *, settings_port: SettingsPort):
        self._settings_port = settings_port

    def execute(self) -> AppSettings:
        return replace(_current(self._settings_port), openrouter_api_key=None)


class SaveSettingsUseCase:
    def __init__(self, *, settings_port: SettingsPort):
        self._settings_port = settings_port

    def execute(self, command: SettingsInput) -> AppSettings:
        if command.max_upload_size <= 0:
            raise ValueError("max_upload_size must be > 0.")
        support_email = command.support_email.strip()
        if support_email and "@" not in support_email:
            raise ValueError("support_email must be a valid email.")

        current = _current(self._settings_port)
        api_key = (command.openrouter_api_key or "").strip()
        # A masked or empty value keeps the stored key.
        if not api_key or api_key.startswith(MASK_PREFIX):
            api_key = current.openrouter_api_key or ""

        saved = self._settings_port.save_settings(
            settings=AppSettings(
                maintenance_mode=command.maintenance_mode,
                banner_message=command.banner_message.strip(),
                banner_enabled=command.banner_enabled,
                support_email=support_email,
                max_upload_size=command.max_upload_size,
                openrouter_api_key=api_key or None,
            )
        )
        logger.info("admin_settings: saved maintenance_mode=%s", saved.maintenance_mode)
        return replace(saved, openrouter_api_key=mask_secret(saved.openrouter_api_key))
