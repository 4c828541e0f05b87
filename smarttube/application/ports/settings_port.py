from __future__ import annotations

from typing import Protocol

from smarttube.domain.entities.settings import AppSettings


class SettingsPort(Protocol):
    def get_settings(self) -> AppSettings | None:
        ...

    def save_settings(self, *, settings: AppSettings) -> AppSettings:
        ...
