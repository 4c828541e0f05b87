from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AppSettings:
    maintenance_mode: bool
    banner_message: str
    banner_enabled: bool
    support_email: str
    max_upload_size: int
    openrouter_api_key: str | None
