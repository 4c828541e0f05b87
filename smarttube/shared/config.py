from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _csv(name: str) -> tuple[str, ...]:
    value = _env(name, "") or ""
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _bool(name: str, default: str = "false") -> bool:
    return (_env(name, default) or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    postgres_dsn: str
    jwt_secret: str
    jwt_access_ttl_minutes: int
    jwt_refresh_ttl_days: int
    refresh_cookie_secure: bool
    openrouter_api_key: str
    openrouter_api_base: str
    openrouter_model: str
    openrouter_timeout_seconds: float
    youtube_api_key: str
    youtube_api_base: str
    youtube_timeout_seconds: float
    app_public_url: str
    app_title: str
    form_relay_url: str
    form_relay_access_key: str
    form_relay_timeout_seconds: float
    stripe_secret_key: str
    stripe_webhook_secret: str
    stripe_success_url: str
    stripe_cancel_url: str
    smtp_host: str
    smtp_port: int
    smtp_username: str
    smtp_password: str
    smtp_use_tls: bool
    smtp_from_email: str
    password_reset_url: str
    password_reset_ttl_minutes: int
    admin_emails: frozenset[str]
    local_store_dir: str
    cors_origins: tuple[str, ...]
    log_level: str


def get_settings() -> Settings:
    app_public_url = _env("APP_PUBLIC_URL", "http://localhost:5173")
    return Settings(
        postgres_dsn=_env("POSTGRES_DSN", ""),
        jwt_secret=_env("JWT_SECRET", ""),
        jwt_access_ttl_minutes=int(_env("JWT_ACCESS_TTL_MINUTES", "15")),
        jwt_refresh_ttl_days=int(_env("JWT_REFRESH_TTL_DAYS", "30")),
        refresh_cookie_secure=_bool("REFRESH_COOKIE_SECURE"),
        openrouter_api_key=_env("OPENROUTER_API_KEY", ""),
        openrouter_api_base=_env("OPENROUTER_API_BASE", "https://openrouter.ai/api/v1"),
        openrouter_model=_env("OPENROUTER_MODEL", "deepseek/deepseek-r1-zero:free"),
        openrouter_timeout_seconds=float(_env("OPENROUTER_TIMEOUT_SECONDS", "60")),
        youtube_api_key=_env("YOUTUBE_API_KEY", ""),
        youtube_api_base=_env("YOUTUBE_API_BASE", "https://www.googleapis.com/youtube/v3"),
        youtube_timeout_seconds=float(_env("YOUTUBE_TIMEOUT_SECONDS", "10")),
        app_public_url=app_public_url,
        app_title=_env("APP_TITLE", "SmartTube"),
        form_relay_url=_env("FORM_RELAY_URL", "https://api.web3forms.com/submit"),
        form_relay_access_key=_env("FORM_RELAY_ACCESS_KEY", ""),
        form_relay_timeout_seconds=float(_env("FORM_RELAY_TIMEOUT_SECONDS", "10")),
        stripe_secret_key=_env("STRIPE_SECRET_KEY", ""),
        stripe_webhook_secret=_env("STRIPE_WEBHOOK_SECRET", ""),
        stripe_success_url=_env("STRIPE_SUCCESS_URL", f"{app_public_url}/dashboard?checkout=success"),
        stripe_cancel_url=_env("STRIPE_CANCEL_URL", f"{app_public_url}/dashboard?checkout=cancel"),
        smtp_host=_env("SMTP_HOST", ""),
        smtp_port=int(_env("SMTP_PORT", "587")),
        smtp_username=_env("SMTP_USERNAME", ""),
        smtp_password=_env("SMTP_PASSWORD", ""),
        smtp_use_tls=_bool("SMTP_USE_TLS", "true"),
        smtp_from_email=_env("SMTP_FROM_EMAIL", ""),
        password_reset_url=_env("PASSWORD_RESET_URL", f"{app_public_url}/reset-password"),
        password_reset_ttl_minutes=int(_env("PASSWORD_RESET_TTL_MINUTES", "60")),
        admin_emails=frozenset(email.lower() for email in _csv("ADMIN_EMAILS")),
        local_store_dir=_env("LOCAL_STORE_DIR", ".smarttube"),
        cors_origins=_csv("CORS_ORIGINS") or (app_public_url,),
        log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
    )
