from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from smarttube.api.routers import (
    admin_catalog,
    admin_operations,
    admin_users,
    announcements,
    auth,
    billing,
    features,
    goals,
    me,
    public,
    support,
    tools,
)
from smarttube.shared.config import get_settings


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    app = FastAPI(title=f"{settings.app_title} API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router_module in (
        auth,
        me,
        features,
        tools,
        goals,
        announcements,
        support,
        public,
        billing,
        admin_users,
        admin_catalog,
        admin_operations,
    ):
        app.include_router(router_module.router)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
