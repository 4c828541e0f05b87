from __future__ import annotations

import argparse
import json
import logging
from uuid import uuid4

from sqlalchemy import text

from smarttube.domain.services.feature_limits import FEATURE_KEYS
from smarttube.domain.services.plan_catalog import DEFAULT_PLANS
from smarttube.infrastructure.db.engine import Base, get_engine
from smarttube.infrastructure.db.models import accounts, catalog, content  # noqa: F401
from smarttube.shared.config import get_settings


logger = logging.getLogger(__name__)

FEATURE_DESCRIPTIONS = {
    "Scripting Tool": "Full video scripts generated from a title and keywords",
    "Ideation Tool": "Video ideas based on a channel",
    "YouTube Tools": "SEO analysis of an existing video",
    "Title Generator": "SEO-optimized title suggestions",
    "Description Generator": "SEO-optimized video descriptions",
    "Hashtag Generator": "Relevant hashtags for a video title",
    "Keyword Ideas": "Rankable keyword suggestions",
    "Video Hook Generator": "Opening hook lines",
    "Title A/B Tester": "Compare two titles for click-through potential",
    "Description Optimizer": "Rewrite a description for SEO",
    "Support": "Support level included in the plan",
}


def create_all(engine) -> None:
    Base.metadata.create_all(engine)


def seed_defaults(engine) -> None:
    free_limits = DEFAULT_PLANS[0].features
    with engine.begin() as conn:
        for template in DEFAULT_PLANS:
            conn.execute(
                text(
                    """
                    INSERT INTO public.plans (id, name, price, description, features, is_active, created_at)
                    VALUES (:id, :name, :price, :description, CAST(:features AS jsonb), true, now())
                    ON CONFLICT (name) DO NOTHING
                    """
                ),
                {
                    "id": str(uuid4()),
                    "name": template.name,
                    "price": template.price,
                    "description": template.description,
                    "features": json.dumps(template.features),
                },
            )

        for key in FEATURE_KEYS:
            conn.execute(
                text(
                    """
                    INSERT INTO public.feature_limits (id, key, name, description, default_value)
                    VALUES (:id, :key, :name, :description, :default_value)
                    ON CONFLICT (key) DO UPDATE
                    SET name = EXCLUDED.name,
                        description = EXCLUDED.description
                    """
                ),
                {
                    "id": str(uuid4()),
                    "key": key,
                    "name": key,
                    "description": FEATURE_DESCRIPTIONS.get(key),
                    "default_value": free_limits.get(key, 0),
                },
            )

        conn.execute(
            text(
                """
                INSERT INTO public.app_settings (id)
                VALUES (1)
                ON CONFLICT (id) DO NOTHING
                """
            )
        )
    logger.info("seed_defaults: seeded plans=%s features=%s", len(DEFAULT_PLANS), len(FEATURE_KEYS))


def promote_admin(engine, *, email: str) -> bool:
    with engine.begin() as conn:
        result = conn.execute(
            text(
                """
                UPDATE public.users
                SET role = 'admin',
                    updated_at = now()
                WHERE lower(email) = :email
                """
            ),
            {"email": email.strip().lower()},
        )
    return result.rowcount > 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create tables and seed default data.")
    parser.add_argument("--promote-admin", metavar="EMAIL", help="grant the admin role to an existing user")
    parser.add_argument("--skip-create", action="store_true", help="do not create missing tables")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    settings = get_settings()
    if not settings.postgres_dsn:
        parser.error("POSTGRES_DSN is required.")
    engine = get_engine(settings.postgres_dsn)

    if not args.skip_create:
        create_all(engine)
    seed_defaults(engine)

    if args.promote_admin:
        if not promote_admin(engine, email=args.promote_admin):
            logger.error("seed_defaults: user_not_found email=%s", args.promote_admin)
            return 1
        logger.info("seed_defaults: promoted email=%s", args.promote_admin)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
