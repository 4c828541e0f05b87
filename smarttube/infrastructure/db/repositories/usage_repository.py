from __future__ import annotations

from sqlalchemy import text

from smarttube.application.ports.usage_port import UsagePort
from smarttube.domain.entities.feature import FeatureUsage, UserLimits
from smarttube.domain.entities.plan import FREE_PLAN_NAME
from smarttube.infrastructure.db.mappers.catalog_mapper import map_row_to_feature_usage, map_row_to_user_plan


class SqlUsageRepository(UsagePort):
    def __init__(self, engine):
        self._engine = engine

    def get_user_limits(self, *, user_id: str):
        assigned_sql = """
            SELECT
                up.user_id,
                up.plan_id,
                up.expiry,
                up.custom_limits,
                p.name AS plan_name,
                p.features
            FROM public.user_plans up
            JOIN public.plans p
              ON p.id = up.plan_id
            WHERE up.user_id = :user_id
              AND (up.expiry IS NULL OR up.expiry > now())
            LIMIT 1
        """
        free_sql = """
            SELECT name AS plan_name, features
            FROM public.plans
            WHERE name = :name
              AND is_active = true
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(assigned_sql), {"user_id": user_id}).mappings().first()
            if row is not None:
                user_plan = map_row_to_user_plan(row)
                return UserLimits(
                    plan_name=row["plan_name"],
                    plan_features={key: int(value) for key, value in dict(row["features"] or {}).items()},
                    custom_limits=user_plan.custom_limits,
                )
            free = conn.execute(text(free_sql), {"name": FREE_PLAN_NAME}).mappings().first()
        if free is None:
            return None
        return UserLimits(
            plan_name=free["plan_name"],
            plan_features={key: int(value) for key, value in dict(free["features"] or {}).items()},
            custom_limits={},
        )

    def get_usage(self, *, user_id: str, feature: str):
        sql = """
            SELECT user_id, feature, count, last_reset
            FROM public.feature_usage
            WHERE user_id = :user_id
              AND feature = :feature
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"user_id": user_id, "feature": feature}).mappings().first()
        if row is None:
            return None
        return map_row_to_feature_usage(row)

    def list_usage(self, *, user_id: str):
        sql = """
            SELECT user_id, feature, count, last_reset
            FROM public.feature_usage
            WHERE user_id = :user_id
            ORDER BY feature
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql), {"user_id": user_id}).mappings().all()
        return [map_row_to_feature_usage(row) for row in rows]

    def save_usage(self, *, usage: FeatureUsage) -> None:
        sql = """
            INSERT INTO public.feature_usage (user_id, feature, count, last_reset)
            VALUES (:user_id, :feature, :count, :last_reset)
            ON CONFLICT (user_id, feature) DO UPDATE
            SET count = EXCLUDED.count,
                last_reset = EXCLUDED.last_reset
        """
        with self._engine.begin() as conn:
            conn.execute(
                text(sql),
                {
                    "user_id": usage.user_id,
                    "feature": usage.feature,
                    "count": usage.count,
                    "last_reset": usage.last_reset,
                },
            )
