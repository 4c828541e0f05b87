from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import text

from smarttube.application.dto.admin import DashboardCounts
from smarttube.application.ports.admin_stats_port import AdminStatsPort
from smarttube.domain.entities.plan import FREE_PLAN_NAME
from smarttube.infrastructure.db.mappers.accounts_mapper import USER_COLUMNS, map_row_to_user

from .payments_repository import SqlPaymentsRepository


PERIOD_DAYS = 30


class SqlAdminStatsRepository(AdminStatsPort):
    def __init__(self, engine):
        self._engine = engine
        self._payments = SqlPaymentsRepository(engine)

    def get_dashboard_counts(self, *, now: datetime) -> DashboardCounts:
        sql = """
            SELECT
                (SELECT count(*) FROM public.users) AS total_users,
                (SELECT count(*) FROM public.users WHERE created_at >= :current_start) AS users_current_period,
                (
                    SELECT count(*)
                    FROM public.users
                    WHERE created_at >= :previous_start
                      AND created_at < :current_start
                ) AS users_previous_period,
                (SELECT count(*) FROM public.plans) AS total_plans,
                (SELECT count(*) FROM public.plans WHERE is_active = true) AS active_plans,
                (
                    SELECT count(*)
                    FROM public.user_plans up
                    JOIN public.plans p
                      ON p.id = up.plan_id
                    WHERE p.name <> :free_plan
                      AND p.price > 0
                      AND (up.expiry IS NULL OR up.expiry > :now)
                ) AS active_subscriptions,
                (
                    SELECT coalesce(sum(amount), 0)
                    FROM public.payments
                    WHERE status = 'paid'
                      AND created_at >= :current_start
                ) AS revenue_current_period_cents,
                (
                    SELECT coalesce(sum(amount), 0)
                    FROM public.payments
                    WHERE status = 'paid'
                      AND created_at >= :previous_start
                      AND created_at < :current_start
                ) AS revenue_previous_period_cents,
                (SELECT count(*) FROM public.payments) AS total_payments,
                (SELECT count(*) FROM public.payments WHERE status = 'paid') AS successful_payments,
                (
                    SELECT count(DISTINCT user_id)
                    FROM public.feature_usage
                    WHERE last_reset = :today
                ) AS active_users_today
        """
        params = {
            "now": now,
            "current_start": now - timedelta(days=PERIOD_DAYS),
            "previous_start": now - timedelta(days=PERIOD_DAYS * 2),
            "free_plan": FREE_PLAN_NAME,
            "today": now.date(),
        }
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return DashboardCounts(**{key: int(value) for key, value in row.items()})

    def list_recent_users(self, *, limit: int):
        sql = f"""
            SELECT {USER_COLUMNS}
            FROM public.users
            ORDER BY created_at DESC
            LIMIT :limit
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql), {"limit": limit}).mappings().all()
        return [map_row_to_user(row) for row in rows]

    def list_recent_payments(self, *, limit: int):
        return self._payments.list_recent_payments(limit=limit)
