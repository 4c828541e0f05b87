from __future__ import annotations

from smarttube.application.dto.admin import DashboardStatsOutput
from smarttube.application.ports.admin_stats_port import AdminStatsPort
from smarttube.domain.services.admin_stats import growth_rate

from .auth_common import utcnow


RECENT_USERS_LIMIT = 8
RECENT_PAYMENTS_LIMIT = 5


class GetDashboardStatsUseCase:
    def __init__(self, *, admin_stats_port: AdminStatsPort):
        self._admin_stats_port = admin_stats_port

    def execute(self) -> DashboardStatsOutput:
        counts = self._admin_stats_port.get_dashboard_counts(now=utcnow())
        return DashboardStatsOutput(
            total_users=counts.total_users,
            user_growth=growth_rate(current=counts.users_current_period, previous=counts.users_previous_period),
            total_plans=counts.total_plans,
            active_plans=counts.active_plans,
            active_subscriptions=counts.active_subscriptions,
            monthly_revenue_cents=counts.revenue_current_period_cents,
            revenue_growth=growth_rate(
                current=counts.revenue_current_period_cents,
                previous=counts.revenue_previous_period_cents,
            ),
            total_payments=counts.total_payments,
            successful_payments=counts.successful_payments,
            active_users_today=counts.active_users_today,
            recent_users=self._admin_stats_port.list_recent_users(limit=RECENT_USERS_LIMIT),
            recent_payments=self._admin_stats_port.list_recent_payments(limit=RECENT_PAYMENTS_LIMIT),
        )
