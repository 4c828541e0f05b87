from __future__ import annotations

from datetime import datetime
from typing import Protocol

from smarttube.application.dto.admin import DashboardCounts
from smarttube.domain.entities.payment import Payment
from smarttube.domain.entities.user import User


class AdminStatsPort(Protocol):
    def get_dashboard_counts(self, *, now: datetime) -> DashboardCounts:
        ...

    def list_recent_users(self, *, limit: int) -> list[User]:
        ...

    def list_recent_payments(self, *, limit: int) -> list[Payment]:
        ...
