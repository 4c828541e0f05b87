from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from smarttube.domain.entities.payment import Payment
from smarttube.domain.entities.user import User


@dataclass(frozen=True)
class UserListInput:
    search: str | None
    page: int
    page_size: int


@dataclass(frozen=True)
class UserPageOutput:
    items: list[User]
    total: int
    page: int
    page_size: int


@dataclass(frozen=True)
class UpdateUserInput:
    user_id: str
    full_name: str
    email: str
    role: str


@dataclass(frozen=True)
class PlanInput:
    name: str
    price: Decimal
    description: str | None
    features: dict[str, int]
    is_active: bool
    stripe_price_id: str | None


@dataclass(frozen=True)
class FeatureLimitInput:
    key: str
    name: str
    description: str | None
    default_value: int


@dataclass(frozen=True)
class AssignUserPlanInput:
    user_id: str
    plan_id: str
    expiry: datetime | None
    custom_limits: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class PaymentListInput:
    search: str | None
    statuses: list[str]
    start: datetime | None
    end: datetime | None
    page: int
    page_size: int


@dataclass(frozen=True)
class PaymentPageOutput:
    items: list[Payment]
    total: int
    page: int
    page_size: int


@dataclass(frozen=True)
class SettingsInput:
    maintenance_mode: bool
    banner_message: str
    banner_enabled: bool
    support_email: str
    max_upload_size: int
    openrouter_api_key: str | None


@dataclass(frozen=True)
class DashboardCounts:
    """Raw aggregates read from storage in a single pass."""

    total_users: int
    users_current_period: int
    users_previous_period: int
    total_plans: int
    active_plans: int
    active_subscriptions: int
    revenue_current_period_cents: int
    revenue_previous_period_cents: int
    total_payments: int
    successful_payments: int
    active_users_today: int


@dataclass(frozen=True)
class DashboardStatsOutput:
    total_users: int
    user_growth: int
    total_plans: int
    active_plans: int
    active_subscriptions: int
    monthly_revenue_cents: int
    revenue_growth: int
    total_payments: int
    successful_payments: int
    active_users_today: int
    recent_users: list[User]
    recent_payments: list[Payment]
