from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class AdminUserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    email: str
    avatar_url: str | None
    role: str
    is_admin: bool
    is_active: bool
    is_banned: bool
    created_at: datetime


class UserPageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    items: list[AdminUserResponse]
    total: int
    page: int
    page_size: int


class ToggleAdminRequest(BaseModel):
    is_admin: bool


class ToggleBanRequest(BaseModel):
    is_banned: bool


class UpdateUserRequest(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=120)
    email: str = Field(..., min_length=3, max_length=255)
    role: str = "user"


class PlanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price: Decimal
    description: str | None
    features: dict[str, int]
    is_active: bool
    stripe_price_id: str | None
    created_at: datetime
    user_count: int


class PlanRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    price: Decimal = Field(default=Decimal("0"))
    description: str | None = None
    features: dict[str, int] = Field(default_factory=dict)
    is_active: bool = True
    stripe_price_id: str | None = None


class PlanLimitsRequest(BaseModel):
    features: dict[str, int]


class FeatureLimitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    key: str
    name: str
    description: str | None
    default_value: int


class FeatureLimitRequest(BaseModel):
    key: str = Field(..., min_length=1, max_length=120)
    name: str = Field(..., min_length=1, max_length=120)
    description: str | None = None
    default_value: int = 0


class AssignUserPlanRequest(BaseModel):
    plan_id: str = Field(..., min_length=1)
    expiry: datetime | None = None
    custom_limits: dict[str, int] = Field(default_factory=dict)


class UserPlanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    plan_id: str
    expiry: datetime | None
    custom_limits: dict[str, int]


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    plan_id: str | None
    amount_cents: int
    currency: str
    status: str
    provider: str
    provider_id: str | None
    created_at: datetime
    user_email: str | None
    user_full_name: str | None
    plan_name: str | None


class PaymentPageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    items: list[PaymentResponse]
    total: int
    page: int
    page_size: int


class DashboardStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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
    recent_users: list[AdminUserResponse]
    recent_payments: list[PaymentResponse]
