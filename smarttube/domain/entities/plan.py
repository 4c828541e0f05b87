from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


FREE_PLAN_NAME = "Free"


@dataclass(frozen=True)
class Plan:
    id: str
    name: str
    price: Decimal
    description: str | None
    features: dict[str, int]
    is_active: bool
    stripe_price_id: str | None
    created_at: datetime
    user_count: int = 0


@dataclass(frozen=True)
class UserPlan:
    user_id: str
    plan_id: str
    expiry: datetime | None
    custom_limits: dict[str, int] = field(default_factory=dict)
