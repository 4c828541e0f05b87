from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal


PaymentStatus = Literal["paid", "pending", "failed", "refunded"]
PAYMENT_STATUSES = ("paid", "pending", "failed", "refunded")


@dataclass(frozen=True)
class Payment:
    id: str
    user_id: str
    plan_id: str | None
    amount_cents: int
    currency: str
    status: PaymentStatus
    provider: str
    provider_id: str | None
    created_at: datetime
    user_email: str | None = None
    user_full_name: str | None = None
    plan_name: str | None = None
