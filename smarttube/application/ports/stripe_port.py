from __future__ import annotations

from typing import Protocol

from smarttube.application.dto.billing import StripeCheckoutSessionResult, StripeWebhookEvent
from smarttube.domain.entities.plan import Plan
from smarttube.domain.entities.user import User


class StripePort(Protocol):
    """Subscription checkout for a SmartTube plan and webhook parsing."""

    def create_customer(self, *, user: User) -> str:
        ...

    def create_plan_checkout(
        self,
        *,
        user: User,
        plan: Plan,
        customer_id: str,
        success_url: str,
        cancel_url: str,
    ) -> StripeCheckoutSessionResult:
        ...

    def parse_webhook_event(self, *, signature: str, payload: bytes) -> StripeWebhookEvent:
        ...
