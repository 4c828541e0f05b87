from __future__ import annotations

from datetime import datetime
from typing import Protocol

from smarttube.domain.entities.payment import Payment


class PaymentsPort(Protocol):
    def create_payment(
        self,
        *,
        payment_id: str,
        user_id: str,
        plan_id: str | None,
        amount_cents: int,
        currency: str,
        status: str,
        provider: str,
        provider_id: str | None,
        created_at: datetime,
    ) -> Payment:
        ...

    def list_payments(
        self,
        *,
        search: str | None,
        statuses: list[str],
        start: datetime | None,
        end: datetime | None,
        offset: int,
        limit: int,
    ) -> tuple[list[Payment], int]:
        ...
