from __future__ import annotations

from smarttube.application.dto.admin import PaymentListInput, PaymentPageOutput
from smarttube.application.ports.payments_port import PaymentsPort
from smarttube.domain.entities.payment import PAYMENT_STATUSES

from .admin_users import page_window


class ListPaymentsUseCase:
    def __init__(self, *, payments_port: PaymentsPort):
        self._payments_port = payments_port

    def execute(self, command: PaymentListInput) -> PaymentPageOutput:
        offset, limit = page_window(command.page, command.page_size)
        unknown = [status for status in command.statuses if status not in PAYMENT_STATUSES]
        if unknown:
            raise ValueError(f"status must be one of: {', '.join(PAYMENT_STATUSES)}.")
        if command.start is not None and command.end is not None and command.start > command.end:
            raise ValueError("start must be before end.")

        items, total = self._payments_port.list_payments(
            search=(command.search or "").strip() or None,
            statuses=list(command.statuses),
            start=command.start,
            end=command.end,
            offset=offset,
            limit=limit,
        )
        return PaymentPageOutput(items=items, total=total, page=command.page, page_size=command.page_size)
