from __future__ import annotations

from datetime import datetime

from sqlalchemy import bindparam, text

from smarttube.application.ports.payments_port import PaymentsPort
from smarttube.infrastructure.db.mappers.catalog_mapper import map_row_to_payment


PAYMENT_SELECT = """
    SELECT
        pay.id,
        pay.user_id,
        pay.plan_id,
        pay.amount,
        pay.currency,
        pay.status,
        pay.provider,
        pay.provider_id,
        pay.created_at,
        u.email AS user_email,
        u.full_name AS user_full_name,
        p.name AS plan_name
    FROM public.payments pay
    LEFT JOIN public.users u
      ON u.id = pay.user_id
    LEFT JOIN public.plans p
      ON p.id = pay.plan_id
"""


class SqlPaymentsRepository(PaymentsPort):
    def __init__(self, engine):
        self._engine = engine

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
    ):
        sql = """
            INSERT INTO public.payments (
                id, user_id, plan_id, amount, currency, status, provider, provider_id, created_at
            ) VALUES (
                :id, :user_id, :plan_id, :amount, :currency, :status, :provider, :provider_id, :created_at
            )
            RETURNING id, user_id, plan_id, amount, currency, status, provider, provider_id, created_at
        """
        params = {
            "id": payment_id,
            "user_id": user_id,
            "plan_id": plan_id,
            "amount": amount_cents,
            "currency": currency,
            "status": status,
            "provider": provider,
            "provider_id": provider_id,
            "created_at": created_at,
        }
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_payment(row)

    def list_payments(
        self,
        *,
        search: str | None,
        statuses: list[str],
        start: datetime | None,
        end: datetime | None,
        offset: int,
        limit: int,
    ):
        clauses: list[str] = []
        params: dict = {"offset": offset, "limit": limit}
        if search:
            clauses.append("(u.email ILIKE :pattern OR u.full_name ILIKE :pattern OR pay.provider_id ILIKE :pattern)")
            params["pattern"] = f"%{search}%"
        if statuses:
            clauses.append("pay.status IN :statuses")
            params["statuses"] = list(statuses)
        if start is not None:
            clauses.append("pay.created_at >= :start")
            params["start"] = start
        if end is not None:
            clauses.append("pay.created_at <= :end")
            params["end"] = end
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        list_stmt = text(
            f"""
            {PAYMENT_SELECT}
            {where}
            ORDER BY pay.created_at DESC
            OFFSET :offset
            LIMIT :limit
            """
        )
        count_stmt = text(
            f"""
            SELECT count(*)
            FROM public.payments pay
            LEFT JOIN public.users u
              ON u.id = pay.user_id
            {where}
            """
        )
        if statuses:
            list_stmt = list_stmt.bindparams(bindparam("statuses", expanding=True))
            count_stmt = count_stmt.bindparams(bindparam("statuses", expanding=True))

        with self._engine.connect() as conn:
            rows = conn.execute(list_stmt, params).mappings().all()
            total = conn.execute(count_stmt, params).scalar_one()
        return [map_row_to_payment(row) for row in rows], int(total)

    def list_recent_payments(self, *, limit: int):
        with self._engine.connect() as conn:
            rows = conn.execute(
                text(f"{PAYMENT_SELECT} ORDER BY pay.created_at DESC LIMIT :limit"),
                {"limit": limit},
            ).mappings().all()
        return [map_row_to_payment(row) for row in rows]
