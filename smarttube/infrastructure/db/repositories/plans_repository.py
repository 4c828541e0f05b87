from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal

from sqlalchemy import text

from smarttube.application.ports.plan_port import PlanPort
from smarttube.infrastructure.db.mappers.catalog_mapper import (
    map_row_to_feature_limit,
    map_row_to_plan,
    map_row_to_user_plan,
)


PLAN_SELECT = """
    SELECT
        p.id,
        p.name,
        p.price,
        p.description,
        p.features,
        p.is_active,
        p.stripe_price_id,
        p.created_at,
        (
            SELECT count(*)
            FROM public.user_plans up
            WHERE up.plan_id = p.id
        ) AS user_count
    FROM public.plans p
"""
PLAN_RETURNING = "id, name, price, description, features, is_active, stripe_price_id, created_at"


class SqlPlansRepository(PlanPort):
    def __init__(self, engine):
        self._engine = engine

    def _fetch_plan(self, where: str, params: dict):
        with self._engine.connect() as conn:
            row = conn.execute(text(f"{PLAN_SELECT} WHERE {where} LIMIT 1"), params).mappings().first()
        if row is None:
            return None
        return map_row_to_plan(row)

    def list_plans(self):
        with self._engine.connect() as conn:
            rows = conn.execute(text(f"{PLAN_SELECT} ORDER BY p.price ASC, p.name ASC")).mappings().all()
        return [map_row_to_plan(row) for row in rows]

    def get_plan_by_id(self, *, plan_id: str):
        return self._fetch_plan("p.id = :plan_id", {"plan_id": plan_id})

    def get_plan_by_name(self, *, name: str):
        return self._fetch_plan("p.name = :name", {"name": name})

    def get_plan_by_stripe_price_id(self, *, stripe_price_id: str):
        return self._fetch_plan("p.stripe_price_id = :stripe_price_id", {"stripe_price_id": stripe_price_id})

    def list_plan_ids_by_name(self) -> dict[str, str]:
        with self._engine.connect() as conn:
            rows = conn.execute(text("SELECT id, name FROM public.plans")).mappings().all()
        return {row["name"]: str(row["id"]) for row in rows}

    def create_plan(
        self,
        *,
        plan_id: str,
        name: str,
        price: Decimal,
        description: str | None,
        features: dict[str, int],
        is_active: bool,
        stripe_price_id: str | None,
        created_at: datetime,
    ):
        sql = f"""
            INSERT INTO public.plans (
                id, name, price, description, features, is_active, stripe_price_id, created_at
            ) VALUES (
                :id, :name, :price, :description, CAST(:features AS jsonb), :is_active, :stripe_price_id, :created_at
            )
            RETURNING {PLAN_RETURNING}
        """
        params = {
            "id": plan_id,
            "name": name,
            "price": price,
            "description": description,
            "features": json.dumps(features),
            "is_active": is_active,
            "stripe_price_id": stripe_price_id,
            "created_at": created_at,
        }
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_plan(row)

    def update_plan(
        self,
        *,
        plan_id: str,
        name: str,
        price: Decimal,
        description: str | None,
        features: dict[str, int],
        is_active: bool,
        stripe_price_id: str | None,
    ):
        sql = f"""
            UPDATE public.plans
            SET name = :name,
                price = :price,
                description = :description,
                features = CAST(:features AS jsonb),
                is_active = :is_active,
                stripe_price_id = :stripe_price_id
            WHERE id = :plan_id
            RETURNING {PLAN_RETURNING}
        """
        params = {
            "plan_id": plan_id,
            "name": name,
            "price": price,
            "description": description,
            "features": json.dumps(features),
            "is_active": is_active,
            "stripe_price_id": stripe_price_id,
        }
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().first()
        if row is None:
            return None
        return map_row_to_plan(row)

    def rename_plan(self, *, plan_id: str, name: str, is_active: bool) -> None:
        sql = """
            UPDATE public.plans
            SET name = :name,
                is_active = :is_active
            WHERE id = :plan_id
        """
        with self._engine.begin() as conn:
            conn.execute(text(sql), {"plan_id": plan_id, "name": name, "is_active": is_active})

    def set_plan_active(self, *, plan_id: str, is_active: bool):
        sql = f"""
            UPDATE public.plans
            SET is_active = :is_active
            WHERE id = :plan_id
            RETURNING {PLAN_RETURNING}
        """
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), {"plan_id": plan_id, "is_active": is_active}).mappings().first()
        if row is None:
            return None
        return map_row_to_plan(row)

    def update_plan_features(self, *, plan_id: str, features: dict[str, int]):
        sql = f"""
            UPDATE public.plans
            SET features = CAST(:features AS jsonb)
            WHERE id = :plan_id
            RETURNING {PLAN_RETURNING}
        """
        with self._engine.begin() as conn:
            row = conn.execute(
                text(sql),
                {"plan_id": plan_id, "features": json.dumps(features)},
            ).mappings().first()
        if row is None:
            return None
        return map_row_to_plan(row)

    def delete_plan(self, *, plan_id: str) -> bool:
        with self._engine.begin() as conn:
            result = conn.execute(text("DELETE FROM public.plans WHERE id = :plan_id"), {"plan_id": plan_id})
        return result.rowcount > 0

    def list_feature_limits(self):
        sql = """
            SELECT id, key, name, description, default_value
            FROM public.feature_limits
            ORDER BY name
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql)).mappings().all()
        return [map_row_to_feature_limit(row) for row in rows]

    def get_feature_limit_by_key(self, *, key: str):
        sql = """
            SELECT id, key, name, description, default_value
            FROM public.feature_limits
            WHERE key = :key
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"key": key}).mappings().first()
        if row is None:
            return None
        return map_row_to_feature_limit(row)

    def create_feature_limit(
        self,
        *,
        feature_limit_id: str,
        key: str,
        name: str,
        description: str | None,
        default_value: int,
    ):
        sql = """
            INSERT INTO public.feature_limits (id, key, name, description, default_value)
            VALUES (:id, :key, :name, :description, :default_value)
            RETURNING id, key, name, description, default_value
        """
        params = {
            "id": feature_limit_id,
            "key": key,
            "name": name,
            "description": description,
            "default_value": default_value,
        }
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_feature_limit(row)

    def upsert_user_plan(
        self,
        *,
        user_id: str,
        plan_id: str,
        expiry: datetime | None,
        custom_limits: dict[str, int],
    ):
        sql = """
            INSERT INTO public.user_plans (user_id, plan_id, expiry, custom_limits)
            VALUES (:user_id, :plan_id, :expiry, CAST(:custom_limits AS jsonb))
            ON CONFLICT (user_id) DO UPDATE
            SET plan_id = EXCLUDED.plan_id,
                expiry = EXCLUDED.expiry,
                custom_limits = EXCLUDED.custom_limits
            RETURNING user_id, plan_id, expiry, custom_limits
        """
        params = {
            "user_id": user_id,
            "plan_id": plan_id,
            "expiry": expiry,
            "custom_limits": json.dumps(custom_limits),
        }
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_user_plan(row)
