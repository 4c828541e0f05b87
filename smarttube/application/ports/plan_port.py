from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Protocol

from smarttube.domain.entities.feature import FeatureLimit
from smarttube.domain.entities.plan import Plan, UserPlan


class PlanPort(Protocol):
    def list_plans(self) -> list[Plan]:
        ...

    def get_plan_by_id(self, *, plan_id: str) -> Plan | None:
        ...

    def get_plan_by_name(self, *, name: str) -> Plan | None:
        ...

    def get_plan_by_stripe_price_id(self, *, stripe_price_id: str) -> Plan | None:
        ...

    def list_plan_ids_by_name(self) -> dict[str, str]:
        ...

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
    ) -> Plan:
        ...

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
    ) -> Plan | None:
        ...

    def rename_plan(self, *, plan_id: str, name: str, is_active: bool) -> None:
        ...

    def set_plan_active(self, *, plan_id: str, is_active: bool) -> Plan | None:
        ...

    def update_plan_features(self, *, plan_id: str, features: dict[str, int]) -> Plan | None:
        ...

    def delete_plan(self, *, plan_id: str) -> bool:
        ...

    def list_feature_limits(self) -> list[FeatureLimit]:
        ...

    def get_feature_limit_by_key(self, *, key: str) -> FeatureLimit | None:
        ...

    def create_feature_limit(
        self,
        *,
        feature_limit_id: str,
        key: str,
        name: str,
        description: str | None,
        default_value: int,
    ) -> FeatureLimit:
        ...

    def upsert_user_plan(
        self,
        *,
        user_id: str,
        plan_id: str,
        expiry: datetime | None,
        custom_limits: dict[str, int],
    ) -> UserPlan:
        ...
