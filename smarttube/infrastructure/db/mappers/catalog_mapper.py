from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping

from smarttube.domain.entities.feature import FeatureLimit, FeatureUsage
from smarttube.domain.entities.payment import Payment
from smarttube.domain.entities.plan import Plan, UserPlan


def _as_limits(value: Any) -> dict[str, int]:
    if not value:
        return {}
    return {str(key): int(limit) for key, limit in dict(value).items()}


def map_row_to_plan(row: Mapping[str, Any]) -> Plan:
    return Plan(
        id=str(row["id"]),
        name=row["name"],
        price=Decimal(str(row["price"])),
        description=row.get("description"),
        features=_as_limits(row.get("features")),
        is_active=bool(row["is_active"]),
        stripe_price_id=row.get("stripe_price_id"),
        created_at=row["created_at"],
        user_count=int(row.get("user_count") or 0),
    )


def map_row_to_user_plan(row: Mapping[str, Any]) -> UserPlan:
    return UserPlan(
        user_id=str(row["user_id"]),
        plan_id=str(row["plan_id"]),
        expiry=row.get("expiry"),
        custom_limits=_as_limits(row.get("custom_limits")),
    )


def map_row_to_feature_limit(row: Mapping[str, Any]) -> FeatureLimit:
    return FeatureLimit(
        id=str(row["id"]),
        key=row["key"],
        name=row["name"],
        description=row.get("description"),
        default_value=int(row["default_value"]),
    )


def map_row_to_feature_usage(row: Mapping[str, Any]) -> FeatureUsage:
    return FeatureUsage(
        user_id=str(row["user_id"]),
        feature=row["feature"],
        count=int(row["count"]),
        last_reset=row["last_reset"],
    )


def map_row_to_payment(row: Mapping[str, Any]) -> Payment:
    return Payment(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        plan_id=str(row["plan_id"]) if row.get("plan_id") is not None else None,
        amount_cents=int(row["amount"]),
        currency=row["currency"],
        status=row["status"],
        provider=row["provider"],
        provider_id=row.get("provider_id"),
        created_at=row["created_at"],
        user_email=row.get("user_email"),
        user_full_name=row.get("user_full_name"),
        plan_name=row.get("plan_name"),
    )
