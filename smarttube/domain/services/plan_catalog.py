from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from smarttube.domain.services.feature_limits import FEATURE_KEYS, UNLIMITED


LEGACY_SUFFIX = " (Legacy)"


@dataclass(frozen=True)
class PlanTemplate:
    name: str
    price: Decimal
    description: str
    features: dict[str, int]


def _limits(*values: int) -> dict[str, int]:
    return dict(zip(FEATURE_KEYS, values))


DEFAULT_PLANS = (
    PlanTemplate(
        name="Free",
        price=Decimal("0"),
        description="Get Started with Basic Tools for Content Creation.",
        features=_limits(7, 4, 12, 12, 12, 15, 15, 10, 10, 10, 0),
    ),
    PlanTemplate(
        name="Basic",
        price=Decimal("9.99"),
        description="Ideal for Serious Creators Looking for More Tools.",
        features=_limits(20, 18, 30, 40, 40, 50, 50, 40, 40, 40, 1),
    ),
    PlanTemplate(
        name="Pro",
        price=Decimal("29.99"),
        description="Best for Professional Creators Needing Unlimited Access.",
        features=_limits(*([UNLIMITED] * (len(FEATURE_KEYS) - 1)), 2),
    ),
)


@dataclass(frozen=True)
class CatalogSyncPlan:
    updates: dict[str, PlanTemplate]
    inserts: list[PlanTemplate]
    retire: dict[str, str]


def plan_catalog_sync(existing: dict[str, str]) -> CatalogSyncPlan:
    """Diff existing plans (name -> id) against the default catalog.

    Plans with a default name are overwritten, missing defaults are inserted,
    and every other plan is renamed with a legacy suffix and deactivated.
    """
    remaining = dict(existing)
    updates: dict[str, PlanTemplate] = {}
    inserts: list[PlanTemplate] = []
    for template in DEFAULT_PLANS:
        plan_id = remaining.pop(template.name, None)
        if plan_id is None:
            inserts.append(template)
        else:
            updates[plan_id] = template

    retire = {
        plan_id: f"{name}{LEGACY_SUFFIX}"
        for name, plan_id in remaining.items()
        if not name.endswith(LEGACY_SUFFIX)
    }
    return CatalogSyncPlan(updates=updates, inserts=inserts, retire=retire)
