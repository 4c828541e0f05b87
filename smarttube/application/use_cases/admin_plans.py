from __future__ import annotations

import logging
from uuid import uuid4

from smarttube.application.dto.admin import PlanInput
from smarttube.application.ports.plan_port import PlanPort
from smarttube.domain.entities.plan import FREE_PLAN_NAME, Plan
from smarttube.domain.exceptions import PlanConflictError, PlanNotFoundError
from smarttube.domain.services.plan_catalog import plan_catalog_sync

from .auth_common import utcnow


logger = logging.getLogger(__name__)


def validate_features(features: dict[str, int]) -> dict[str, int]:
    cleaned: dict[str, int] = {}
    for key, value in features.items():
        name = key.strip()
        if not name:
            raise ValueError("feature keys cannot be empty.")
        if value < -1:
            raise ValueError(f"limit for '{name}' must be -1 (unlimited) or >= 0.")
        cleaned[name] = value
    return cleaned


def _validate_plan(command: PlanInput) -> str:
    name = command.name.strip()
    if not name:
        raise ValueError("name is required.")
    if command.price < 0:
        raise ValueError("price must be >= 0.")
    return name


class ListPlansUseCase:
    def __init__(self, *, plan_port: PlanPort):
        self._plan_port = plan_port

    def execute(self) -> list[Plan]:
        return self._plan_port.list_plans()


class CreatePlanUseCase:
    def __init__(self, *, plan_port: PlanPort):
        self._plan_port = plan_port

    def execute(self, command: PlanInput) -> Plan:
        name = _validate_plan(command)
        if self._plan_port.get_plan_by_name(name=name) is not None:
            raise PlanConflictError(f"A plan named '{name}' already exists.")
        plan = self._plan_port.create_plan(
            plan_id=str(uuid4()),
            name=name,
            price=command.price,
            description=command.description,
            features=validate_features(command.features),
            is_active=command.is_active,
            stripe_price_id=command.stripe_price_id,
            created_at=utcnow(),
        )
        logger.info("admin_plans: created plan_id=%s name=%s", plan.id, plan.name)
        return plan


class UpdatePlanUseCase:
    def __init__(self, *, plan_port: PlanPort):
        self._plan_port = plan_port

    def execute(self, *, plan_id: str, command: PlanInput) -> Plan:
        name = _validate_plan(command)
        existing = self._plan_port.get_plan_by_name(name=name)
        if existing is not None and existing.id != plan_id:
            raise PlanConflictError(f"A plan named '{name}' already exists.")
        plan = self._plan_port.update_plan(
            plan_id=plan_id,
            name=name,
            price=command.price,
            description=command.description,
            features=validate_features(command.features),
            is_active=command.is_active,
            stripe_price_id=command.stripe_price_id,
        )
        if plan is None:
            raise PlanNotFoundError("Plan not found.")
        return plan


class TogglePlanUseCase:
    def __init__(self, *, plan_port: PlanPort):
        self._plan_port = plan_port

    def execute(self, *, plan_id: str, is_active: bool) -> Plan:
        plan = self._plan_port.set_plan_active(plan_id=plan_id, is_active=is_active)
        if plan is None:
            raise PlanNotFoundError("Plan not found.")
        return plan


class DeletePlanUseCase:
    def __init__(self, *, plan_port: PlanPort):
        self._plan_port = plan_port

    def execute(self, *, plan_id: str) -> None:
        plan = self._plan_port.get_plan_by_id(plan_id=plan_id)
        if plan is None:
            raise PlanNotFoundError("Plan not found.")
        if plan.name == FREE_PLAN_NAME:
            raise PlanConflictError("The Free plan cannot be deleted.")
        if plan.user_count > 0:
            raise PlanConflictError("Plan has subscribed users; deactivate it instead.")
        self._plan_port.delete_plan(plan_id=plan_id)
        logger.info("admin_plans: deleted plan_id=%s", plan_id)


class SyncPlanCatalogUseCase:
    """Overwrites the default plans, inserts missing ones and retires the rest."""

    def __init__(self, *, plan_port: PlanPort):
        self._plan_port = plan_port

    def execute(self) -> list[Plan]:
        sync = plan_catalog_sync(self._plan_port.list_plan_ids_by_name())

        for plan_id, new_name in sync.retire.items():
            self._plan_port.rename_plan(plan_id=plan_id, name=new_name, is_active=False)
        for plan_id, template in sync.updates.items():
            current = self._plan_port.get_plan_by_id(plan_id=plan_id)
            self._plan_port.update_plan(
                plan_id=plan_id,
                name=template.name,
                price=template.price,
                description=template.description,
                features=dict(template.features),
                is_active=True,
                stripe_price_id=current.stripe_price_id if current else None,
            )
        for template in sync.inserts:
            self._plan_port.create_plan(
                plan_id=str(uuid4()),
                name=template.name,
                price=template.price,
                description=template.description,
                features=dict(template.features),
                is_active=True,
                stripe_price_id=None,
                created_at=utcnow(),
            )

        logger.info(
            "admin_plans: catalog_synced updated=%s inserted=%s retired=%s",
            len(sync.updates),
            len(sync.inserts),
            len(sync.retire),
        )
        return self._plan_port.list_plans()
