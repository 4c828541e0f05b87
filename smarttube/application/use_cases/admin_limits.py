from __future__ import annotations

import logging
import re
from uuid import uuid4

from smarttube.application.dto.admin import AssignUserPlanInput, FeatureLimitInput
from smarttube.application.ports.auth_port import AuthPort
from smarttube.application.ports.plan_port import PlanPort
from smarttube.domain.entities.feature import FeatureLimit
from smarttube.domain.entities.plan import Plan, UserPlan
from smarttube.domain.exceptions import FeatureLimitConflictError, PlanNotFoundError, UserNotFoundError

from .admin_plans import validate_features


FEATURE_KEY_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 /_-]*$")
logger = logging.getLogger(__name__)


class ListFeatureLimitsUseCase:
    def __init__(self, *, plan_port: PlanPort):
        self._plan_port = plan_port

    def execute(self) -> list[FeatureLimit]:
        return self._plan_port.list_feature_limits()


class CreateFeatureLimitUseCase:
    def __init__(self, *, plan_port: PlanPort):
        self._plan_port = plan_port

    def execute(self, command: FeatureLimitInput) -> FeatureLimit:
        key = command.key.strip()
        name = command.name.strip()
        if not key or not FEATURE_KEY_PATTERN.match(key):
            raise ValueError("key may only contain letters, digits, spaces, '/', '_' and '-'.")
        if not name:
            raise ValueError("name is required.")
        if command.default_value < -1:
            raise ValueError("default_value must be -1 (unlimited) or >= 0.")
        if self._plan_port.get_feature_limit_by_key(key=key) is not None:
            raise FeatureLimitConflictError(f"Feature limit '{key}' already exists.")
        return self._plan_port.create_feature_limit(
            feature_limit_id=str(uuid4()),
            key=key,
            name=name,
            description=command.description,
            default_value=command.default_value,
        )


class SetPlanLimitsUseCase:
    def __init__(self, *, plan_port: PlanPort):
        self._plan_port = plan_port

    def execute(self, *, plan_id: str, features: dict[str, int]) -> Plan:
        plan = self._plan_port.update_plan_features(plan_id=plan_id, features=validate_features(features))
        if plan is None:
            raise PlanNotFoundError("Plan not found.")
        logger.info("admin_limits: plan_limits_updated plan_id=%s features=%s", plan_id, len(plan.features))
        return plan


class AssignUserPlanUseCase:
    def __init__(self, *, plan_port: PlanPort, auth_port: AuthPort):
        self._plan_port = plan_port
        self._auth_port = auth_port

    def execute(self, command: AssignUserPlanInput) -> UserPlan:
        if self._auth_port.get_user_by_id(user_id=command.user_id) is None:
            raise UserNotFoundError("User not found.")
        if self._plan_port.get_plan_by_id(plan_id=command.plan_id) is None:
            raise PlanNotFoundError("Plan not found.")
        user_plan = self._plan_port.upsert_user_plan(
            user_id=command.user_id,
            plan_id=command.plan_id,
            expiry=command.expiry,
            custom_limits=validate_features(command.custom_limits),
        )
        logger.info("admin_limits: plan_assigned user_id=%s plan_id=%s", command.user_id, command.plan_id)
        return user_plan
