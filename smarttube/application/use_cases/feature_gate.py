from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from smarttube.application.dto.usage import FeatureUsageOutput
from smarttube.application.ports.usage_port import UsagePort
from smarttube.domain.entities.feature import FeatureUsage, FeatureUsageSummary, UserLimits
from smarttube.domain.entities.plan import FREE_PLAN_NAME
from smarttube.domain.entities.user import User
from smarttube.domain.exceptions import FeatureDisabledError, FeatureLimitExceededError, UnknownFeatureError
from smarttube.domain.services.feature_limits import (
    DISABLED,
    FEATURE_KEYS,
    check_limit,
    format_usage,
    is_known_feature,
    next_usage,
    resolve_limit,
    summarize_usage,
    utc_today,
)


logger = logging.getLogger(__name__)


def to_usage_output(summary: FeatureUsageSummary) -> FeatureUsageOutput:
    return FeatureUsageOutput(
        feature=summary.feature,
        limit_value=summary.limit_value,
        current_usage=summary.current_usage,
        remaining=summary.remaining,
        is_unlimited=summary.is_unlimited,
        display=format_usage(summary),
    )


class FeatureGate:
    """Reads limits and usage for a user and enforces the daily cap."""

    def __init__(self, *, usage_port: UsagePort, today: Callable[[], date] = utc_today):
        self._usage_port = usage_port
        self._today = today

    def limits_for(self, user: User) -> UserLimits:
        limits = self._usage_port.get_user_limits(user_id=user.id)
        if limits is None:
            return UserLimits(plan_name=FREE_PLAN_NAME, plan_features={}, custom_limits={})
        return limits

    def _resolve(self, user: User, feature: str) -> tuple[int, FeatureUsage | None]:
        limits = self.limits_for(user)
        known = is_known_feature(feature) or feature in limits.plan_features or feature in limits.custom_limits
        if not known:
            raise UnknownFeatureError(f"Unknown feature '{feature}'.")
        limit = resolve_limit(
            plan_features=limits.plan_features,
            custom_limits=limits.custom_limits,
            feature=feature,
        )
        return limit, self._usage_port.get_usage(user_id=user.id, feature=feature)

    def summary(self, user: User, feature: str) -> FeatureUsageSummary:
        limit, usage = self._resolve(user, feature)
        return summarize_usage(
            feature=feature,
            limit=limit,
            usage=usage,
            today=self._today(),
            is_admin=user.is_admin,
        )

    def is_allowed(self, user: User, feature: str) -> bool:
        limit, usage = self._resolve(user, feature)
        return check_limit(limit=limit, usage=usage, today=self._today(), is_admin=user.is_admin)

    def ensure_allowed(self, user: User, feature: str) -> None:
        limit, usage = self._resolve(user, feature)
        if check_limit(limit=limit, usage=usage, today=self._today(), is_admin=user.is_admin):
            return
        if limit <= DISABLED:
            logger.info("feature_gate: disabled user_id=%s feature=%s", user.id, feature)
            raise FeatureDisabledError(f"'{feature}' is not available on your plan.")
        logger.info("feature_gate: limit_reached user_id=%s feature=%s limit=%s", user.id, feature, limit)
        raise FeatureLimitExceededError(
            f"You've reached your daily limit for '{feature}'. Upgrade your plan to continue using this feature."
        )

    def record_use(self, user: User, feature: str) -> FeatureUsageOutput:
        today = self._today()
        limit, usage = self._resolve(user, feature)
        updated = next_usage(usage, user_id=user.id, feature=feature, today=today)
        self._usage_port.save_usage(usage=updated)
        return to_usage_output(
            summarize_usage(
                feature=feature,
                limit=limit,
                usage=updated,
                today=today,
                is_admin=user.is_admin,
            )
        )

    def all_summaries(self, user: User) -> tuple[str, list[FeatureUsageSummary]]:
        today = self._today()
        limits = self.limits_for(user)
        usage_by_feature = {usage.feature: usage for usage in self._usage_port.list_usage(user_id=user.id)}
        extra = sorted((set(limits.plan_features) | set(limits.custom_limits)) - set(FEATURE_KEYS))

        summaries = []
        for feature in list(FEATURE_KEYS) + extra:
            limit = resolve_limit(
                plan_features=limits.plan_features,
                custom_limits=limits.custom_limits,
                feature=feature,
            )
            summaries.append(
                summarize_usage(
                    feature=feature,
                    limit=limit,
                    usage=usage_by_feature.get(feature),
                    today=today,
                    is_admin=user.is_admin,
                )
            )
        return limits.plan_name, summaries
