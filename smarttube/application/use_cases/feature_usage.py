from __future__ import annotations

from smarttube.application.dto.usage import FeatureCheckOutput, FeatureUsageOutput, UserUsageOutput
from smarttube.domain.entities.user import User

from .feature_gate import FeatureGate, to_usage_output


class GetFeatureUsageUseCase:
    def __init__(self, *, feature_gate: FeatureGate):
        self._feature_gate = feature_gate

    def execute(self, *, user: User) -> UserUsageOutput:
        plan_name, summaries = self._feature_gate.all_summaries(user)
        return UserUsageOutput(
            user_id=user.id,
            plan_name=plan_name,
            is_admin=user.is_admin,
            features=[to_usage_output(summary) for summary in summaries],
        )


class CheckFeatureUseCase:
    def __init__(self, *, feature_gate: FeatureGate):
        self._feature_gate = feature_gate

    def execute(self, *, user: User, feature: str) -> FeatureCheckOutput:
        summary = self._feature_gate.summary(user, feature)
        return FeatureCheckOutput(
            feature=feature,
            allowed=self._feature_gate.is_allowed(user, feature),
            usage=to_usage_output(summary),
        )


class UseFeatureUseCase:
    """Counts one use of a feature that has no server-side work of its own."""

    def __init__(self, *, feature_gate: FeatureGate):
        self._feature_gate = feature_gate

    def execute(self, *, user: User, feature: str) -> FeatureUsageOutput:
        self._feature_gate.ensure_allowed(user, feature)
        return self._feature_gate.record_use(user, feature)
