from __future__ import annotations

from smarttube.application.dto.me import MeOutput
from smarttube.domain.entities.user import User

from .auth_common import build_auth_user_output
from .feature_usage import GetFeatureUsageUseCase


class GetMeUseCase:
    def __init__(self, *, get_feature_usage_use_case: GetFeatureUsageUseCase):
        self._get_feature_usage_use_case = get_feature_usage_use_case

    def execute(self, *, user: User) -> MeOutput:
        usage = self._get_feature_usage_use_case.execute(user=user)
        return MeOutput(
            user=build_auth_user_output(user),
            plan_name=usage.plan_name,
            usage=usage.features,
        )
