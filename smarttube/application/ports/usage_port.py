from __future__ import annotations

from typing import Protocol

from smarttube.domain.entities.feature import FeatureUsage, UserLimits


class UsagePort(Protocol):
    def get_user_limits(self, *, user_id: str) -> UserLimits | None:
        ...

    def get_usage(self, *, user_id: str, feature: str) -> FeatureUsage | None:
        ...

    def list_usage(self, *, user_id: str) -> list[FeatureUsage]:
        ...

    def save_usage(self, *, usage: FeatureUsage) -> None:
        ...
