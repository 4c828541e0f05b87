from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class FeatureLimit:
    id: str
    key: str
    name: str
    description: str | None
    default_value: int


@dataclass(frozen=True)
class FeatureUsage:
    user_id: str
    feature: str
    count: int
    last_reset: date


@dataclass(frozen=True)
class FeatureUsageSummary:
    feature: str
    limit_value: int
    current_usage: int
    remaining: int
    is_unlimited: bool


@dataclass(frozen=True)
class UserLimits:
    """Plan limits merged with per-user overrides."""

    plan_name: str
    plan_features: dict[str, int]
    custom_limits: dict[str, int]
