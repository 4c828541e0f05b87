from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FeatureUsageOutput:
    feature: str
    limit_value: int
    current_usage: int
    remaining: int
    is_unlimited: bool
    display: str


@dataclass(frozen=True)
class UserUsageOutput:
    user_id: str
    plan_name: str
    is_admin: bool
    features: list[FeatureUsageOutput]


@dataclass(frozen=True)
class FeatureCheckOutput:
    feature: str
    allowed: bool
    usage: FeatureUsageOutput
