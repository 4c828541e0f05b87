"""Daily feature usage rules.

A plan maps feature keys to an integer daily cap. ``-1`` means unlimited and
``0`` (or any other non-positive value) means the feature is disabled. Usage
is a per (user, feature) counter stamped with the UTC date of its last reset;
a counter stamped with another day counts as zero.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Mapping

from smarttube.domain.entities.feature import FeatureUsage, FeatureUsageSummary


SCRIPTING_TOOL = "Scripting Tool"
IDEATION_TOOL = "Ideation Tool"
YOUTUBE_TOOLS = "YouTube Tools"
TITLE_GENERATOR = "Title Generator"
DESCRIPTION_GENERATOR = "Description Generator"
HASHTAG_GENERATOR = "Hashtag Generator"
KEYWORD_IDEAS = "Keyword Ideas"
VIDEO_HOOK_GENERATOR = "Video Hook Generator"
TITLE_AB_TESTER = "Title A/B Tester"
DESCRIPTION_OPTIMIZER = "Description Optimizer"
SUPPORT = "Support"

FEATURE_KEYS = (
    SCRIPTING_TOOL,
    IDEATION_TOOL,
    YOUTUBE_TOOLS,
    TITLE_GENERATOR,
    DESCRIPTION_GENERATOR,
    HASHTAG_GENERATOR,
    KEYWORD_IDEAS,
    VIDEO_HOOK_GENERATOR,
    TITLE_AB_TESTER,
    DESCRIPTION_OPTIMIZER,
    SUPPORT,
)

UNLIMITED = -1
DISABLED = 0


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def is_known_feature(feature: str) -> bool:
    return feature in FEATURE_KEYS


def resolve_limit(
    *,
    plan_features: Mapping[str, int],
    custom_limits: Mapping[str, int] | None,
    feature: str,
) -> int:
    if custom_limits and feature in custom_limits:
        return int(custom_limits[feature])
    return int(plan_features.get(feature, DISABLED))


def effective_count(usage: FeatureUsage | None, *, today: date) -> int:
    if usage is None or usage.last_reset != today:
        return 0
    return usage.count


def check_limit(
    *,
    limit: int,
    usage: FeatureUsage | None,
    today: date,
    is_admin: bool = False,
) -> bool:
    if is_admin or limit == UNLIMITED:
        return True
    if limit <= DISABLED:
        return False
    return effective_count(usage, today=today) < limit


def remaining_usage(
    *,
    limit: int,
    usage: FeatureUsage | None,
    today: date,
    is_admin: bool = False,
) -> int:
    if is_admin or limit == UNLIMITED:
        return UNLIMITED
    if limit <= DISABLED:
        return 0
    return max(0, limit - effective_count(usage, today=today))


def next_usage(
    usage: FeatureUsage | None,
    *,
    user_id: str,
    feature: str,
    today: date,
) -> FeatureUsage:
    if usage is None or usage.last_reset != today:
        return FeatureUsage(user_id=user_id, feature=feature, count=1, last_reset=today)
    return FeatureUsage(
        user_id=user_id,
        feature=feature,
        count=usage.count + 1,
        last_reset=today,
    )


def summarize_usage(
    *,
    feature: str,
    limit: int,
    usage: FeatureUsage | None,
    today: date,
    is_admin: bool = False,
) -> FeatureUsageSummary:
    is_unlimited = is_admin or limit == UNLIMITED
    return FeatureUsageSummary(
        feature=feature,
        limit_value=UNLIMITED if is_admin else limit,
        current_usage=effective_count(usage, today=today),
        remaining=remaining_usage(limit=limit, usage=usage, today=today, is_admin=is_admin),
        is_unlimited=is_unlimited,
    )


def format_usage(summary: FeatureUsageSummary | None) -> str:
    if summary is None:
        return "Unknown"
    if summary.is_unlimited:
        return "Unlimited"
    return f"{summary.current_usage} / {summary.limit_value}"
