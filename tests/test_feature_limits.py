from __future__ import annotations

from datetime import date

from smarttube.domain.entities.feature import FeatureUsage
from smarttube.domain.services.feature_limits import (
    TITLE_GENERATOR,
    check_limit,
    effective_count,
    format_usage,
    next_usage,
    remaining_usage,
    resolve_limit,
    summarize_usage,
)


TODAY = date(2026, 3, 10)
YESTERDAY = date(2026, 3, 9)


def _usage(count: int, last_reset: date = TODAY) -> FeatureUsage:
    return FeatureUsage(user_id="user-1", feature=TITLE_GENERATOR, count=count, last_reset=last_reset)


def test_custom_limit_overrides_plan_limit():
    limit = resolve_limit(
        plan_features={TITLE_GENERATOR: 12},
        custom_limits={TITLE_GENERATOR: 3},
        feature=TITLE_GENERATOR,
    )

    assert limit == 3


def test_missing_feature_resolves_to_disabled():
    assert resolve_limit(plan_features={}, custom_limits=None, feature=TITLE_GENERATOR) == 0


def test_usage_from_previous_day_counts_as_zero():
    assert effective_count(_usage(9, YESTERDAY), today=TODAY) == 0
    assert check_limit(limit=1, usage=_usage(9, YESTERDAY), today=TODAY) is True


def test_check_limit_blocks_at_cap():
    assert check_limit(limit=3, usage=_usage(2), today=TODAY) is True
    assert check_limit(limit=3, usage=_usage(3), today=TODAY) is False


def test_check_limit_unlimited_disabled_and_admin():
    assert check_limit(limit=-1, usage=_usage(500), today=TODAY) is True
    assert check_limit(limit=0, usage=None, today=TODAY) is False
    assert check_limit(limit=0, usage=None, today=TODAY, is_admin=True) is True


def test_remaining_usage_never_negative():
    assert remaining_usage(limit=3, usage=_usage(5), today=TODAY) == 0
    assert remaining_usage(limit=3, usage=_usage(1), today=TODAY) == 2
    assert remaining_usage(limit=-1, usage=None, today=TODAY) == -1


def test_next_usage_resets_on_new_day():
    reset = next_usage(_usage(7, YESTERDAY), user_id="user-1", feature=TITLE_GENERATOR, today=TODAY)
    bumped = next_usage(_usage(7), user_id="user-1", feature=TITLE_GENERATOR, today=TODAY)

    assert reset.count == 1
    assert reset.last_reset == TODAY
    assert bumped.count == 8


def test_summarize_usage_for_admin_is_unlimited():
    summary = summarize_usage(feature=TITLE_GENERATOR, limit=5, usage=_usage(2), today=TODAY, is_admin=True)

    assert summary.limit_value == -1
    assert summary.current_usage == 2
    assert summary.is_unlimited is True
    assert format_usage(summary) == "Unlimited"


def test_format_usage_shows_used_over_limit():
    summary = summarize_usage(feature=TITLE_GENERATOR, limit=5, usage=_usage(2), today=TODAY)

    assert format_usage(summary) == "2 / 5"
    assert format_usage(None) == "Unknown"
