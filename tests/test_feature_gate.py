from __future__ import annotations

from datetime import timedelta

import pytest

from smarttube.application.use_cases.feature_gate import FeatureGate
from smarttube.application.use_cases.feature_usage import CheckFeatureUseCase, GetFeatureUsageUseCase, UseFeatureUseCase
from smarttube.domain.entities.feature import FeatureUsage, UserLimits
from smarttube.domain.exceptions import FeatureDisabledError, FeatureLimitExceededError, UnknownFeatureError
from smarttube.domain.services.feature_limits import FEATURE_KEYS, SUPPORT, TITLE_GENERATOR

from tests.fakes import TODAY, FakeUsagePort, make_user


def _gate(limits: UserLimits | None) -> tuple[FeatureGate, FakeUsagePort]:
    usage_port = FakeUsagePort(limits)
    return FeatureGate(usage_port=usage_port, today=lambda: TODAY), usage_port


def _limits(**features: int) -> UserLimits:
    return UserLimits(plan_name="Basic", plan_features={TITLE_GENERATOR: 2, SUPPORT: 0}, custom_limits=features)


def test_record_use_counts_until_limit():
    gate, usage_port = _gate(_limits())
    user = make_user()

    gate.ensure_allowed(user, TITLE_GENERATOR)
    gate.record_use(user, TITLE_GENERATOR)
    gate.ensure_allowed(user, TITLE_GENERATOR)
    output = gate.record_use(user, TITLE_GENERATOR)

    assert output.current_usage == 2
    assert output.remaining == 0
    assert output.display == "2 / 2"
    with pytest.raises(FeatureLimitExceededError):
        gate.ensure_allowed(user, TITLE_GENERATOR)


def test_disabled_feature_raises_disabled():
    gate, _ = _gate(_limits())

    with pytest.raises(FeatureDisabledError):
        gate.ensure_allowed(make_user(), SUPPORT)


def test_admin_bypasses_limits_but_usage_is_recorded():
    gate, usage_port = _gate(_limits())
    admin = make_user(role="admin")
    usage_port.save_usage(usage=FeatureUsage(user_id=admin.id, feature=SUPPORT, count=4, last_reset=TODAY))

    gate.ensure_allowed(admin, SUPPORT)
    output = gate.record_use(admin, SUPPORT)

    assert output.current_usage == 5
    assert output.is_unlimited is True
    assert output.display == "Unlimited"


def test_unknown_feature_is_rejected():
    gate, _ = _gate(_limits())

    with pytest.raises(UnknownFeatureError):
        gate.ensure_allowed(make_user(), "Teleporter")


def test_user_without_plan_falls_back_to_free_with_no_access():
    gate, _ = _gate(None)

    plan_name, summaries = gate.all_summaries(make_user())

    assert plan_name == "Free"
    assert [summary.feature for summary in summaries] == list(FEATURE_KEYS)
    assert all(summary.limit_value == 0 for summary in summaries)


def test_usage_use_cases_share_the_gate():
    gate, _ = _gate(_limits(**{TITLE_GENERATOR: 1}))
    user = make_user()

    check = CheckFeatureUseCase(feature_gate=gate).execute(user=user, feature=TITLE_GENERATOR)
    assert check.allowed is True
    assert check.usage.limit_value == 1

    UseFeatureUseCase(feature_gate=gate).execute(user=user, feature=TITLE_GENERATOR)

    overview = GetFeatureUsageUseCase(feature_gate=gate).execute(user=user)
    titles = next(item for item in overview.features if item.feature == TITLE_GENERATOR)
    assert overview.plan_name == "Basic"
    assert titles.current_usage == 1
    assert CheckFeatureUseCase(feature_gate=gate).execute(user=user, feature=TITLE_GENERATOR).allowed is False


def test_usage_resets_on_the_next_utc_day():
    usage_port = FakeUsagePort(_limits(**{TITLE_GENERATOR: 3}))
    current_day = [TODAY]
    gate = FeatureGate(usage_port=usage_port, today=lambda: current_day[0])
    user = make_user()

    gate.record_use(user, TITLE_GENERATOR)
    gate.record_use(user, TITLE_GENERATOR)
    assert gate.summary(user, TITLE_GENERATOR).remaining == 1

    current_day[0] = TODAY + timedelta(days=1)
    summary = gate.summary(user, TITLE_GENERATOR)

    assert summary.current_usage == 0
    assert summary.remaining == 3
    assert gate.record_use(user, TITLE_GENERATOR).current_usage == 1
