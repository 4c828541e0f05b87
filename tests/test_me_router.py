from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from smarttube.api.deps import get_current_user, get_get_me_use_case
from smarttube.application.use_cases.feature_gate import FeatureGate
from smarttube.application.use_cases.feature_usage import GetFeatureUsageUseCase
from smarttube.application.use_cases.get_me import GetMeUseCase
from smarttube.domain.entities.feature import UserLimits
from smarttube.domain.services.feature_limits import FEATURE_KEYS, SUPPORT
from smarttube.main import app

from tests.fakes import TODAY, FakeUsagePort, make_user


@pytest.fixture(autouse=True)
def _clear_overrides():
    yield
    app.dependency_overrides.clear()


def _get_me_use_case() -> GetMeUseCase:
    usage_port = FakeUsagePort(UserLimits(plan_name="Basic", plan_features={SUPPORT: 1}, custom_limits={}))
    gate = FeatureGate(usage_port=usage_port, today=lambda: TODAY)
    return GetMeUseCase(get_feature_usage_use_case=GetFeatureUsageUseCase(feature_gate=gate))


def test_get_me_returns_user_plan_and_usage():
    use_case = GetMeUseCase(
        get_feature_usage_use_case=GetFeatureUsageUseCase(
            feature_gate=FeatureGate(usage_port=FakeUsagePort(None), today=lambda: TODAY)
        )
    )

    output = use_case.execute(user=make_user())

    assert output.user.id == "user-1"
    assert output.plan_name == "Free"
    assert len(output.usage) == len(FEATURE_KEYS)


def test_me_route_serializes_admin_flag():
    app.dependency_overrides[get_current_user] = lambda: make_user(role="admin")
    app.dependency_overrides[get_get_me_use_case] = _get_me_use_case

    response = TestClient(app).get("/v1/me", headers={"Authorization": "Bearer token"})

    assert response.status_code == 200
    body = response.json()
    assert body["plan_name"] == "Basic"
    assert body["is_admin"] is True
    assert body["user"]["email"] == "alice@example.com"
    support = next(item for item in body["usage"] if item["feature"] == SUPPORT)
    assert support["display"] == "Unlimited"
