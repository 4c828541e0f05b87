from __future__ import annotations

from decimal import Decimal

import pytest

from smarttube.application.dto.admin import AssignUserPlanInput, PlanInput, SettingsInput, UserListInput
from smarttube.application.use_cases.admin_limits import AssignUserPlanUseCase, SetPlanLimitsUseCase
from smarttube.application.use_cases.admin_plans import CreatePlanUseCase, DeletePlanUseCase, SyncPlanCatalogUseCase
from smarttube.application.use_cases.admin_settings import GetSettingsUseCase, SaveSettingsUseCase, mask_secret
from smarttube.application.use_cases.admin_users import ListUsersUseCase, ToggleBanUseCase
from smarttube.domain.entities.settings import AppSettings
from smarttube.domain.exceptions import PlanConflictError, PlanNotFoundError, UserNotFoundError

from tests.fakes import FakeAuthPort, FakePlanPort, make_plan, make_user


class FakeSettingsPort:
    def __init__(self, settings: AppSettings | None = None):
        self.settings = settings

    def get_settings(self) -> AppSettings | None:
        return self.settings

    def save_settings(self, *, settings: AppSettings) -> AppSettings:
        self.settings = settings
        return settings


def _settings_input(api_key: str | None) -> SettingsInput:
    return SettingsInput(
        maintenance_mode=True,
        banner_message=" Hello ",
        banner_enabled=True,
        support_email="help@example.com",
        max_upload_size=10,
        openrouter_api_key=api_key,
    )


def _plan_input(name: str = "Creator") -> PlanInput:
    return PlanInput(
        name=name,
        price=Decimal("4.99"),
        description=None,
        features={"Title Generator": 20},
        is_active=True,
        stripe_price_id=None,
    )


def test_mask_secret_keeps_last_four():
    assert mask_secret("sk-or-abcdef1234") == "****1234"
    assert mask_secret("abc") == "****"
    assert mask_secret(None) is None


def test_save_settings_keeps_stored_key_when_masked_value_is_sent():
    port = FakeSettingsPort()
    SaveSettingsUseCase(settings_port=port).execute(_settings_input("sk-or-secret-9876"))

    saved = SaveSettingsUseCase(settings_port=port).execute(_settings_input("****9876"))

    assert port.settings.openrouter_api_key == "sk-or-secret-9876"
    assert port.settings.banner_message == "Hello"
    assert saved.openrouter_api_key == "****9876"
    assert GetSettingsUseCase(settings_port=port).execute().openrouter_api_key == "****9876"


def test_save_settings_validates_fields():
    with pytest.raises(ValueError):
        SaveSettingsUseCase(settings_port=FakeSettingsPort()).execute(
            SettingsInput(
                maintenance_mode=False,
                banner_message="",
                banner_enabled=False,
                support_email="not-an-email",
                max_upload_size=5,
                openrouter_api_key=None,
            )
        )


def test_create_plan_rejects_duplicate_name():
    port = FakePlanPort([make_plan(plan_id="p-1", name="Creator")])

    with pytest.raises(PlanConflictError):
        CreatePlanUseCase(plan_port=port).execute(_plan_input("Creator"))


def test_delete_plan_refuses_free_and_subscribed_plans():
    port = FakePlanPort(
        [
            make_plan(plan_id="p-free", name="Free"),
            make_plan(plan_id="p-basic", name="Basic", user_count=3),
            make_plan(plan_id="p-old", name="Old"),
        ]
    )
    use_case = DeletePlanUseCase(plan_port=port)

    with pytest.raises(PlanConflictError):
        use_case.execute(plan_id="p-free")
    with pytest.raises(PlanConflictError):
        use_case.execute(plan_id="p-basic")
    with pytest.raises(PlanNotFoundError):
        use_case.execute(plan_id="missing")

    use_case.execute(plan_id="p-old")
    assert "p-old" not in port.plans


def test_sync_plan_catalog_preserves_price_ids_and_retires_others():
    port = FakePlanPort(
        [
            make_plan(plan_id="p-free", name="Free", features={}, stripe_price_id=None),
            make_plan(plan_id="p-pro", name="Pro", price="19", stripe_price_id="price_pro"),
            make_plan(plan_id="p-start", name="Starter", price="5"),
        ]
    )

    plans = SyncPlanCatalogUseCase(plan_port=port).execute()

    names = {plan.name for plan in plans}
    assert {"Free", "Basic", "Pro", "Starter (Legacy)"} == names
    assert port.plans["p-pro"].stripe_price_id == "price_pro"
    assert port.plans["p-pro"].price == Decimal("29.99")
    assert port.plans["p-start"].is_active is False


def test_set_plan_limits_validates_values():
    port = FakePlanPort([make_plan()])

    with pytest.raises(ValueError):
        SetPlanLimitsUseCase(plan_port=port).execute(plan_id="plan-free", features={"Title Generator": -2})

    plan = SetPlanLimitsUseCase(plan_port=port).execute(plan_id="plan-free", features={"Title Generator": -1})
    assert plan.features == {"Title Generator": -1}


def test_assign_user_plan_requires_existing_user():
    auth_port = FakeAuthPort()
    plan_port = FakePlanPort([make_plan()])
    use_case = AssignUserPlanUseCase(plan_port=plan_port, auth_port=auth_port)

    with pytest.raises(UserNotFoundError):
        use_case.execute(AssignUserPlanInput(user_id="user-1", plan_id="plan-free", expiry=None))

    auth_port.add_user(make_user())
    user_plan = use_case.execute(
        AssignUserPlanInput(user_id="user-1", plan_id="plan-free", expiry=None, custom_limits={"Support": 1})
    )
    assert user_plan.custom_limits == {"Support": 1}


def test_list_users_pages_and_bans():
    directory = FakeAuthPort()
    for index in range(3):
        directory.add_user(make_user(user_id=f"user-{index}", email=f"user{index}@example.com"))

    page = ListUsersUseCase(user_directory=directory).execute(UserListInput(search=None, page=2, page_size=2))
    banned = ToggleBanUseCase(user_directory=directory).execute(user_id="user-0", is_banned=True)

    assert page.total == 3
    assert [user.id for user in page.items] == ["user-2"]
    assert banned.is_banned is True
    with pytest.raises(ValueError):
        ListUsersUseCase(user_directory=directory).execute(UserListInput(search=None, page=0, page_size=2))
