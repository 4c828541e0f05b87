from __future__ import annotations

from fastapi import APIRouter, Depends

from smarttube.api.deps import get_get_public_settings_use_case, get_list_plans_use_case
from smarttube.api.schemas.admin import PlanResponse
from smarttube.api.schemas.settings import PublicSettingsResponse
from smarttube.application.use_cases.admin_plans import ListPlansUseCase
from smarttube.application.use_cases.admin_settings import GetPublicSettingsUseCase


router = APIRouter()


@router.get("/v1/settings/public", response_model=PublicSettingsResponse)
def get_public_settings(
    use_case: GetPublicSettingsUseCase = Depends(get_get_public_settings_use_case),
):
    return PublicSettingsResponse.model_validate(use_case.execute())


@router.get("/v1/plans", response_model=list[PlanResponse])
def list_active_plans(
    use_case: ListPlansUseCase = Depends(get_list_plans_use_case),
):
    return [PlanResponse.model_validate(plan) for plan in use_case.execute() if plan.is_active]
