from __future__ import annotations

from fastapi import APIRouter, Depends

from smarttube.api.deps import (
    get_create_feature_limit_use_case,
    get_create_plan_use_case,
    get_delete_plan_use_case,
    get_list_feature_limits_use_case,
    get_list_plans_use_case,
    get_set_plan_limits_use_case,
    get_sync_plan_catalog_use_case,
    get_toggle_plan_use_case,
    get_update_plan_use_case,
    require_admin,
)
from smarttube.api.errors import to_http_error
from smarttube.api.schemas.admin import (
    FeatureLimitRequest,
    FeatureLimitResponse,
    PlanLimitsRequest,
    PlanRequest,
    PlanResponse,
)
from smarttube.api.schemas.announcements import ToggleActiveRequest
from smarttube.api.schemas.auth import OkResponse
from smarttube.application.dto.admin import FeatureLimitInput, PlanInput
from smarttube.application.use_cases.admin_limits import (
    CreateFeatureLimitUseCase,
    ListFeatureLimitsUseCase,
    SetPlanLimitsUseCase,
)
from smarttube.application.use_cases.admin_plans import (
    CreatePlanUseCase,
    DeletePlanUseCase,
    ListPlansUseCase,
    SyncPlanCatalogUseCase,
    TogglePlanUseCase,
    UpdatePlanUseCase,
)
from smarttube.domain.entities.user import User
from smarttube.domain.exceptions import DomainError


router = APIRouter()


def _to_plan_input(req: PlanRequest) -> PlanInput:
    return PlanInput(
        name=req.name,
        price=req.price,
        description=req.description,
        features=req.features,
        is_active=req.is_active,
        stripe_price_id=req.stripe_price_id,
    )


@router.get("/v1/admin/plans", response_model=list[PlanResponse])
def list_plans(
    _admin: User = Depends(require_admin),
    use_case: ListPlansUseCase = Depends(get_list_plans_use_case),
):
    return [PlanResponse.model_validate(plan) for plan in use_case.execute()]


@router.post("/v1/admin/plans", response_model=PlanResponse, status_code=201)
def create_plan(
    req: PlanRequest,
    _admin: User = Depends(require_admin),
    use_case: CreatePlanUseCase = Depends(get_create_plan_use_case),
):
    try:
        plan = use_case.execute(_to_plan_input(req))
    except (DomainError, ValueError) as exc:
        raise to_http_error(exc) from exc
    return PlanResponse.model_validate(plan)


@router.post("/v1/admin/plans/sync-defaults", response_model=list[PlanResponse])
def sync_default_plans(
    _admin: User = Depends(require_admin),
    use_case: SyncPlanCatalogUseCase = Depends(get_sync_plan_catalog_use_case),
):
    return [PlanResponse.model_validate(plan) for plan in use_case.execute()]


@router.put("/v1/admin/plans/{plan_id}", response_model=PlanResponse)
def update_plan(
    plan_id: str,
    req: PlanRequest,
    _admin: User = Depends(require_admin),
    use_case: UpdatePlanUseCase = Depends(get_update_plan_use_case),
):
    try:
        plan = use_case.execute(plan_id=plan_id, command=_to_plan_input(req))
    except (DomainError, ValueError) as exc:
        raise to_http_error(exc) from exc
    return PlanResponse.model_validate(plan)


@router.patch("/v1/admin/plans/{plan_id}/active", response_model=PlanResponse)
def toggle_plan(
    plan_id: str,
    req: ToggleActiveRequest,
    _admin: User = Depends(require_admin),
    use_case: TogglePlanUseCase = Depends(get_toggle_plan_use_case),
):
    try:
        plan = use_case.execute(plan_id=plan_id, is_active=req.is_active)
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return PlanResponse.model_validate(plan)


@router.put("/v1/admin/plans/{plan_id}/limits", response_model=PlanResponse)
def set_plan_limits(
    plan_id: str,
    req: PlanLimitsRequest,
    _admin: User = Depends(require_admin),
    use_case: SetPlanLimitsUseCase = Depends(get_set_plan_limits_use_case),
):
    try:
        plan = use_case.execute(plan_id=plan_id, features=req.features)
    except (DomainError, ValueError) as exc:
        raise to_http_error(exc) from exc
    return PlanResponse.model_validate(plan)


@router.delete("/v1/admin/plans/{plan_id}", response_model=OkResponse)
def delete_plan(
    plan_id: str,
    _admin: User = Depends(require_admin),
    use_case: DeletePlanUseCase = Depends(get_delete_plan_use_case),
):
    try:
        use_case.execute(plan_id=plan_id)
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return OkResponse(ok=True)


@router.get("/v1/admin/feature-limits", response_model=list[FeatureLimitResponse])
def list_feature_limits(
    _admin: User = Depends(require_admin),
    use_case: ListFeatureLimitsUseCase = Depends(get_list_feature_limits_use_case),
):
    return [FeatureLimitResponse.model_validate(item) for item in use_case.execute()]


@router.post("/v1/admin/feature-limits", response_model=FeatureLimitResponse, status_code=201)
def create_feature_limit(
    req: FeatureLimitRequest,
    _admin: User = Depends(require_admin),
    use_case: CreateFeatureLimitUseCase = Depends(get_create_feature_limit_use_case),
):
    try:
        item = use_case.execute(
            FeatureLimitInput(
                key=req.key,
                name=req.name,
                description=req.description,
                default_value=req.default_value,
            )
        )
    except (DomainError, ValueError) as exc:
        raise to_http_error(exc) from exc
    return FeatureLimitResponse.model_validate(item)
