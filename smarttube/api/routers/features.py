from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from smarttube.api.deps import (
    get_check_feature_use_case,
    get_current_user,
    get_get_feature_usage_use_case,
    get_use_feature_use_case,
)
from smarttube.api.errors import to_http_error
from smarttube.api.schemas.usage import (
    FeatureCheckResponse,
    FeatureUsageResponse,
    UseFeatureRequest,
    UserUsageResponse,
)
from smarttube.application.use_cases.feature_usage import (
    CheckFeatureUseCase,
    GetFeatureUsageUseCase,
    UseFeatureUseCase,
)
from smarttube.domain.entities.user import User
from smarttube.domain.exceptions import DomainError


router = APIRouter()


@router.get("/v1/features/usage", response_model=UserUsageResponse)
def get_feature_usage(
    current_user: User = Depends(get_current_user),
    use_case: GetFeatureUsageUseCase = Depends(get_get_feature_usage_use_case),
):
    return UserUsageResponse.model_validate(use_case.execute(user=current_user))


@router.get("/v1/features/check", response_model=FeatureCheckResponse)
def check_feature(
    feature: str = Query(..., min_length=1),
    current_user: User = Depends(get_current_user),
    use_case: CheckFeatureUseCase = Depends(get_check_feature_use_case),
):
    try:
        output = use_case.execute(user=current_user, feature=feature)
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return FeatureCheckResponse.model_validate(output)


@router.post("/v1/features/use", response_model=FeatureUsageResponse)
def use_feature(
    req: UseFeatureRequest,
    current_user: User = Depends(get_current_user),
    use_case: UseFeatureUseCase = Depends(get_use_feature_use_case),
):
    try:
        output = use_case.execute(user=current_user, feature=req.feature)
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return FeatureUsageResponse.model_validate(output)
