from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from smarttube.api.deps import (
    get_change_password_use_case,
    get_current_user,
    get_delete_account_use_case,
    get_get_me_use_case,
    get_update_profile_use_case,
)
from smarttube.api.errors import to_http_error
from smarttube.api.routers.auth import REFRESH_COOKIE_NAME, REFRESH_COOKIE_PATH
from smarttube.api.schemas.auth import AuthUserResponse, OkResponse
from smarttube.api.schemas.me import ChangePasswordRequest, MeResponse, UpdateProfileRequest
from smarttube.api.schemas.usage import FeatureUsageResponse
from smarttube.application.dto.auth import ChangePasswordInput, UpdateProfileInput
from smarttube.application.use_cases.get_me import GetMeUseCase
from smarttube.application.use_cases.manage_account import (
    ChangePasswordUseCase,
    DeleteAccountUseCase,
    UpdateProfileUseCase,
)
from smarttube.domain.entities.user import User
from smarttube.domain.exceptions import DomainError


router = APIRouter()


@router.get("/v1/me", response_model=MeResponse)
def get_me(
    current_user: User = Depends(get_current_user),
    use_case: GetMeUseCase = Depends(get_get_me_use_case),
):
    output = use_case.execute(user=current_user)
    return MeResponse(
        user=AuthUserResponse.model_validate(output.user),
        plan_name=output.plan_name,
        is_admin=output.user.is_admin,
        usage=[FeatureUsageResponse.model_validate(item) for item in output.usage],
    )


@router.patch("/v1/me/profile", response_model=AuthUserResponse)
def update_profile(
    req: UpdateProfileRequest,
    current_user: User = Depends(get_current_user),
    use_case: UpdateProfileUseCase = Depends(get_update_profile_use_case),
):
    try:
        output = use_case.execute(
            UpdateProfileInput(
                user_id=current_user.id,
                full_name=req.full_name,
                avatar_url=req.avatar_url,
            )
        )
    except (DomainError, ValueError) as exc:
        raise to_http_error(exc) from exc
    return AuthUserResponse.model_validate(output)


@router.post("/v1/me/password", response_model=OkResponse)
def change_password(
    req: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    use_case: ChangePasswordUseCase = Depends(get_change_password_use_case),
):
    try:
        use_case.execute(
            ChangePasswordInput(
                user_id=current_user.id,
                current_password=req.current_password,
                new_password=req.new_password,
            )
        )
    except (DomainError, ValueError) as exc:
        raise to_http_error(exc) from exc
    return OkResponse(ok=True, message="Password updated.")


@router.delete("/v1/me", response_model=OkResponse)
def delete_account(
    response: Response,
    current_user: User = Depends(get_current_user),
    use_case: DeleteAccountUseCase = Depends(get_delete_account_use_case),
):
    try:
        use_case.execute(user_id=current_user.id)
    except DomainError as exc:
        raise to_http_error(exc) from exc
    response.delete_cookie(key=REFRESH_COOKIE_NAME, path=REFRESH_COOKIE_PATH)
    return OkResponse(ok=True)
