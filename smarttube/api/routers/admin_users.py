from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from smarttube.api.deps import (
    get_assign_user_plan_use_case,
    get_delete_user_use_case,
    get_list_users_use_case,
    get_toggle_admin_use_case,
    get_toggle_ban_use_case,
    get_update_user_use_case,
    require_admin,
)
from smarttube.api.errors import to_http_error
from smarttube.api.schemas.admin import (
    AdminUserResponse,
    AssignUserPlanRequest,
    ToggleAdminRequest,
    ToggleBanRequest,
    UpdateUserRequest,
    UserPageResponse,
    UserPlanResponse,
)
from smarttube.api.schemas.auth import OkResponse
from smarttube.application.dto.admin import AssignUserPlanInput, UpdateUserInput, UserListInput
from smarttube.application.use_cases.admin_limits import AssignUserPlanUseCase
from smarttube.application.use_cases.admin_users import (
    DeleteUserUseCase,
    ListUsersUseCase,
    ToggleAdminUseCase,
    ToggleBanUseCase,
    UpdateUserUseCase,
)
from smarttube.domain.entities.user import User
from smarttube.domain.exceptions import DomainError


router = APIRouter()


@router.get("/v1/admin/users", response_model=UserPageResponse)
def list_users(
    search: str | None = None,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
    _admin: User = Depends(require_admin),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
):
    try:
        output = use_case.execute(UserListInput(search=search, page=page, page_size=page_size))
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return UserPageResponse.model_validate(output)


@router.patch("/v1/admin/users/{user_id}/admin", response_model=AdminUserResponse)
def toggle_admin(
    user_id: str,
    req: ToggleAdminRequest,
    admin: User = Depends(require_admin),
    use_case: ToggleAdminUseCase = Depends(get_toggle_admin_use_case),
):
    if user_id == admin.id and not req.is_admin:
        raise HTTPException(status_code=400, detail="You cannot remove your own admin role.")
    try:
        user = use_case.execute(user_id=user_id, is_admin=req.is_admin)
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return AdminUserResponse.model_validate(user)


@router.patch("/v1/admin/users/{user_id}/ban", response_model=AdminUserResponse)
def toggle_ban(
    user_id: str,
    req: ToggleBanRequest,
    admin: User = Depends(require_admin),
    use_case: ToggleBanUseCase = Depends(get_toggle_ban_use_case),
):
    if user_id == admin.id and req.is_banned:
        raise HTTPException(status_code=400, detail="You cannot ban yourself.")
    try:
        user = use_case.execute(user_id=user_id, is_banned=req.is_banned)
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return AdminUserResponse.model_validate(user)


@router.put("/v1/admin/users/{user_id}", response_model=AdminUserResponse)
def update_user(
    user_id: str,
    req: UpdateUserRequest,
    _admin: User = Depends(require_admin),
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
):
    try:
        user = use_case.execute(
            UpdateUserInput(user_id=user_id, full_name=req.full_name, email=req.email, role=req.role)
        )
    except (DomainError, ValueError) as exc:
        raise to_http_error(exc) from exc
    return AdminUserResponse.model_validate(user)


@router.delete("/v1/admin/users/{user_id}", response_model=OkResponse)
def delete_user(
    user_id: str,
    admin: User = Depends(require_admin),
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
):
    if user_id == admin.id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account from the admin panel.")
    try:
        use_case.execute(user_id=user_id)
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return OkResponse(ok=True)


@router.put("/v1/admin/users/{user_id}/plan", response_model=UserPlanResponse)
def assign_user_plan(
    user_id: str,
    req: AssignUserPlanRequest,
    _admin: User = Depends(require_admin),
    use_case: AssignUserPlanUseCase = Depends(get_assign_user_plan_use_case),
):
    try:
        user_plan = use_case.execute(
            AssignUserPlanInput(
                user_id=user_id,
                plan_id=req.plan_id,
                expiry=req.expiry,
                custom_limits=req.custom_limits,
            )
        )
    except (DomainError, ValueError) as exc:
        raise to_http_error(exc) from exc
    return UserPlanResponse.model_validate(user_plan)
