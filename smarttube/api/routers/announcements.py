from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from smarttube.api.deps import (
    get_create_announcement_use_case,
    get_delete_announcement_use_case,
    get_list_active_announcements_use_case,
    get_list_announcements_use_case,
    get_toggle_announcement_use_case,
    get_update_announcement_use_case,
    require_admin,
)
from smarttube.api.errors import to_http_error
from smarttube.api.schemas.announcements import (
    AnnouncementRequest,
    AnnouncementResponse,
    ToggleActiveRequest,
)
from smarttube.api.schemas.auth import OkResponse
from smarttube.application.dto.announcements import AnnouncementInput
from smarttube.application.use_cases.announcements import (
    CreateAnnouncementUseCase,
    DeleteAnnouncementUseCase,
    ListActiveAnnouncementsUseCase,
    ListAnnouncementsUseCase,
    ToggleAnnouncementUseCase,
    UpdateAnnouncementUseCase,
)
from smarttube.domain.entities.user import User
from smarttube.domain.exceptions import DomainError


router = APIRouter()


def _to_input(req: AnnouncementRequest) -> AnnouncementInput:
    return AnnouncementInput(
        title=req.title,
        message=req.message,
        priority=req.priority,
        announcement_type=req.announcement_type,
        expiry_date=req.expiry_date,
        is_active=req.is_active,
    )


@router.get("/v1/announcements", response_model=list[AnnouncementResponse])
def list_active_announcements(
    announcement_type: str = Query(default="bar", alias="type"),
    use_case: ListActiveAnnouncementsUseCase = Depends(get_list_active_announcements_use_case),
):
    try:
        items = use_case.execute(announcement_type=announcement_type)
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return [AnnouncementResponse.model_validate(item) for item in items]


@router.get("/v1/admin/announcements", response_model=list[AnnouncementResponse])
def list_announcements(
    _admin: User = Depends(require_admin),
    use_case: ListAnnouncementsUseCase = Depends(get_list_announcements_use_case),
):
    return [AnnouncementResponse.model_validate(item) for item in use_case.execute()]


@router.post("/v1/admin/announcements", response_model=AnnouncementResponse, status_code=201)
def create_announcement(
    req: AnnouncementRequest,
    _admin: User = Depends(require_admin),
    use_case: CreateAnnouncementUseCase = Depends(get_create_announcement_use_case),
):
    try:
        item = use_case.execute(_to_input(req))
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return AnnouncementResponse.model_validate(item)


@router.put("/v1/admin/announcements/{announcement_id}", response_model=AnnouncementResponse)
def update_announcement(
    announcement_id: str,
    req: AnnouncementRequest,
    _admin: User = Depends(require_admin),
    use_case: UpdateAnnouncementUseCase = Depends(get_update_announcement_use_case),
):
    try:
        item = use_case.execute(announcement_id=announcement_id, command=_to_input(req))
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return AnnouncementResponse.model_validate(item)


@router.patch("/v1/admin/announcements/{announcement_id}/active", response_model=AnnouncementResponse)
def toggle_announcement(
    announcement_id: str,
    req: ToggleActiveRequest,
    _admin: User = Depends(require_admin),
    use_case: ToggleAnnouncementUseCase = Depends(get_toggle_announcement_use_case),
):
    try:
        item = use_case.execute(announcement_id=announcement_id, is_active=req.is_active)
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return AnnouncementResponse.model_validate(item)


@router.delete("/v1/admin/announcements/{announcement_id}", response_model=OkResponse)
def delete_announcement(
    announcement_id: str,
    _admin: User = Depends(require_admin),
    use_case: DeleteAnnouncementUseCase = Depends(get_delete_announcement_use_case),
):
    try:
        use_case.execute(announcement_id=announcement_id)
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return OkResponse(ok=True)
