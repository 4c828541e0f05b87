from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query

from smarttube.api.deps import (
    get_dashboard_stats_use_case,
    get_get_settings_use_case,
    get_list_payments_use_case,
    get_save_settings_use_case,
    require_admin,
)
from smarttube.api.errors import to_http_error
from smarttube.api.schemas.admin import DashboardStatsResponse, PaymentPageResponse
from smarttube.api.schemas.settings import SettingsRequest, SettingsResponse
from smarttube.application.dto.admin import PaymentListInput, SettingsInput
from smarttube.application.use_cases.admin_dashboard import GetDashboardStatsUseCase
from smarttube.application.use_cases.admin_payments import ListPaymentsUseCase
from smarttube.application.use_cases.admin_settings import GetSettingsUseCase, SaveSettingsUseCase
from smarttube.domain.entities.user import User


router = APIRouter()


@router.get("/v1/admin/payments", response_model=PaymentPageResponse)
def list_payments(
    search: str | None = None,
    status: list[str] = Query(default=[]),
    start: datetime | None = None,
    end: datetime | None = None,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
    _admin: User = Depends(require_admin),
    use_case: ListPaymentsUseCase = Depends(get_list_payments_use_case),
):
    try:
        output = use_case.execute(
            PaymentListInput(
                search=search,
                statuses=status,
                start=start,
                end=end,
                page=page,
                page_size=page_size,
            )
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return PaymentPageResponse.model_validate(output)


@router.get("/v1/admin/settings", response_model=SettingsResponse)
def get_settings_admin(
    _admin: User = Depends(require_admin),
    use_case: GetSettingsUseCase = Depends(get_get_settings_use_case),
):
    return SettingsResponse.model_validate(use_case.execute())


@router.put("/v1/admin/settings", response_model=SettingsResponse)
def save_settings(
    req: SettingsRequest,
    _admin: User = Depends(require_admin),
    use_case: SaveSettingsUseCase = Depends(get_save_settings_use_case),
):
    try:
        settings = use_case.execute(
            SettingsInput(
                maintenance_mode=req.maintenance_mode,
                banner_message=req.banner_message,
                banner_enabled=req.banner_enabled,
                support_email=req.support_email,
                max_upload_size=req.max_upload_size,
                openrouter_api_key=req.openrouter_api_key,
            )
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return SettingsResponse.model_validate(settings)


@router.get("/v1/admin/stats", response_model=DashboardStatsResponse)
def get_dashboard_stats(
    _admin: User = Depends(require_admin),
    use_case: GetDashboardStatsUseCase = Depends(get_dashboard_stats_use_case),
):
    return DashboardStatsResponse.model_validate(use_case.execute())
