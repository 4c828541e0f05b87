from __future__ import annotations

from fastapi import APIRouter, Depends

from smarttube.api.deps import get_optional_user, get_submit_support_form_use_case
from smarttube.api.errors import to_http_error
from smarttube.api.schemas.support import SupportFormRequest, SupportFormResponse
from smarttube.application.dto.support import SupportSubmissionInput
from smarttube.application.use_cases.submit_support_form import SubmitSupportFormUseCase
from smarttube.domain.entities.user import User
from smarttube.domain.exceptions import DomainError


router = APIRouter()


@router.post("/v1/support", response_model=SupportFormResponse)
def submit_support_form(
    req: SupportFormRequest,
    current_user: User | None = Depends(get_optional_user),
    use_case: SubmitSupportFormUseCase = Depends(get_submit_support_form_use_case),
):
    try:
        output = use_case.execute(
            SupportSubmissionInput(
                form_type=req.form_type,
                name=req.name,
                email=req.email,
                fields=req.fields,
            ),
            user=current_user,
        )
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return SupportFormResponse(success=output.success, message=output.message)
