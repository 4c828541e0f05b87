from __future__ import annotations

from fastapi import APIRouter, Depends, Header, HTTPException, Request

from smarttube.api.deps import (
    get_create_checkout_session_use_case,
    get_current_user,
    get_process_stripe_webhook_use_case,
)
from smarttube.api.errors import to_http_error
from smarttube.api.schemas.billing import (
    PlanCheckoutRequest,
    PlanCheckoutResponse,
    StripeWebhookResponse,
)
from smarttube.application.dto.billing import CreateCheckoutSessionInput, StripeWebhookInput
from smarttube.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from smarttube.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from smarttube.domain.entities.user import User
from smarttube.domain.exceptions import DomainError
from smarttube.shared.config import get_settings


router = APIRouter()


@router.post("/v1/billing/checkout-session", response_model=PlanCheckoutResponse)
def create_checkout_session(
    req: PlanCheckoutRequest,
    current_user: User = Depends(get_current_user),
    use_case: CreateCheckoutSessionUseCase = Depends(get_create_checkout_session_use_case),
):
    settings = get_settings()
    if not settings.stripe_success_url or not settings.stripe_cancel_url:
        raise HTTPException(
            status_code=503,
            detail="STRIPE_SUCCESS_URL and STRIPE_CANCEL_URL are required.",
        )
    try:
        output = use_case.execute(
            CreateCheckoutSessionInput(
                user_id=current_user.id,
                plan_id=req.plan_id,
                success_url=settings.stripe_success_url,
                cancel_url=settings.stripe_cancel_url,
            )
        )
    except DomainError as exc:
        raise to_http_error(exc) from exc

    return PlanCheckoutResponse.model_validate(output)


@router.post("/v1/billing/webhook", response_model=StripeWebhookResponse)
async def stripe_webhook(
    request: Request,
    stripe_signature: str = Header(..., alias="Stripe-Signature"),
    use_case: ProcessStripeWebhookUseCase = Depends(get_process_stripe_webhook_use_case),
):
    payload = await request.body()
    try:
        output = use_case.execute(
            StripeWebhookInput(
                signature=stripe_signature,
                payload=payload,
            )
        )
    except DomainError as exc:
        raise to_http_error(exc) from exc

    return StripeWebhookResponse(event_type=output.event_type, handled=output.handled)
