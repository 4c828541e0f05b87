from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PlanCheckoutRequest(BaseModel):
    plan_id: str = Field(..., min_length=1)


class PlanCheckoutResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    plan_id: str
    plan_name: str
    session_id: str
    url: str


class StripeWebhookResponse(BaseModel):
    event_type: str
    handled: bool
