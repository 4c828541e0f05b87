from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CreateCheckoutSessionInput:
    user_id: str
    plan_id: str
    success_url: str
    cancel_url: str


@dataclass(frozen=True)
class CreateCheckoutSessionOutput:
    plan_id: str
    plan_name: str
    session_id: str
    url: str


@dataclass(frozen=True)
class StripeWebhookInput:
    signature: str
    payload: bytes


@dataclass(frozen=True)
class StripeWebhookOutput:
    event_type: str
    handled: bool


@dataclass(frozen=True)
class StripeCheckoutSessionResult:
    id: str
    url: str


@dataclass(frozen=True)
class StripeCheckoutCompletedEventData:
    session_id: str
    user_id: str | None
    customer_id: str | None
    plan_id: str | None
    amount_total: int | None
    currency: str | None


@dataclass(frozen=True)
class StripeInvoiceEventData:
    invoice_id: str
    customer_id: str | None
    amount_due: int | None
    currency: str | None


@dataclass(frozen=True)
class StripeSubscriptionEventData:
    subscription_id: str
    customer_id: str | None
    status: str


@dataclass(frozen=True)
class StripeWebhookEvent:
    event_type: str
    checkout_completed: StripeCheckoutCompletedEventData | None = None
    invoice: StripeInvoiceEventData | None = None
    subscription: StripeSubscriptionEventData | None = None
