from __future__ import annotations

import logging

import stripe

from smarttube.application.dto.billing import (
    StripeCheckoutCompletedEventData,
    StripeCheckoutSessionResult,
    StripeInvoiceEventData,
    StripeSubscriptionEventData,
    StripeWebhookEvent,
)
from smarttube.application.ports.stripe_port import StripePort
from smarttube.domain.entities.plan import Plan
from smarttube.domain.entities.user import User
from smarttube.domain.exceptions import BillingError


logger = logging.getLogger(__name__)


class StripeClient(StripePort):
    def __init__(self, *, secret_key: str, webhook_secret: str):
        stripe.api_key = secret_key
        self._webhook_secret = webhook_secret

    def create_customer(self, *, user: User) -> str:
        try:
            customer = stripe.Customer.create(
                email=user.email,
                name=user.full_name,
                metadata={"user_id": user.id},
            )
        except Exception as exc:  # pragma: no cover - external API
            logger.warning("stripe_client: customer_failed user_id=%s error=%s", user.id, exc)
            raise BillingError("Failed to create Stripe customer.") from exc

        customer_id = getattr(customer, "id", None)
        if not customer_id:
            raise BillingError("Stripe customer id is missing.")
        return str(customer_id)

    def create_plan_checkout(
        self,
        *,
        user: User,
        plan: Plan,
        customer_id: str,
        success_url: str,
        cancel_url: str,
    ) -> StripeCheckoutSessionResult:
        if not plan.stripe_price_id:
            raise BillingError(f"Plan '{plan.name}' has no Stripe price.")
        try:
            session = stripe.checkout.Session.create(
                mode="subscription",
                line_items=[{"price": plan.stripe_price_id, "quantity": 1}],
                success_url=success_url,
                cancel_url=cancel_url,
                customer=customer_id,
                client_reference_id=user.id,
                metadata={"user_id": user.id, "plan_id": plan.id, "plan_name": plan.name},
            )
        except Exception as exc:  # pragma: no cover - external API
            logger.warning("stripe_client: checkout_failed user_id=%s plan_id=%s error=%s", user.id, plan.id, exc)
            raise BillingError("Failed to create Stripe checkout session.") from exc

        session_id = getattr(session, "id", None)
        session_url = getattr(session, "url", None)
        if not session_id or not session_url:
            raise BillingError("Stripe checkout session response is incomplete.")

        return StripeCheckoutSessionResult(id=str(session_id), url=str(session_url))

    def parse_webhook_event(self, *, signature: str, payload: bytes) -> StripeWebhookEvent:
        try:
            event = stripe.Webhook.construct_event(payload=payload, sig_header=signature, secret=self._webhook_secret)
        except Exception as exc:  # pragma: no cover - external API
            raise BillingError("Invalid Stripe webhook signature.") from exc

        event_type = str(event.get("type", ""))
        data_object = event.get("data", {}).get("object", {})
        return parse_stripe_event(event_type, data_object)


def parse_stripe_event(event_type: str, data_object: dict) -> StripeWebhookEvent:
    if event_type == "checkout.session.completed":
        metadata = data_object.get("metadata") or {}
        return StripeWebhookEvent(
            event_type=event_type,
            checkout_completed=StripeCheckoutCompletedEventData(
                session_id=str(data_object.get("id")),
                user_id=data_object.get("client_reference_id") or metadata.get("user_id"),
                customer_id=data_object.get("customer"),
                plan_id=metadata.get("plan_id"),
                amount_total=data_object.get("amount_total"),
                currency=data_object.get("currency"),
            ),
        )

    if event_type.startswith("invoice."):
        return StripeWebhookEvent(
            event_type=event_type,
            invoice=StripeInvoiceEventData(
                invoice_id=str(data_object.get("id")),
                customer_id=data_object.get("customer"),
                amount_due=data_object.get("amount_due"),
                currency=data_object.get("currency"),
            ),
        )

    if event_type.startswith("customer.subscription."):
        return StripeWebhookEvent(
            event_type=event_type,
            subscription=StripeSubscriptionEventData(
                subscription_id=str(data_object.get("id")),
                customer_id=data_object.get("customer"),
                status=str(data_object.get("status")),
            ),
        )

    return StripeWebhookEvent(event_type=event_type)
