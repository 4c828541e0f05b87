from __future__ import annotations

import logging
from uuid import uuid4

from smarttube.application.dto.billing import StripeWebhookInput, StripeWebhookOutput
from smarttube.application.ports.auth_port import AuthPort
from smarttube.application.ports.payments_port import PaymentsPort
from smarttube.application.ports.plan_port import PlanPort
from smarttube.application.ports.stripe_port import StripePort
from smarttube.domain.entities.plan import FREE_PLAN_NAME
from smarttube.domain.exceptions import BillingError

from .auth_common import utcnow


PROVIDER = "stripe"
DEFAULT_CURRENCY = "usd"
logger = logging.getLogger(__name__)


class ProcessStripeWebhookUseCase:
    def __init__(
        self,
        *,
        auth_port: AuthPort,
        plan_port: PlanPort,
        payments_port: PaymentsPort,
        stripe_port: StripePort,
    ):
        self._auth_port = auth_port
        self._plan_port = plan_port
        self._payments_port = payments_port
        self._stripe_port = stripe_port

    def execute(self, command: StripeWebhookInput) -> StripeWebhookOutput:
        event = self._stripe_port.parse_webhook_event(signature=command.signature, payload=command.payload)
        logger.info("process_stripe_webhook: received event_type=%s", event.event_type)

        if event.event_type == "checkout.session.completed" and event.checkout_completed is not None:
            completed = event.checkout_completed
            if not completed.user_id:
                raise BillingError("Stripe checkout session missing user id.")
            if completed.customer_id:
                self._auth_port.update_user_stripe_customer_id(
                    user_id=completed.user_id,
                    stripe_customer_id=completed.customer_id,
                )
            if completed.plan_id:
                if self._plan_port.get_plan_by_id(plan_id=completed.plan_id) is None:
                    raise BillingError("Stripe checkout session references an unknown plan.")
                self._plan_port.upsert_user_plan(
                    user_id=completed.user_id,
                    plan_id=completed.plan_id,
                    expiry=None,
                    custom_limits={},
                )
            self._payments_port.create_payment(
                payment_id=str(uuid4()),
                user_id=completed.user_id,
                plan_id=completed.plan_id,
                amount_cents=completed.amount_total or 0,
                currency=completed.currency or DEFAULT_CURRENCY,
                status="paid",
                provider=PROVIDER,
                provider_id=completed.session_id,
                created_at=utcnow(),
            )
            return StripeWebhookOutput(event_type=event.event_type, handled=True)

        if event.event_type == "invoice.payment_failed":
            invoice = event.invoice
            if invoice is None or not invoice.customer_id:
                raise BillingError("Stripe invoice event missing customer id.")
            user = self._auth_port.get_user_by_stripe_customer_id(stripe_customer_id=invoice.customer_id)
            if user is None:
                raise BillingError("No user linked to Stripe customer id.")
            self._payments_port.create_payment(
                payment_id=str(uuid4()),
                user_id=user.id,
                plan_id=None,
                amount_cents=invoice.amount_due or 0,
                currency=invoice.currency or DEFAULT_CURRENCY,
                status="failed",
                provider=PROVIDER,
                provider_id=invoice.invoice_id,
                created_at=utcnow(),
            )
            return StripeWebhookOutput(event_type=event.event_type, handled=True)

        if event.event_type == "customer.subscription.deleted":
            subscription = event.subscription
            if subscription is None or not subscription.customer_id:
                raise BillingError("Stripe subscription event missing customer id.")
            user = self._auth_port.get_user_by_stripe_customer_id(stripe_customer_id=subscription.customer_id)
            if user is None:
                raise BillingError("No user linked to Stripe customer id.")
            free_plan = self._plan_port.get_plan_by_name(name=FREE_PLAN_NAME)
            if free_plan is None:
                raise BillingError("Free plan is not configured.")
            self._plan_port.upsert_user_plan(
                user_id=user.id,
                plan_id=free_plan.id,
                expiry=None,
                custom_limits={},
            )
            logger.info("process_stripe_webhook: downgraded user_id=%s", user.id)
            return StripeWebhookOutput(event_type=event.event_type, handled=True)

        return StripeWebhookOutput(event_type=event.event_type, handled=False)
