from __future__ import annotations

import logging

from smarttube.application.dto.billing import CreateCheckoutSessionInput, CreateCheckoutSessionOutput
from smarttube.application.ports.auth_port import AuthPort
from smarttube.application.ports.plan_port import PlanPort
from smarttube.application.ports.stripe_port import StripePort
from smarttube.domain.exceptions import BillingError


logger = logging.getLogger(__name__)


class CreateCheckoutSessionUseCase:
    """Starts a Stripe subscription checkout for an active paid plan."""

    def __init__(
        self,
        *,
        auth_port: AuthPort,
        plan_port: PlanPort,
        stripe_port: StripePort,
    ):
        self._auth_port = auth_port
        self._plan_port = plan_port
        self._stripe_port = stripe_port

    def execute(self, command: CreateCheckoutSessionInput) -> CreateCheckoutSessionOutput:
        user = self._auth_port.get_user_by_id(user_id=command.user_id)
        if user is None:
            raise BillingError("User not found.")

        plan = self._plan_port.get_plan_by_id(plan_id=command.plan_id)
        if plan is None or not plan.is_active:
            raise BillingError("Plan not found.")
        if not plan.stripe_price_id:
            raise BillingError(f"Plan '{plan.name}' cannot be purchased online.")

        customer_id = user.stripe_customer_id
        if not customer_id:
            customer_id = self._stripe_port.create_customer(user=user)
            self._auth_port.update_user_stripe_customer_id(
                user_id=user.id,
                stripe_customer_id=customer_id,
            )

        session = self._stripe_port.create_plan_checkout(
            user=user,
            plan=plan,
            customer_id=customer_id,
            success_url=command.success_url,
            cancel_url=command.cancel_url,
        )
        logger.info("create_checkout_session: created user_id=%s plan=%s", user.id, plan.name)
        return CreateCheckoutSessionOutput(
            plan_id=plan.id,
            plan_name=plan.name,
            session_id=session.id,
            url=session.url,
        )
