from __future__ import annotations

import pytest

from smarttube.application.dto.billing import (
    CreateCheckoutSessionInput,
    StripeInvoiceEventData,
    StripeSubscriptionEventData,
    StripeWebhookEvent,
    StripeWebhookInput,
)
from smarttube.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from smarttube.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from smarttube.domain.exceptions import BillingError
from smarttube.infrastructure.clients.stripe_client import parse_stripe_event

from tests.fakes import FakeAuthPort, FakePaymentsPort, FakePlanPort, FakeStripePort, make_plan, make_user


def _webhook(event: StripeWebhookEvent, auth_port: FakeAuthPort, plan_port: FakePlanPort, payments: FakePaymentsPort):
    use_case = ProcessStripeWebhookUseCase(
        auth_port=auth_port,
        plan_port=plan_port,
        payments_port=payments,
        stripe_port=FakeStripePort(event),
    )
    return use_case.execute(StripeWebhookInput(signature="sig", payload=b"{}"))


def test_parse_checkout_completed_reads_metadata():
    event = parse_stripe_event(
        "checkout.session.completed",
        {
            "id": "cs_1",
            "customer": "cus_1",
            "metadata": {"user_id": "user-1", "plan_id": "plan-pro"},
            "amount_total": 2999,
            "currency": "usd",
        },
    )

    assert event.checkout_completed.user_id == "user-1"
    assert event.checkout_completed.plan_id == "plan-pro"
    assert event.checkout_completed.amount_total == 2999


def test_parse_unhandled_event_has_no_payload():
    event = parse_stripe_event("charge.refunded", {"id": "ch_1"})

    assert event.checkout_completed is None
    assert event.invoice is None
    assert event.subscription is None


def test_checkout_creates_customer_once():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user())
    plan_port = FakePlanPort([make_plan(plan_id="plan-pro", name="Pro", price="29.99", stripe_price_id="price_pro")])
    stripe_port = FakeStripePort()
    use_case = CreateCheckoutSessionUseCase(auth_port=auth_port, plan_port=plan_port, stripe_port=stripe_port)
    command = CreateCheckoutSessionInput(
        user_id="user-1",
        plan_id="plan-pro",
        success_url="https://app.test/ok",
        cancel_url="https://app.test/cancel",
    )

    first = use_case.execute(command)
    use_case.execute(command)

    assert first.url.startswith("https://checkout.stripe.test/")
    assert first.plan_name == "Pro"
    assert stripe_port.created_customers == ["user-1"]
    assert stripe_port.sessions[0]["plan"].stripe_price_id == "price_pro"
    assert stripe_port.sessions[1]["customer_id"] == "cus_user-1"
    assert auth_port.users["user-1"].stripe_customer_id == "cus_user-1"


def test_checkout_requires_price_id():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user())
    use_case = CreateCheckoutSessionUseCase(
        auth_port=auth_port,
        plan_port=FakePlanPort([make_plan()]),
        stripe_port=FakeStripePort(),
    )

    with pytest.raises(BillingError):
        use_case.execute(
            CreateCheckoutSessionInput(user_id="user-1", plan_id="plan-free", success_url="s", cancel_url="c")
        )


def test_checkout_completed_assigns_plan_and_records_payment():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user())
    plan_port = FakePlanPort([make_plan(plan_id="plan-pro", name="Pro")])
    payments = FakePaymentsPort()
    event = parse_stripe_event(
        "checkout.session.completed",
        {"id": "cs_1", "client_reference_id": "user-1", "customer": "cus_1", "metadata": {"plan_id": "plan-pro"}},
    )

    output = _webhook(event, auth_port, plan_port, payments)

    assert output.handled is True
    assert plan_port.user_plans["user-1"].plan_id == "plan-pro"
    assert auth_port.users["user-1"].stripe_customer_id == "cus_1"
    assert payments.payments[0].status == "paid"
    assert payments.payments[0].currency == "usd"


def test_failed_invoice_records_failed_payment():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user(stripe_customer_id="cus_1"))
    payments = FakePaymentsPort()
    event = StripeWebhookEvent(
        event_type="invoice.payment_failed",
        invoice=StripeInvoiceEventData(invoice_id="in_1", customer_id="cus_1", amount_due=999, currency="eur"),
    )

    _webhook(event, auth_port, FakePlanPort(), payments)

    assert payments.payments[0].status == "failed"
    assert payments.payments[0].amount_cents == 999


def test_subscription_deleted_downgrades_to_free():
    auth_port = FakeAuthPort()
    auth_port.add_user(make_user(stripe_customer_id="cus_1"))
    plan_port = FakePlanPort([make_plan(plan_id="plan-free", name="Free")])
    event = StripeWebhookEvent(
        event_type="customer.subscription.deleted",
        subscription=StripeSubscriptionEventData(subscription_id="sub_1", customer_id="cus_1", status="canceled"),
    )

    _webhook(event, auth_port, plan_port, FakePaymentsPort())

    assert plan_port.user_plans["user-1"].plan_id == "plan-free"


def test_unknown_event_is_acknowledged_but_not_handled():
    output = _webhook(StripeWebhookEvent(event_type="charge.refunded"), FakeAuthPort(), FakePlanPort(), FakePaymentsPort())

    assert output.handled is False
