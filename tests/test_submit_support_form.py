from __future__ import annotations

import pytest

from smarttube.application.dto.support import SupportSubmissionInput
from smarttube.application.use_cases.feature_gate import FeatureGate
from smarttube.application.use_cases.submit_support_form import SUCCESS_MESSAGE, SubmitSupportFormUseCase
from smarttube.domain.entities.feature import UserLimits
from smarttube.domain.exceptions import GenerationInputError, SupportRelayError

from tests.fakes import TODAY, FakeUsagePort, make_user


class FakeFormRelay:
    def __init__(self, *, success: bool = True, message: str = ""):
        self.success = success
        self.message = message
        self.submissions: list[tuple[str, dict[str, str]]] = []

    def submit(self, *, form_type: str, fields: dict[str, str]) -> tuple[bool, str]:
        self.submissions.append((form_type, fields))
        return self.success, self.message


def _use_case(relay: FakeFormRelay) -> tuple[SubmitSupportFormUseCase, FakeUsagePort]:
    usage_port = FakeUsagePort(UserLimits(plan_name="Pro", plan_features={"Support": 2}, custom_limits={}))
    gate = FeatureGate(usage_port=usage_port, today=lambda: TODAY)
    return SubmitSupportFormUseCase(form_relay=relay, feature_gate=gate), usage_port


def _command(form_type: str = "Bug Report") -> SupportSubmissionInput:
    return SupportSubmissionInput(
        form_type=form_type,
        name=" Alice ",
        email="alice@example.com",
        fields={"message": "It broke", "browser": None},
    )


def test_signed_in_submission_attaches_plan_and_support_level():
    relay = FakeFormRelay()
    use_case, usage_port = _use_case(relay)

    output = use_case.execute(_command(), user=make_user())

    assert output.message == SUCCESS_MESSAGE
    form_type, fields = relay.submissions[0]
    assert form_type == "Bug Report"
    assert fields["name"] == "Alice"
    assert fields["plan"] == "Pro"
    assert fields["support_level"] == "2"
    assert "browser" not in fields
    assert usage_port.saved == []


def test_anonymous_submission_has_no_plan_fields():
    relay = FakeFormRelay(message="Sent")
    use_case, _ = _use_case(relay)

    output = use_case.execute(_command("Contact Support"))

    assert output.message == "Sent"
    assert "plan" not in relay.submissions[0][1]


def test_rejected_submission_raises_relay_error():
    use_case, _ = _use_case(FakeFormRelay(success=False, message="Invalid access key"))

    with pytest.raises(SupportRelayError):
        use_case.execute(_command())


def test_unknown_form_type_is_rejected():
    relay = FakeFormRelay()
    use_case, _ = _use_case(relay)

    with pytest.raises(GenerationInputError):
        use_case.execute(_command("Complaint"))

    assert relay.submissions == []
