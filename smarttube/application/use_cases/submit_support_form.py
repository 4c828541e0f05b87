from __future__ import annotations

import logging

from smarttube.application.dto.support import SUPPORT_FORM_TYPES, SupportSubmissionInput, SupportSubmissionOutput
from smarttube.application.ports.form_relay_port import FormRelayPort
from smarttube.domain.entities.user import User
from smarttube.domain.exceptions import GenerationInputError, SupportRelayError
from smarttube.domain.services.feature_limits import SUPPORT

from .feature_gate import FeatureGate


logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Thanks! Your message has been sent."


class SubmitSupportFormUseCase:
    """Relays a support form; signed-in users get their plan and support level attached."""

    def __init__(self, *, form_relay: FormRelayPort, feature_gate: FeatureGate):
        self._form_relay = form_relay
        self._feature_gate = feature_gate

    def execute(self, command: SupportSubmissionInput, *, user: User | None = None) -> SupportSubmissionOutput:
        if command.form_type not in SUPPORT_FORM_TYPES:
            raise GenerationInputError(f"form_type must be one of: {', '.join(SUPPORT_FORM_TYPES)}.")
        name = command.name.strip()
        email = command.email.strip()
        if not name or "@" not in email:
            raise GenerationInputError("name and a valid email are required.")

        fields = {key: value for key, value in command.fields.items() if value is not None}
        fields["name"] = name
        fields["email"] = email
        if user is not None:
            summary = self._feature_gate.summary(user, SUPPORT)
            fields["plan"] = self._feature_gate.limits_for(user).plan_name
            fields["support_level"] = str(summary.limit_value)
            fields["user_id"] = user.id

        success, message = self._form_relay.submit(form_type=command.form_type, fields=fields)
        if not success:
            logger.warning("submit_support_form: relay_rejected form_type=%s message=%s", command.form_type, message)
            raise SupportRelayError(message or "Failed to submit the form. Please try again.")
        logger.info("submit_support_form: submitted form_type=%s", command.form_type)
        return SupportSubmissionOutput(success=True, message=message or SUCCESS_MESSAGE)
