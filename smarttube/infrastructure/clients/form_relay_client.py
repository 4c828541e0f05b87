from __future__ import annotations

import logging

import httpx

from smarttube.application.ports.form_relay_port import FormRelayPort
from smarttube.domain.exceptions import SupportConfigurationError, SupportRelayError


logger = logging.getLogger(__name__)


class FormRelayClient(FormRelayPort):
    """Posts form submissions to a web3forms-compatible endpoint."""

    def __init__(self, *, url: str, access_key: str, timeout_seconds: float):
        self._url = url
        self._access_key = access_key
        self._timeout_seconds = timeout_seconds

    def submit(self, *, form_type: str, fields: dict[str, str]) -> tuple[bool, str]:
        if not self._access_key:
            raise SupportConfigurationError("FORM_RELAY_ACCESS_KEY is required.")

        body = {**fields, "form_type": form_type, "access_key": self._access_key}
        try:
            with httpx.Client(timeout=self._timeout_seconds) as client:
                response = client.post(url=self._url, json=body, headers={"Accept": "application/json"})
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("form_relay_client: request_failed error=%s", exc)
            raise SupportRelayError("Failed to reach the form relay. Please try again.") from exc

        success = bool(payload.get("success"))
        message = str(payload.get("message") or "")
        if not success:
            logger.warning("form_relay_client: rejected status=%s message=%s", response.status_code, message)
        return success, message
