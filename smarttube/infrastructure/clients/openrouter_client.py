from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import httpx

from smarttube.application.ports.llm_port import LlmPort
from smarttube.domain.entities.content import ChatMessage
from smarttube.domain.exceptions import LlmConfigurationError, LlmRequestError


logger = logging.getLogger(__name__)

TEMPERATURE = 0.7


@dataclass(frozen=True)
class OpenRouterClientSettings:
    api_base: str
    api_key: str
    model: str
    timeout_seconds: float
    referer: str
    title: str


class OpenRouterClient(LlmPort):
    """Chat-completion client; one request per call and no retries."""

    def __init__(
        self,
        settings: OpenRouterClientSettings,
        *,
        stored_key_provider: Callable[[], str | None] | None = None,
    ):
        self._settings = settings
        self._stored_key_provider = stored_key_provider

    def _resolve_api_key(self) -> str:
        if self._settings.api_key:
            return self._settings.api_key
        if self._stored_key_provider is not None:
            stored = self._stored_key_provider()
            if stored:
                return stored
        raise LlmConfigurationError("OpenRouter API key not found.")

    def complete(self, *, messages: list[ChatMessage], max_tokens: int | None = None) -> str:
        api_key = self._resolve_api_key()
        body: dict = {
            "model": self._settings.model,
            "messages": [{"role": message.role, "content": message.content} for message in messages],
            "temperature": TEMPERATURE,
            "stream": False,
        }
        if max_tokens is not None:
            body["max_tokens"] = max_tokens
        headers = {
            "Authorization": f"Bearer {api_key}",
            "HTTP-Referer": self._settings.referer,
            "X-Title": self._settings.title,
        }
        url = f"{self._settings.api_base.rstrip('/')}/chat/completions"

        try:
            with httpx.Client(timeout=self._settings.timeout_seconds) as client:
                response = client.post(url, json=body, headers=headers)
        except httpx.TimeoutException as exc:
            logger.warning("openrouter_client: request_timeout model=%s", self._settings.model)
            raise LlmRequestError("Request timeout while contacting OpenRouter.") from exc
        except httpx.HTTPError as exc:
            logger.warning("openrouter_client: transport_error error=%s", exc)
            raise LlmRequestError(f"OpenRouter request failed: {exc}") from exc

        if response.status_code >= 400:
            logger.warning(
                "openrouter_client: request_failed status=%s model=%s",
                response.status_code,
                self._settings.model,
            )
            raise LlmRequestError(f"OpenRouter API error {response.status_code}: {response.text}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise LlmRequestError("OpenRouter returned a non-JSON response.") from exc
        if not isinstance(payload, dict):
            raise LlmRequestError("OpenRouter returned an unexpected response.")

        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            error = payload.get("error")
            message = error.get("message") if isinstance(error, dict) else error
            raise LlmRequestError(str(message) if message else "No response received from the AI model.")

        first = choices[0] if isinstance(choices[0], dict) else {}
        message = first.get("message")
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise LlmRequestError("No response received from the AI model.")
        return content
