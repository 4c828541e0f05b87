from __future__ import annotations

import json

import httpx
import pytest

from smarttube.domain.entities.content import ChatMessage
from smarttube.domain.exceptions import LlmConfigurationError, LlmRequestError
from smarttube.infrastructure.clients.openrouter_client import OpenRouterClient, OpenRouterClientSettings


_REAL_CLIENT = httpx.Client


def _settings(api_key: str = "env-key") -> OpenRouterClientSettings:
    return OpenRouterClientSettings(
        api_base="https://openrouter.test/api/v1/",
        api_key=api_key,
        model="deepseek/deepseek-r1:free",
        timeout_seconds=5,
        referer="https://smarttube.test",
        title="SmartTube",
    )


def _install_transport(monkeypatch: pytest.MonkeyPatch, handler) -> list[httpx.Request]:
    requests: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    monkeypatch.setattr(
        "smarttube.infrastructure.clients.openrouter_client.httpx.Client",
        lambda timeout: _REAL_CLIENT(transport=httpx.MockTransport(_record), timeout=timeout),
    )
    return requests


def test_complete_posts_chat_request_and_returns_content(monkeypatch: pytest.MonkeyPatch):
    requests = _install_transport(
        monkeypatch,
        lambda request: httpx.Response(200, json={"choices": [{"message": {"content": "Hello"}}]}),
    )

    content = OpenRouterClient(_settings()).complete(
        messages=[ChatMessage(role="user", content="Hi")],
        max_tokens=1500,
    )

    assert content == "Hello"
    request = requests[0]
    assert str(request.url) == "https://openrouter.test/api/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer env-key"
    assert request.headers["X-Title"] == "SmartTube"
    body = json.loads(request.content)
    assert body["max_tokens"] == 1500
    assert body["stream"] is False
    assert body["messages"] == [{"role": "user", "content": "Hi"}]


def test_stored_key_is_used_when_env_key_is_empty(monkeypatch: pytest.MonkeyPatch):
    requests = _install_transport(
        monkeypatch,
        lambda request: httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]}),
    )

    OpenRouterClient(_settings(api_key=""), stored_key_provider=lambda: "stored-key").complete(messages=[])

    assert requests[0].headers["Authorization"] == "Bearer stored-key"


def test_missing_key_raises_configuration_error():
    with pytest.raises(LlmConfigurationError):
        OpenRouterClient(_settings(api_key=""), stored_key_provider=lambda: None).complete(messages=[])


def test_error_status_is_reported_with_code(monkeypatch: pytest.MonkeyPatch):
    _install_transport(monkeypatch, lambda request: httpx.Response(429, text="rate limited"))

    with pytest.raises(LlmRequestError) as exc_info:
        OpenRouterClient(_settings()).complete(messages=[])

    assert "429" in str(exc_info.value)


def test_empty_choices_surface_provider_message(monkeypatch: pytest.MonkeyPatch):
    _install_transport(
        monkeypatch,
        lambda request: httpx.Response(200, json={"choices": [], "error": {"message": "model_not_found"}}),
    )

    with pytest.raises(LlmRequestError) as exc_info:
        OpenRouterClient(_settings()).complete(messages=[])

    assert str(exc_info.value) == "model_not_found"


def test_timeout_is_mapped(monkeypatch: pytest.MonkeyPatch):
    def _timeout(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    _install_transport(monkeypatch, _timeout)

    with pytest.raises(LlmRequestError) as exc_info:
        OpenRouterClient(_settings()).complete(messages=[])

    assert "timeout" in str(exc_info.value).lower()


@pytest.mark.parametrize(
    "payload",
    [
        [{"message": {"content": "Hello"}}],
        {"error": "upstream unavailable"},
        {"choices": ["Hello"]},
    ],
)
def test_unexpected_payload_shapes_raise_request_error(monkeypatch: pytest.MonkeyPatch, payload):
    _install_transport(monkeypatch, lambda request: httpx.Response(200, json=payload))

    with pytest.raises(LlmRequestError):
        OpenRouterClient(_settings()).complete(messages=[])
