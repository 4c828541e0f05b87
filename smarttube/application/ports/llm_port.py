from __future__ import annotations

from typing import Protocol

from smarttube.domain.entities.content import ChatMessage


class LlmPort(Protocol):
    def complete(self, *, messages: list[ChatMessage], max_tokens: int | None = None) -> str:
        ...
