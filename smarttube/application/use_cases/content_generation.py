from __future__ import annotations

import logging
from typing import Callable, TypeVar

from smarttube.application.dto.usage import FeatureUsageOutput
from smarttube.application.ports.llm_port import LlmPort
from smarttube.domain.entities.content import ChatMessage
from smarttube.domain.entities.user import User
from smarttube.domain.exceptions import EmptyGenerationError, GenerationInputError

from .feature_gate import FeatureGate


T = TypeVar("T")
logger = logging.getLogger(__name__)


def require_text(value: str | None, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise GenerationInputError(f"{field} is required.")
    return cleaned


class GatedGeneration:
    """Checks the feature limit, calls the model, cleans the answer, then counts the use."""

    def __init__(self, *, llm: LlmPort, feature_gate: FeatureGate):
        self._llm = llm
        self._feature_gate = feature_gate

    def run(
        self,
        *,
        user: User,
        feature: str,
        messages: list[ChatMessage],
        clean: Callable[[str], T],
        max_tokens: int | None = None,
    ) -> tuple[T, FeatureUsageOutput]:
        self._feature_gate.ensure_allowed(user, feature)
        content = self._llm.complete(messages=messages, max_tokens=max_tokens)
        result = clean(content)
        if not result:
            logger.warning("content_generation: empty_result user_id=%s feature=%s", user.id, feature)
            raise EmptyGenerationError("The model returned no usable content. Please try again.")
        usage = self._feature_gate.record_use(user, feature)
        logger.info("content_generation: generated user_id=%s feature=%s", user.id, feature)
        return result, usage
