from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


ChatRole = Literal["system", "user", "assistant"]
TitleLabel = Literal["A", "B"]

SCRIPT_CONTENT_TYPES = (
    "Informative",
    "Tutorial",
    "Entertainment",
    "Review",
    "Vlog",
    "Educational",
    "Gaming",
    "Tech",
    "Lifestyle",
    "Comedy",
)
HOOK_CONTENT_TYPES = SCRIPT_CONTENT_TYPES + ("Storytelling",)

DEFAULT_SCRIPT_CONTENT_TYPE = "Informative"
DEFAULT_HOOK_CONTENT_TYPE = "Tutorial"
DEFAULT_DESCRIPTION_WORD_COUNT = 300


@dataclass(frozen=True)
class ChatMessage:
    role: ChatRole
    content: str


@dataclass(frozen=True)
class TitleFeedback:
    title: TitleLabel
    point: str
    positive: bool


@dataclass(frozen=True)
class TitleComparison:
    winner: TitleLabel
    score_a: int
    score_b: int
    reason: str
    feedback: list[TitleFeedback]
