from __future__ import annotations

from dataclasses import dataclass

from smarttube.application.dto.usage import FeatureUsageOutput
from smarttube.domain.entities.content import (
    DEFAULT_DESCRIPTION_WORD_COUNT,
    DEFAULT_HOOK_CONTENT_TYPE,
    DEFAULT_SCRIPT_CONTENT_TYPE,
    TitleFeedback,
)
from smarttube.domain.entities.user import User


@dataclass(frozen=True)
class GenerateTitlesInput:
    user: User
    title: str
    keywords: str
    audience: str


@dataclass(frozen=True)
class GenerateDescriptionInput:
    user: User
    title: str
    keywords: str
    word_count: int = DEFAULT_DESCRIPTION_WORD_COUNT


@dataclass(frozen=True)
class GenerateHashtagsInput:
    user: User
    title: str


@dataclass(frozen=True)
class GenerateKeywordsInput:
    user: User
    topic: str


@dataclass(frozen=True)
class GenerateHooksInput:
    user: User
    topic: str
    content_type: str = DEFAULT_HOOK_CONTENT_TYPE


@dataclass(frozen=True)
class CompareTitlesInput:
    user: User
    title_a: str
    title_b: str


@dataclass(frozen=True)
class OptimizeDescriptionInput:
    user: User
    current_description: str
    keywords: str


@dataclass(frozen=True)
class GenerateScriptInput:
    user: User
    title: str
    keywords: str
    audience: str
    video_length: str
    content_type: str = DEFAULT_SCRIPT_CONTENT_TYPE


@dataclass(frozen=True)
class GenerateVideoIdeasInput:
    user: User
    channel_url: str


@dataclass(frozen=True)
class ListGenerationOutput:
    items: list[str]
    usage: FeatureUsageOutput


@dataclass(frozen=True)
class TextGenerationOutput:
    text: str
    usage: FeatureUsageOutput


@dataclass(frozen=True)
class CompareTitlesOutput:
    winner: str
    score_a: int
    score_b: int
    reason: str
    feedback: list[TitleFeedback]
    usage: FeatureUsageOutput
