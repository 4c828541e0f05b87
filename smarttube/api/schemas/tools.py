from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from smarttube.domain.entities.content import (
    DEFAULT_DESCRIPTION_WORD_COUNT,
    DEFAULT_HOOK_CONTENT_TYPE,
    DEFAULT_SCRIPT_CONTENT_TYPE,
)

from .usage import FeatureUsageResponse


class GenerateTitlesRequest(BaseModel):
    title: str = Field(..., max_length=300)
    keywords: str = Field(default="", max_length=1000)
    audience: str = Field(default="", max_length=300)


class GenerateDescriptionRequest(BaseModel):
    title: str = Field(..., max_length=300)
    keywords: str = Field(default="", max_length=1000)
    word_count: int = Field(default=DEFAULT_DESCRIPTION_WORD_COUNT, ge=1)


class GenerateHashtagsRequest(BaseModel):
    title: str = Field(..., max_length=300)


class GenerateKeywordsRequest(BaseModel):
    topic: str = Field(..., max_length=300)


class GenerateHooksRequest(BaseModel):
    topic: str = Field(..., max_length=300)
    content_type: str = DEFAULT_HOOK_CONTENT_TYPE


class CompareTitlesRequest(BaseModel):
    title_a: str = Field(..., max_length=300)
    title_b: str = Field(..., max_length=300)


class OptimizeDescriptionRequest(BaseModel):
    current_description: str = Field(..., max_length=10000)
    keywords: str = Field(default="", max_length=1000)


class GenerateScriptRequest(BaseModel):
    title: str = Field(..., max_length=300)
    keywords: str = Field(default="", max_length=1000)
    audience: str = Field(default="", max_length=300)
    video_length: str = Field(default="", max_length=60)
    content_type: str = DEFAULT_SCRIPT_CONTENT_TYPE


class GenerateVideoIdeasRequest(BaseModel):
    channel_url: str = Field(..., max_length=500)


class ListGenerationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    items: list[str]
    usage: FeatureUsageResponse


class TextGenerationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    text: str
    usage: FeatureUsageResponse


class TitleFeedbackResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str
    point: str
    positive: bool


class CompareTitlesResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    winner: str
    score_a: int
    score_b: int
    reason: str
    feedback: list[TitleFeedbackResponse]
    usage: FeatureUsageResponse


class VideoStatisticsRequest(BaseModel):
    view_count: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)


class AnalyzeVideoRequest(BaseModel):
    video_url: str | None = Field(default=None, max_length=500)
    title: str = Field(default="", max_length=300)
    description: str = Field(default="", max_length=10000)
    tags: list[str] = Field(default_factory=list)
    statistics: VideoStatisticsRequest = Field(default_factory=VideoStatisticsRequest)


class VideoSeoReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    overall: int
    title_score: int
    description_score: int
    tags_score: int
    engagement_score: int
    suggestions: list[str]
    suggested_tags: list[str]
    summary: str
    hook: str


class VideoStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    view_count: int
    like_count: int
    comment_count: int


class VideoDetailsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    video_id: str
    title: str
    description: str
    tags: list[str]
    statistics: VideoStatisticsResponse
    channel_title: str
    published_at: str
    duration: str
    thumbnail_url: str | None = None


class AnalyzeVideoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    report: VideoSeoReportResponse
    usage: FeatureUsageResponse
    video: VideoDetailsResponse | None = None
