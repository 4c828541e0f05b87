from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class VideoStatistics:
    view_count: int
    like_count: int
    comment_count: int


@dataclass(frozen=True)
class VideoSeoReport:
    overall: int
    title_score: int
    description_score: int
    tags_score: int
    engagement_score: int
    suggestions: list[str]
    suggested_tags: list[str]
    summary: str
    hook: str


@dataclass(frozen=True)
class VideoDetails:
    video_id: str
    title: str
    description: str
    tags: list[str]
    statistics: VideoStatistics
    channel_title: str
    published_at: str
    duration: str
    thumbnail_url: str | None
