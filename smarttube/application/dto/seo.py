from __future__ import annotations

from dataclasses import dataclass

from smarttube.application.dto.usage import FeatureUsageOutput
from smarttube.domain.entities.seo import VideoDetails, VideoSeoReport, VideoStatistics
from smarttube.domain.entities.user import User


@dataclass(frozen=True)
class AnalyzeVideoInput:
    user: User
    title: str
    description: str
    tags: list[str]
    statistics: VideoStatistics
    video_url: str | None = None


@dataclass(frozen=True)
class AnalyzeVideoOutput:
    report: VideoSeoReport
    usage: FeatureUsageOutput
    video: VideoDetails | None = None
