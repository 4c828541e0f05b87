from __future__ import annotations

import logging

from smarttube.application.dto.seo import AnalyzeVideoInput, AnalyzeVideoOutput
from smarttube.application.ports.video_lookup_port import VideoLookupPort
from smarttube.domain.entities.seo import VideoDetails
from smarttube.domain.exceptions import GenerationInputError, VideoLookupConfigurationError
from smarttube.domain.services.feature_limits import YOUTUBE_TOOLS
from smarttube.domain.services.seo_analysis import analyze_video
from smarttube.domain.services.youtube_video import extract_video_id

from .feature_gate import FeatureGate


logger = logging.getLogger(__name__)


class AnalyzeVideoSeoUseCase:
    """Scores a video given by URL, or by metadata supplied in the request."""

    def __init__(self, *, feature_gate: FeatureGate, video_lookup: VideoLookupPort | None = None):
        self._feature_gate = feature_gate
        self._video_lookup = video_lookup

    def execute(self, command: AnalyzeVideoInput) -> AnalyzeVideoOutput:
        video_url = (command.video_url or "").strip()
        if video_url:
            video_id = extract_video_id(video_url)
            if video_id is None:
                raise GenerationInputError("Invalid YouTube URL.")
            self._feature_gate.ensure_allowed(command.user, YOUTUBE_TOOLS)
            video = self._fetch(video_id)
            title, description, tags, stats = video.title, video.description, video.tags, video.statistics
        else:
            if not command.title.strip():
                raise GenerationInputError("title or video_url is required.")
            stats = command.statistics
            if stats.view_count < 0 or stats.like_count < 0 or stats.comment_count < 0:
                raise GenerationInputError("statistics must be >= 0.")
            self._feature_gate.ensure_allowed(command.user, YOUTUBE_TOOLS)
            video = None
            title, description, tags = command.title, command.description, command.tags

        report = analyze_video(
            title=title.strip(),
            description=description,
            tags=[tag.strip() for tag in tags if tag.strip()],
            statistics=stats,
        )
        usage = self._feature_gate.record_use(command.user, YOUTUBE_TOOLS)
        logger.info("analyze_video_seo: analyzed user_id=%s overall=%s", command.user.id, report.overall)
        return AnalyzeVideoOutput(report=report, usage=usage, video=video)

    def _fetch(self, video_id: str) -> VideoDetails:
        if self._video_lookup is None:
            raise VideoLookupConfigurationError("Video lookup is not configured.")
        return self._video_lookup.get_video(video_id=video_id)
