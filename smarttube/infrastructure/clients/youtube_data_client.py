from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from smarttube.application.ports.video_lookup_port import VideoLookupPort
from smarttube.domain.entities.seo import VideoDetails, VideoStatistics
from smarttube.domain.exceptions import VideoLookupConfigurationError, VideoLookupError, VideoNotFoundError
from smarttube.domain.services.youtube_video import best_thumbnail_url, parse_count


logger = logging.getLogger(__name__)

VIDEO_PARTS = "snippet,statistics,contentDetails"


@dataclass(frozen=True)
class YouTubeDataClientSettings:
    api_base: str
    api_key: str
    timeout_seconds: float


class YouTubeDataClient(VideoLookupPort):
    """Reads public video metadata from the YouTube Data API v3."""

    def __init__(self, settings: YouTubeDataClientSettings):
        self._settings = settings

    def get_video(self, *, video_id: str) -> VideoDetails:
        if not self._settings.api_key:
            raise VideoLookupConfigurationError("YOUTUBE_API_KEY is required.")

        url = f"{self._settings.api_base.rstrip('/')}/videos"
        params = {"key": self._settings.api_key, "part": VIDEO_PARTS, "id": video_id}
        try:
            with httpx.Client(timeout=self._settings.timeout_seconds) as client:
                response = client.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.warning("youtube_data_client: transport_error video_id=%s error=%s", video_id, exc)
            raise VideoLookupError("YouTube API request failed.") from exc

        if response.status_code >= 400:
            logger.warning(
                "youtube_data_client: request_failed status=%s video_id=%s",
                response.status_code,
                video_id,
            )
            raise VideoLookupError(f"YouTube API request failed with status {response.status_code}.")

        try:
            payload = response.json()
        except ValueError as exc:
            raise VideoLookupError("YouTube API returned a non-JSON response.") from exc

        items = payload.get("items") if isinstance(payload, dict) else None
        if not isinstance(items, list) or not items or not isinstance(items[0], dict):
            logger.info("youtube_data_client: not_found video_id=%s", video_id)
            raise VideoNotFoundError("Video not found.")
        return _to_video(video_id, items[0])


def _section(item: dict, name: str) -> dict:
    value = item.get(name)
    return value if isinstance(value, dict) else {}


def _to_video(video_id: str, item: dict) -> VideoDetails:
    snippet = _section(item, "snippet")
    statistics = _section(item, "statistics")
    details = _section(item, "contentDetails")
    tags = snippet.get("tags")
    return VideoDetails(
        video_id=str(item.get("id") or video_id),
        title=str(snippet.get("title") or ""),
        description=str(snippet.get("description") or ""),
        tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
        statistics=VideoStatistics(
            view_count=parse_count(statistics.get("viewCount")),
            like_count=parse_count(statistics.get("likeCount")),
            comment_count=parse_count(statistics.get("commentCount")),
        ),
        channel_title=str(snippet.get("channelTitle") or ""),
        published_at=str(snippet.get("publishedAt") or ""),
        duration=str(details.get("duration") or ""),
        thumbnail_url=best_thumbnail_url(snippet.get("thumbnails")),
    )
