from __future__ import annotations

import httpx
import pytest

from smarttube.domain.exceptions import VideoLookupConfigurationError, VideoLookupError, VideoNotFoundError
from smarttube.infrastructure.clients.youtube_data_client import YouTubeDataClient, YouTubeDataClientSettings


_REAL_CLIENT = httpx.Client

VIDEO_ITEM = {
    "id": "dQw4w9WgXcQ",
    "snippet": {
        "title": "10 Budget Travel Tips",
        "description": "Chapters\n0:00 Intro",
        "tags": ["travel", "budget"],
        "channelTitle": "Wander Cheap",
        "publishedAt": "2026-01-02T10:00:00Z",
        "thumbnails": {"medium": {"url": "https://i.ytimg.test/medium.jpg"}},
    },
    "statistics": {"viewCount": "1000", "likeCount": "80"},
    "contentDetails": {"duration": "PT8M12S"},
}


def _settings(api_key: str = "yt-key") -> YouTubeDataClientSettings:
    return YouTubeDataClientSettings(
        api_base="https://youtube.test/youtube/v3/",
        api_key=api_key,
        timeout_seconds=5,
    )


def _install_transport(monkeypatch: pytest.MonkeyPatch, handler) -> list[httpx.Request]:
    requests: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    monkeypatch.setattr(
        "smarttube.infrastructure.clients.youtube_data_client.httpx.Client",
        lambda timeout: _REAL_CLIENT(transport=httpx.MockTransport(_record), timeout=timeout),
    )
    return requests


def test_get_video_maps_snippet_statistics_and_details(monkeypatch: pytest.MonkeyPatch):
    requests = _install_transport(monkeypatch, lambda request: httpx.Response(200, json={"items": [VIDEO_ITEM]}))

    video = YouTubeDataClient(_settings()).get_video(video_id="dQw4w9WgXcQ")

    request = requests[0]
    assert request.url.path == "/youtube/v3/videos"
    assert request.url.params["id"] == "dQw4w9WgXcQ"
    assert request.url.params["key"] == "yt-key"
    assert request.url.params["part"] == "snippet,statistics,contentDetails"
    assert video.title == "10 Budget Travel Tips"
    assert video.tags == ["travel", "budget"]
    assert video.statistics.view_count == 1000
    assert video.statistics.like_count == 80
    assert video.statistics.comment_count == 0
    assert video.duration == "PT8M12S"
    assert video.thumbnail_url == "https://i.ytimg.test/medium.jpg"


def test_empty_items_raise_not_found(monkeypatch: pytest.MonkeyPatch):
    _install_transport(monkeypatch, lambda request: httpx.Response(200, json={"items": []}))

    with pytest.raises(VideoNotFoundError):
        YouTubeDataClient(_settings()).get_video(video_id="dQw4w9WgXcQ")


def test_error_status_raises_lookup_error(monkeypatch: pytest.MonkeyPatch):
    _install_transport(monkeypatch, lambda request: httpx.Response(403, json={"error": {"message": "quota"}}))

    with pytest.raises(VideoLookupError) as exc_info:
        YouTubeDataClient(_settings()).get_video(video_id="dQw4w9WgXcQ")

    assert "403" in str(exc_info.value)


def test_transport_failure_raises_lookup_error(monkeypatch: pytest.MonkeyPatch):
    def _fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    _install_transport(monkeypatch, _fail)

    with pytest.raises(VideoLookupError):
        YouTubeDataClient(_settings()).get_video(video_id="dQw4w9WgXcQ")


def test_missing_key_raises_configuration_error():
    with pytest.raises(VideoLookupConfigurationError):
        YouTubeDataClient(_settings(api_key="")).get_video(video_id="dQw4w9WgXcQ")
