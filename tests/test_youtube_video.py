from __future__ import annotations

import pytest

from smarttube.domain.services.youtube_video import best_thumbnail_url, extract_video_id, parse_count


@pytest.mark.parametrize(
    "url",
    [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://youtube.com/watch?feature=share&v=dQw4w9WgXcQ&t=42",
        "https://youtu.be/dQw4w9WgXcQ?si=abc",
        "https://www.youtube.com/embed/dQw4w9WgXcQ",
        "youtube.com/v/dQw4w9WgXcQ",
    ],
)
def test_extract_video_id_accepts_common_links(url: str):
    assert extract_video_id(url) == "dQw4w9WgXcQ"


@pytest.mark.parametrize("url", ["", "https://vimeo.com/12345", "https://youtu.be/short", "not a url"])
def test_extract_video_id_rejects_other_links(url: str):
    assert extract_video_id(url) is None


def test_parse_count_treats_missing_and_invalid_as_zero():
    assert parse_count("1500") == 1500
    assert parse_count(None) == 0
    assert parse_count("n/a") == 0


def test_best_thumbnail_prefers_largest_available():
    thumbnails = {
        "default": {"url": "https://i.ytimg.test/default.jpg"},
        "high": {"url": "https://i.ytimg.test/high.jpg"},
    }

    assert best_thumbnail_url(thumbnails) == "https://i.ytimg.test/high.jpg"
    assert best_thumbnail_url(None) is None
