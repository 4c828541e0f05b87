from __future__ import annotations

import re


_VIDEO_ID = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)([^\"&?/\s]{11})"
)
_THUMBNAIL_SIZES = ("maxres", "high", "medium", "default")


def extract_video_id(url: str) -> str | None:
    """Returns the 11-character id from watch, embed and youtu.be links."""
    match = _VIDEO_ID.search(url or "")
    return match.group(1) if match else None


def parse_count(value: object) -> int:
    try:
        return max(int(str(value)), 0)
    except (TypeError, ValueError):
        return 0


def best_thumbnail_url(thumbnails: dict | None) -> str | None:
    if not isinstance(thumbnails, dict):
        return None
    for size in _THUMBNAIL_SIZES:
        entry = thumbnails.get(size)
        if isinstance(entry, dict) and entry.get("url"):
            return str(entry["url"])
    return None
