from __future__ import annotations

from typing import Protocol

from smarttube.domain.entities.seo import VideoDetails


class VideoLookupPort(Protocol):
    def get_video(self, *, video_id: str) -> VideoDetails:
        ...
