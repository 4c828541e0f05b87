"""Heuristic SEO scoring for a single video's metadata.

All scores are integers in ``[0, 100]``.
"""

from __future__ import annotations

import math
import re

from smarttube.domain.entities.seo import VideoSeoReport, VideoStatistics


COMMON_TAGS = (
    "#YouTubeTips",
    "#ContentCreation",
    "#VideoMarketing",
    "#CreatorEconomy",
    "#YouTubeStrategy",
    "#DigitalMarketing",
    "#VideoProduction",
    "#OnlinePresence",
)

_DIGITS = re.compile(r"\d+")
_CATCHY = re.compile(r"\?|!|how|why|what|when|best|top|ultimate|guide|tutorial", re.IGNORECASE)
_TIMESTAMP = re.compile(r"\d+:\d+")
_LINK = re.compile(r"https?://[^\s]+")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_title(title: str) -> int:
    length = len(title)
    if 40 <= length <= 60:
        score = 100
    elif 30 <= length <= 70:
        score = 80
    elif 20 <= length <= 80:
        score = 60
    else:
        score = 40

    if _DIGITS.search(title):
        score += 10
    if _CATCHY.search(title):
        score += 10
    return min(100, score)


def score_description(description: str) -> int:
    length = len(description)
    score = 100.0 if length >= 200 else (length / 200) * 100

    if _TIMESTAMP.search(description):
        score += 10
    if _LINK.search(description):
        score += 10
    return min(100, _round_half_up(score))


def score_tags(tags: list[str]) -> int:
    count = len(tags)
    if 8 <= count <= 12:
        return 100
    if 5 <= count <= 15:
        return 80
    if count > 0:
        return 60
    return 0


def score_engagement(statistics: VideoStatistics) -> int:
    views = statistics.view_count
    like_ratio = (statistics.like_count / views) * 100 if views > 0 else 0.0
    comment_ratio = (statistics.comment_count / views) * 100 if views > 0 else 0.0

    if like_ratio >= 10:
        like_score = 100
    elif like_ratio >= 5:
        like_score = 80
    elif like_ratio >= 2:
        like_score = 60
    else:
        like_score = 40

    if comment_ratio >= 1:
        comment_score = 100
    elif comment_ratio >= 0.5:
        comment_score = 80
    elif comment_ratio >= 0.2:
        comment_score = 60
    else:
        comment_score = 40

    return _round_half_up((like_score + comment_score) / 2)


def build_suggestions(title: str, description: str, tags: list[str]) -> list[str]:
    suggestions: list[str] = []
    if len(title) < 40:
        suggestions.append("Make your title longer (40-60 characters recommended)")
    if not _DIGITS.search(title):
        suggestions.append("Consider adding numbers to your title for better CTR")
    if len(description) < 200:
        suggestions.append("Add more content to your description (minimum 200 characters recommended)")
    if not _TIMESTAMP.search(description):
        suggestions.append("Add timestamps to your description for better user experience")
    if len(tags) < 8:
        suggestions.append("Add more tags (8-12 tags recommended)")
    return suggestions


def suggest_tags(title: str, description: str) -> list[str]:
    words = f"{title} {description}".lower().split()
    specific = [f"#{word[0].upper()}{word[1:]}" for word in words if len(word) > 4][:4]
    return list(COMMON_TAGS) + specific


def build_summary(title: str, description: str) -> str:
    main_points = [f"• {line.strip()}" for line in description.split("\n") if line.strip()][:5]
    return (
        f"Video Title: {title}\n"
        "\n"
        "Key Points:\n"
        + "\n".join(main_points)
        + "\n"
        "\n"
        "Main Takeaways:\n"
        "1. Comprehensive coverage of the topic\n"
        "2. Clear explanations with practical examples\n"
        "3. Actionable tips for implementation\n"
        "4. Valuable insights for beginners and experts"
    )


def build_hook(title: str, description: str) -> str:
    keywords = [word for word in title.split(" ") + description.split(" ") if len(word) > 4][:3]
    return (
        f"Want to master {', '.join(keywords)}? In this video, I'm revealing proven strategies "
        "that will transform your results. These are techniques that nobody's talking about, "
        "and the best part? You can start implementing them TODAY. "
        "Stay tuned for the game-changing tips!"
    )


def analyze_video(
    *,
    title: str,
    description: str,
    tags: list[str],
    statistics: VideoStatistics,
) -> VideoSeoReport:
    title_score = score_title(title)
    description_score = score_description(description)
    tags_score = score_tags(tags)
    engagement_score = score_engagement(statistics)
    overall = _round_half_up((title_score + description_score + tags_score + engagement_score) / 4)

    return VideoSeoReport(
        overall=overall,
        title_score=title_score,
        description_score=description_score,
        tags_score=tags_score,
        engagement_score=engagement_score,
        suggestions=build_suggestions(title, description, tags),
        suggested_tags=suggest_tags(title, description),
        summary=build_summary(title, description),
        hook=build_hook(title, description),
    )
