from __future__ import annotations

import random

import pytest

from smarttube.application.dto.content import (
    CompareTitlesInput,
    GenerateTitlesInput,
    GenerateVideoIdeasInput,
)
from smarttube.application.dto.seo import AnalyzeVideoInput
from smarttube.application.use_cases.analyze_video_seo import AnalyzeVideoSeoUseCase
from smarttube.application.use_cases.compare_titles import CompareTitlesUseCase
from smarttube.application.use_cases.content_generation import GatedGeneration
from smarttube.application.use_cases.feature_gate import FeatureGate
from smarttube.application.use_cases.generate_titles import GenerateTitlesUseCase
from smarttube.application.use_cases.generate_video_ideas import GenerateVideoIdeasUseCase
from smarttube.domain.entities.feature import UserLimits
from smarttube.domain.entities.seo import VideoDetails, VideoStatistics
from smarttube.domain.exceptions import (
    EmptyGenerationError,
    FeatureDisabledError,
    FeatureLimitExceededError,
    GenerationInputError,
)
from smarttube.domain.services.feature_limits import (
    IDEATION_TOOL,
    TITLE_AB_TESTER,
    TITLE_GENERATOR,
    YOUTUBE_TOOLS,
)

from tests.fakes import TODAY, FakeLlm, FakeUsagePort, make_user


def _generation(content: str, features: dict[str, int]):
    usage_port = FakeUsagePort(UserLimits(plan_name="Free", plan_features=features, custom_limits={}))
    gate = FeatureGate(usage_port=usage_port, today=lambda: TODAY)
    llm = FakeLlm(content)
    return GatedGeneration(llm=llm, feature_gate=gate), llm, usage_port


def _titles_input() -> GenerateTitlesInput:
    return GenerateTitlesInput(user=make_user(), title="Budget travel", keywords="cheap flights", audience="students")


def test_generate_titles_cleans_and_counts_usage():
    generation, llm, usage_port = _generation('\\boxed{1. "Fly for less"\n2. Travel cheap}', {TITLE_GENERATOR: 5})

    output = GenerateTitlesUseCase(generation=generation).execute(_titles_input())

    assert output.items == ["Fly for less", "Travel cheap"]
    assert output.usage.current_usage == 1
    assert len(llm.calls) == 1
    assert len(usage_port.saved) == 1


def test_empty_answer_does_not_count_usage():
    generation, _, usage_port = _generation("\\boxed{}", {TITLE_GENERATOR: 5})

    with pytest.raises(EmptyGenerationError):
        GenerateTitlesUseCase(generation=generation).execute(_titles_input())

    assert usage_port.saved == []


def test_limit_reached_skips_model_call():
    generation, llm, _ = _generation("1. A title", {TITLE_GENERATOR: 1})
    use_case = GenerateTitlesUseCase(generation=generation)
    use_case.execute(_titles_input())

    with pytest.raises(FeatureLimitExceededError):
        use_case.execute(_titles_input())

    assert len(llm.calls) == 1


def test_disabled_feature_is_refused():
    generation, llm, _ = _generation("1. A title", {TITLE_GENERATOR: 0})

    with pytest.raises(FeatureDisabledError):
        GenerateTitlesUseCase(generation=generation).execute(_titles_input())

    assert llm.calls == []


def test_missing_input_is_rejected_before_gate():
    generation, llm, _ = _generation("1. A title", {TITLE_GENERATOR: 5})

    with pytest.raises(GenerationInputError):
        GenerateTitlesUseCase(generation=generation).execute(
            GenerateTitlesInput(user=make_user(), title="  ", keywords="k", audience="a")
        )

    assert llm.calls == []


def test_compare_titles_builds_scores():
    generation, _, _ = _generation("Best Title: B\nReason: Punchier.", {TITLE_AB_TESTER: 5})
    use_case = CompareTitlesUseCase(generation=generation, rng=random.Random(7))

    output = use_case.execute(CompareTitlesInput(user=make_user(), title_a="Title one", title_b="Title two"))

    assert output.winner == "B"
    assert output.reason == "Punchier."
    assert output.score_a + output.score_b == 100


def test_video_ideas_validates_url_and_uses_larger_budget():
    generation, llm, _ = _generation("## Idea 1\nDo it", {IDEATION_TOOL: 5})
    use_case = GenerateVideoIdeasUseCase(generation=generation)

    with pytest.raises(GenerationInputError):
        use_case.execute(GenerateVideoIdeasInput(user=make_user(), channel_url="example.org/me"))

    output = use_case.execute(GenerateVideoIdeasInput(user=make_user(), channel_url="https://youtube.com/@me"))

    assert output.text == "## Idea 1\nDo it"
    assert llm.calls[0][1] == 1500


def test_analyze_video_seo_counts_youtube_tools():
    usage_port = FakeUsagePort(UserLimits(plan_name="Free", plan_features={YOUTUBE_TOOLS: 3}, custom_limits={}))
    gate = FeatureGate(usage_port=usage_port, today=lambda: TODAY)

    output = AnalyzeVideoSeoUseCase(feature_gate=gate).execute(
        AnalyzeVideoInput(
            user=make_user(),
            title="a" * 50,
            description="",
            tags=[" tag ", ""],
            statistics=VideoStatistics(view_count=100, like_count=10, comment_count=1),
        )
    )

    assert output.report.title_score == 100
    assert output.report.tags_score == 60
    assert output.usage.current_usage == 1


class FakeVideoLookup:
    def __init__(self, video: VideoDetails):
        self.video = video
        self.requested: list[str] = []

    def get_video(self, *, video_id: str) -> VideoDetails:
        self.requested.append(video_id)
        return self.video


def _video() -> VideoDetails:
    return VideoDetails(
        video_id="dQw4w9WgXcQ",
        title="a" * 50,
        description="",
        tags=["travel"] * 8,
        statistics=VideoStatistics(view_count=100, like_count=10, comment_count=1),
        channel_title="Wander Cheap",
        published_at="2026-01-02T10:00:00Z",
        duration="PT8M12S",
        thumbnail_url=None,
    )


def test_analyze_video_seo_fetches_video_by_url():
    usage_port = FakeUsagePort(UserLimits(plan_name="Free", plan_features={YOUTUBE_TOOLS: 3}, custom_limits={}))
    gate = FeatureGate(usage_port=usage_port, today=lambda: TODAY)
    lookup = FakeVideoLookup(_video())

    output = AnalyzeVideoSeoUseCase(feature_gate=gate, video_lookup=lookup).execute(
        AnalyzeVideoInput(
            user=make_user(),
            title="",
            description="",
            tags=[],
            statistics=VideoStatistics(view_count=0, like_count=0, comment_count=0),
            video_url="https://youtu.be/dQw4w9WgXcQ",
        )
    )

    assert lookup.requested == ["dQw4w9WgXcQ"]
    assert output.video is lookup.video
    assert output.report.title_score == 100
    assert output.report.tags_score == 100
    assert output.report.engagement_score == 100
    assert output.usage.current_usage == 1


def test_analyze_video_seo_rejects_invalid_url_without_lookup():
    usage_port = FakeUsagePort(UserLimits(plan_name="Free", plan_features={YOUTUBE_TOOLS: 3}, custom_limits={}))
    gate = FeatureGate(usage_port=usage_port, today=lambda: TODAY)
    lookup = FakeVideoLookup(_video())

    with pytest.raises(GenerationInputError):
        AnalyzeVideoSeoUseCase(feature_gate=gate, video_lookup=lookup).execute(
            AnalyzeVideoInput(
                user=make_user(),
                title="",
                description="",
                tags=[],
                statistics=VideoStatistics(view_count=0, like_count=0, comment_count=0),
                video_url="https://vimeo.com/12345",
            )
        )

    assert lookup.requested == []
    assert usage_port.saved == []
