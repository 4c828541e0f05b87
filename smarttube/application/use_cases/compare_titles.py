from __future__ import annotations

import random

from smarttube.application.dto.content import CompareTitlesInput, CompareTitlesOutput
from smarttube.domain.services.feature_limits import TITLE_AB_TESTER
from smarttube.domain.services.prompts import build_title_comparison_prompt
from smarttube.domain.services.title_comparison import build_title_comparison

from .content_generation import GatedGeneration, require_text


class CompareTitlesUseCase:
    def __init__(self, *, generation: GatedGeneration, rng: random.Random | None = None):
        self._generation = generation
        self._rng = rng or random.Random()

    def execute(self, command: CompareTitlesInput) -> CompareTitlesOutput:
        title_a = require_text(command.title_a, "title_a")
        title_b = require_text(command.title_b, "title_b")

        def _clean(content: str) -> str:
            return content.strip()

        content, usage = self._generation.run(
            user=command.user,
            feature=TITLE_AB_TESTER,
            messages=build_title_comparison_prompt(title_a=title_a, title_b=title_b),
            clean=_clean,
        )
        comparison = build_title_comparison(title_a=title_a, title_b=title_b, content=content, rng=self._rng)
        return CompareTitlesOutput(
            winner=comparison.winner,
            score_a=comparison.score_a,
            score_b=comparison.score_b,
            reason=comparison.reason,
            feedback=comparison.feedback,
            usage=usage,
        )
