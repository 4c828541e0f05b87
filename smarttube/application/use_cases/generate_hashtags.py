from __future__ import annotations

from smarttube.application.dto.content import GenerateHashtagsInput, ListGenerationOutput
from smarttube.domain.services.content_cleanup import clean_hashtags
from smarttube.domain.services.feature_limits import HASHTAG_GENERATOR
from smarttube.domain.services.prompts import build_hashtags_prompt

from .content_generation import GatedGeneration, require_text


class GenerateHashtagsUseCase:
    def __init__(self, *, generation: GatedGeneration):
        self._generation = generation

    def execute(self, command: GenerateHashtagsInput) -> ListGenerationOutput:
        hashtags, usage = self._generation.run(
            user=command.user,
            feature=HASHTAG_GENERATOR,
            messages=build_hashtags_prompt(title=require_text(command.title, "title")),
            clean=clean_hashtags,
        )
        return ListGenerationOutput(items=hashtags, usage=usage)
