from __future__ import annotations

from smarttube.application.dto.content import GenerateKeywordsInput, ListGenerationOutput
from smarttube.domain.services.content_cleanup import clean_keywords
from smarttube.domain.services.feature_limits import KEYWORD_IDEAS
from smarttube.domain.services.prompts import build_keywords_prompt

from .content_generation import GatedGeneration, require_text


class GenerateKeywordsUseCase:
    def __init__(self, *, generation: GatedGeneration):
        self._generation = generation

    def execute(self, command: GenerateKeywordsInput) -> ListGenerationOutput:
        keywords, usage = self._generation.run(
            user=command.user,
            feature=KEYWORD_IDEAS,
            messages=build_keywords_prompt(topic=require_text(command.topic, "topic")),
            clean=clean_keywords,
        )
        return ListGenerationOutput(items=keywords, usage=usage)
