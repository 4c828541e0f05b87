from __future__ import annotations

from smarttube.application.dto.content import GenerateTitlesInput, ListGenerationOutput
from smarttube.domain.services.content_cleanup import clean_titles
from smarttube.domain.services.feature_limits import TITLE_GENERATOR
from smarttube.domain.services.prompts import build_titles_prompt

from .content_generation import GatedGeneration, require_text


class GenerateTitlesUseCase:
    def __init__(self, *, generation: GatedGeneration):
        self._generation = generation

    def execute(self, command: GenerateTitlesInput) -> ListGenerationOutput:
        messages = build_titles_prompt(
            title=require_text(command.title, "title"),
            keywords=require_text(command.keywords, "keywords"),
            audience=require_text(command.audience, "audience"),
        )
        titles, usage = self._generation.run(
            user=command.user,
            feature=TITLE_GENERATOR,
            messages=messages,
            clean=clean_titles,
        )
        return ListGenerationOutput(items=titles, usage=usage)
