from __future__ import annotations

from smarttube.application.dto.content import GenerateDescriptionInput, TextGenerationOutput
from smarttube.domain.exceptions import GenerationInputError
from smarttube.domain.services.content_cleanup import clean_markdown_block
from smarttube.domain.services.feature_limits import DESCRIPTION_GENERATOR
from smarttube.domain.services.prompts import build_description_prompt

from .content_generation import GatedGeneration, require_text


MAX_WORD_COUNT = 2000


class GenerateDescriptionUseCase:
    def __init__(self, *, generation: GatedGeneration):
        self._generation = generation

    def execute(self, command: GenerateDescriptionInput) -> TextGenerationOutput:
        if command.word_count <= 0 or command.word_count > MAX_WORD_COUNT:
            raise GenerationInputError(f"word_count must be between 1 and {MAX_WORD_COUNT}.")
        messages = build_description_prompt(
            title=require_text(command.title, "title"),
            keywords=require_text(command.keywords, "keywords"),
            word_count=command.word_count,
        )
        text, usage = self._generation.run(
            user=command.user,
            feature=DESCRIPTION_GENERATOR,
            messages=messages,
            clean=clean_markdown_block,
        )
        return TextGenerationOutput(text=text, usage=usage)
