from __future__ import annotations

from smarttube.application.dto.content import OptimizeDescriptionInput, TextGenerationOutput
from smarttube.domain.services.content_cleanup import clean_markdown_block
from smarttube.domain.services.feature_limits import DESCRIPTION_OPTIMIZER
from smarttube.domain.services.prompts import build_description_optimizer_prompt

from .content_generation import GatedGeneration, require_text


class OptimizeDescriptionUseCase:
    def __init__(self, *, generation: GatedGeneration):
        self._generation = generation

    def execute(self, command: OptimizeDescriptionInput) -> TextGenerationOutput:
        messages = build_description_optimizer_prompt(
            current_description=require_text(command.current_description, "current_description"),
            keywords=require_text(command.keywords, "keywords"),
        )
        text, usage = self._generation.run(
            user=command.user,
            feature=DESCRIPTION_OPTIMIZER,
            messages=messages,
            clean=clean_markdown_block,
        )
        return TextGenerationOutput(text=text, usage=usage)
