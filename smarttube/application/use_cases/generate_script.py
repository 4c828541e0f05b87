from __future__ import annotations

from smarttube.application.dto.content import GenerateScriptInput, TextGenerationOutput
from smarttube.domain.entities.content import SCRIPT_CONTENT_TYPES
from smarttube.domain.exceptions import GenerationInputError
from smarttube.domain.services.content_cleanup import clean_markdown_block
from smarttube.domain.services.feature_limits import SCRIPTING_TOOL
from smarttube.domain.services.prompts import build_script_prompt

from .content_generation import GatedGeneration, require_text


class GenerateScriptUseCase:
    def __init__(self, *, generation: GatedGeneration):
        self._generation = generation

    def execute(self, command: GenerateScriptInput) -> TextGenerationOutput:
        if command.content_type not in SCRIPT_CONTENT_TYPES:
            raise GenerationInputError(f"content_type must be one of: {', '.join(SCRIPT_CONTENT_TYPES)}.")
        messages = build_script_prompt(
            title=require_text(command.title, "title"),
            keywords=require_text(command.keywords, "keywords"),
            audience=require_text(command.audience, "audience"),
            video_length=require_text(command.video_length, "video_length"),
            content_type=command.content_type,
        )
        script, usage = self._generation.run(
            user=command.user,
            feature=SCRIPTING_TOOL,
            messages=messages,
            clean=clean_markdown_block,
        )
        return TextGenerationOutput(text=script, usage=usage)
