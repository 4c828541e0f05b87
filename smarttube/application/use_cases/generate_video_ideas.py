from __future__ import annotations

from smarttube.application.dto.content import GenerateVideoIdeasInput, TextGenerationOutput
from smarttube.domain.exceptions import GenerationInputError
from smarttube.domain.services.content_cleanup import clean_video_ideas
from smarttube.domain.services.feature_limits import IDEATION_TOOL
from smarttube.domain.services.prompts import build_video_ideas_prompt, is_valid_channel_url

from .content_generation import GatedGeneration, require_text


IDEAS_MAX_TOKENS = 1500


class GenerateVideoIdeasUseCase:
    def __init__(self, *, generation: GatedGeneration):
        self._generation = generation

    def execute(self, command: GenerateVideoIdeasInput) -> TextGenerationOutput:
        channel_url = require_text(command.channel_url, "channel_url")
        if not is_valid_channel_url(channel_url):
            raise GenerationInputError("Please enter a valid YouTube channel URL.")
        ideas, usage = self._generation.run(
            user=command.user,
            feature=IDEATION_TOOL,
            messages=build_video_ideas_prompt(channel_url=channel_url),
            clean=clean_video_ideas,
            max_tokens=IDEAS_MAX_TOKENS,
        )
        return TextGenerationOutput(text=ideas, usage=usage)
