from __future__ import annotations

from smarttube.application.dto.content import GenerateHooksInput, ListGenerationOutput
from smarttube.domain.entities.content import HOOK_CONTENT_TYPES
from smarttube.domain.exceptions import GenerationInputError
from smarttube.domain.services.content_cleanup import clean_hooks
from smarttube.domain.services.feature_limits import VIDEO_HOOK_GENERATOR
from smarttube.domain.services.prompts import build_hooks_prompt

from .content_generation import GatedGeneration, require_text


class GenerateHooksUseCase:
    def __init__(self, *, generation: GatedGeneration):
        self._generation = generation

    def execute(self, command: GenerateHooksInput) -> ListGenerationOutput:
        if command.content_type not in HOOK_CONTENT_TYPES:
            raise GenerationInputError(f"content_type must be one of: {', '.join(HOOK_CONTENT_TYPES)}.")
        hooks, usage = self._generation.run(
            user=command.user,
            feature=VIDEO_HOOK_GENERATOR,
            messages=build_hooks_prompt(
                topic=require_text(command.topic, "topic"),
                content_type=command.content_type,
            ),
            clean=clean_hooks,
        )
        return ListGenerationOutput(items=hooks, usage=usage)
