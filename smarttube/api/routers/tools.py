from __future__ import annotations

from fastapi import APIRouter, Depends

from smarttube.api.deps import (
    get_analyze_video_seo_use_case,
    get_compare_titles_use_case,
    get_current_user,
    get_generate_description_use_case,
    get_generate_hashtags_use_case,
    get_generate_hooks_use_case,
    get_generate_keywords_use_case,
    get_generate_script_use_case,
    get_generate_titles_use_case,
    get_generate_video_ideas_use_case,
    get_optimize_description_use_case,
)
from smarttube.api.errors import to_http_error
from smarttube.api.schemas.tools import (
    AnalyzeVideoRequest,
    AnalyzeVideoResponse,
    CompareTitlesRequest,
    CompareTitlesResponse,
    GenerateDescriptionRequest,
    GenerateHashtagsRequest,
    GenerateHooksRequest,
    GenerateKeywordsRequest,
    GenerateScriptRequest,
    GenerateTitlesRequest,
    GenerateVideoIdeasRequest,
    ListGenerationResponse,
    OptimizeDescriptionRequest,
    TextGenerationResponse,
)
from smarttube.application.dto.content import (
    CompareTitlesInput,
    GenerateDescriptionInput,
    GenerateHashtagsInput,
    GenerateHooksInput,
    GenerateKeywordsInput,
    GenerateScriptInput,
    GenerateTitlesInput,
    GenerateVideoIdeasInput,
    OptimizeDescriptionInput,
)
from smarttube.application.dto.seo import AnalyzeVideoInput
from smarttube.application.use_cases.analyze_video_seo import AnalyzeVideoSeoUseCase
from smarttube.application.use_cases.compare_titles import CompareTitlesUseCase
from smarttube.application.use_cases.generate_description import GenerateDescriptionUseCase
from smarttube.application.use_cases.generate_hashtags import GenerateHashtagsUseCase
from smarttube.application.use_cases.generate_hooks import GenerateHooksUseCase
from smarttube.application.use_cases.generate_keywords import GenerateKeywordsUseCase
from smarttube.application.use_cases.generate_script import GenerateScriptUseCase
from smarttube.application.use_cases.generate_titles import GenerateTitlesUseCase
from smarttube.application.use_cases.generate_video_ideas import GenerateVideoIdeasUseCase
from smarttube.application.use_cases.optimize_description import OptimizeDescriptionUseCase
from smarttube.domain.entities.seo import VideoStatistics
from smarttube.domain.entities.user import User
from smarttube.domain.exceptions import DomainError


router = APIRouter()


@router.post("/v1/tools/titles", response_model=ListGenerationResponse)
def generate_titles(
    req: GenerateTitlesRequest,
    current_user: User = Depends(get_current_user),
    use_case: GenerateTitlesUseCase = Depends(get_generate_titles_use_case),
):
    try:
        output = use_case.execute(
            GenerateTitlesInput(
                user=current_user,
                title=req.title,
                keywords=req.keywords,
                audience=req.audience,
            )
        )
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return ListGenerationResponse.model_validate(output)


@router.post("/v1/tools/description", response_model=TextGenerationResponse)
def generate_description(
    req: GenerateDescriptionRequest,
    current_user: User = Depends(get_current_user),
    use_case: GenerateDescriptionUseCase = Depends(get_generate_description_use_case),
):
    try:
        output = use_case.execute(
            GenerateDescriptionInput(
                user=current_user,
                title=req.title,
                keywords=req.keywords,
                word_count=req.word_count,
            )
        )
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return TextGenerationResponse.model_validate(output)


@router.post("/v1/tools/hashtags", response_model=ListGenerationResponse)
def generate_hashtags(
    req: GenerateHashtagsRequest,
    current_user: User = Depends(get_current_user),
    use_case: GenerateHashtagsUseCase = Depends(get_generate_hashtags_use_case),
):
    try:
        output = use_case.execute(GenerateHashtagsInput(user=current_user, title=req.title))
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return ListGenerationResponse.model_validate(output)


@router.post("/v1/tools/keywords", response_model=ListGenerationResponse)
def generate_keywords(
    req: GenerateKeywordsRequest,
    current_user: User = Depends(get_current_user),
    use_case: GenerateKeywordsUseCase = Depends(get_generate_keywords_use_case),
):
    try:
        output = use_case.execute(GenerateKeywordsInput(user=current_user, topic=req.topic))
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return ListGenerationResponse.model_validate(output)


@router.post("/v1/tools/hooks", response_model=ListGenerationResponse)
def generate_hooks(
    req: GenerateHooksRequest,
    current_user: User = Depends(get_current_user),
    use_case: GenerateHooksUseCase = Depends(get_generate_hooks_use_case),
):
    try:
        output = use_case.execute(
            GenerateHooksInput(user=current_user, topic=req.topic, content_type=req.content_type)
        )
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return ListGenerationResponse.model_validate(output)


@router.post("/v1/tools/title-ab-test", response_model=CompareTitlesResponse)
def compare_titles(
    req: CompareTitlesRequest,
    current_user: User = Depends(get_current_user),
    use_case: CompareTitlesUseCase = Depends(get_compare_titles_use_case),
):
    try:
        output = use_case.execute(
            CompareTitlesInput(user=current_user, title_a=req.title_a, title_b=req.title_b)
        )
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return CompareTitlesResponse.model_validate(output)


@router.post("/v1/tools/description-optimizer", response_model=TextGenerationResponse)
def optimize_description(
    req: OptimizeDescriptionRequest,
    current_user: User = Depends(get_current_user),
    use_case: OptimizeDescriptionUseCase = Depends(get_optimize_description_use_case),
):
    try:
        output = use_case.execute(
            OptimizeDescriptionInput(
                user=current_user,
                current_description=req.current_description,
                keywords=req.keywords,
            )
        )
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return TextGenerationResponse.model_validate(output)


@router.post("/v1/tools/script", response_model=TextGenerationResponse)
def generate_script(
    req: GenerateScriptRequest,
    current_user: User = Depends(get_current_user),
    use_case: GenerateScriptUseCase = Depends(get_generate_script_use_case),
):
    try:
        output = use_case.execute(
            GenerateScriptInput(
                user=current_user,
                title=req.title,
                keywords=req.keywords,
                audience=req.audience,
                video_length=req.video_length,
                content_type=req.content_type,
            )
        )
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return TextGenerationResponse.model_validate(output)


@router.post("/v1/tools/video-ideas", response_model=TextGenerationResponse)
def generate_video_ideas(
    req: GenerateVideoIdeasRequest,
    current_user: User = Depends(get_current_user),
    use_case: GenerateVideoIdeasUseCase = Depends(get_generate_video_ideas_use_case),
):
    try:
        output = use_case.execute(GenerateVideoIdeasInput(user=current_user, channel_url=req.channel_url))
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return TextGenerationResponse.model_validate(output)


@router.post("/v1/tools/seo-analysis", response_model=AnalyzeVideoResponse)
def analyze_video_seo(
    req: AnalyzeVideoRequest,
    current_user: User = Depends(get_current_user),
    use_case: AnalyzeVideoSeoUseCase = Depends(get_analyze_video_seo_use_case),
):
    try:
        output = use_case.execute(
            AnalyzeVideoInput(
                user=current_user,
                title=req.title,
                description=req.description,
                tags=req.tags,
                statistics=VideoStatistics(
                    view_count=req.statistics.view_count,
                    like_count=req.statistics.like_count,
                    comment_count=req.statistics.comment_count,
                ),
                video_url=req.video_url,
            )
        )
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return AnalyzeVideoResponse.model_validate(output)
