from __future__ import annotations

from fastapi import HTTPException

from smarttube.domain.exceptions import (
    AdminAccessRequiredError,
    AnnouncementInputError,
    AnnouncementNotFoundError,
    BillingError,
    DomainError,
    EmailAlreadyExistsError,
    EmptyGenerationError,
    FeatureDisabledError,
    FeatureLimitConflictError,
    FeatureLimitExceededError,
    GenerationInputError,
    GoalConflictError,
    GoalInputError,
    GoalNotFoundError,
    GoalsTableMissingError,
    InvalidCredentialsError,
    LlmConfigurationError,
    LlmRequestError,
    MailDeliveryError,
    PasswordResetTokenInvalidError,
    PlanConflictError,
    PlanNotFoundError,
    RefreshSessionInvalidError,
    SupportConfigurationError,
    SupportRelayError,
    UnknownFeatureError,
    UserBannedError,
    UserInactiveError,
    UserNotFoundError,
    VideoLookupConfigurationError,
    VideoLookupError,
    VideoNotFoundError,
)
from smarttube.domain.services.llm_errors import describe_llm_error


STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (GenerationInputError, 400),
    (GoalInputError, 400),
    (AnnouncementInputError, 400),
    (PasswordResetTokenInvalidError, 400),
    (BillingError, 400),
    (InvalidCredentialsError, 401),
    (RefreshSessionInvalidError, 401),
    (UserInactiveError, 403),
    (UserBannedError, 403),
    (AdminAccessRequiredError, 403),
    (FeatureDisabledError, 403),
    (UnknownFeatureError, 404),
    (UserNotFoundError, 404),
    (PlanNotFoundError, 404),
    (AnnouncementNotFoundError, 404),
    (GoalNotFoundError, 404),
    (VideoNotFoundError, 404),
    (EmailAlreadyExistsError, 409),
    (PlanConflictError, 409),
    (FeatureLimitConflictError, 409),
    (GoalConflictError, 409),
    (FeatureLimitExceededError, 429),
    (LlmRequestError, 502),
    (EmptyGenerationError, 502),
    (SupportRelayError, 502),
    (MailDeliveryError, 502),
    (VideoLookupError, 502),
    (LlmConfigurationError, 503),
    (SupportConfigurationError, 503),
    (GoalsTableMissingError, 503),
    (VideoLookupConfigurationError, 503),
)


def status_for(exc: DomainError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 400


def to_http_error(exc: Exception) -> HTTPException:
    """Translate a domain or validation error raised by a use case."""
    if isinstance(exc, LlmRequestError):
        return HTTPException(status_code=502, detail=describe_llm_error(str(exc)))
    if isinstance(exc, DomainError):
        return HTTPException(status_code=status_for(exc), detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))
